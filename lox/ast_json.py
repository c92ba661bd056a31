"""JSON serialization/deserialization for the Lox AST.

This module converts between Lox AST dataclasses and plain Python
dict/list structures suitable for JSON encoding, so a tree parsed once
can be handed to the resolver and interpreter later. Every node is
written as an object with a ``type`` key naming its class, a ``line``
key, and one key per field.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict

from .ast import (
    Node,
    Program,
    Block,
    ExprStmt,
    PrintStmt,
    VarDecl,
    FuncDecl,
    ClassDecl,
    IfStmt,
    WhileStmt,
    ReturnStmt,
    Literal,
    Grouping,
    Ident,
    Assign,
    UnaryOp,
    BinaryOp,
    LogicalOp,
    Call,
    Member,
    SetMember,
    This,
    Super,
)

NODE_TYPES: Dict[str, type] = {
    cls.__name__: cls
    for cls in (
        Program, Block, ExprStmt, PrintStmt, VarDecl, FuncDecl, ClassDecl,
        IfStmt, WhileStmt, ReturnStmt, Literal, Grouping, Ident, Assign,
        UnaryOp, BinaryOp, LogicalOp, Call, Member, SetMember, This, Super,
    )
}


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None or isinstance(node, (bool, int, float, str)):
        return node
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]
    if isinstance(node, Node):
        obj: Dict[str, Any] = {"type": type(node).__name__}
        for f in fields(node):
            obj[f.name] = ast_to_obj(getattr(node, f.name))
        return obj
    raise TypeError(f"cannot serialize {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, list):
        return [ast_from_obj(o) for o in obj]
    if isinstance(obj, dict):
        type_name = obj.get("type")
        cls = NODE_TYPES.get(type_name)
        if cls is None:
            raise ValueError(f"unknown node type {type_name!r}")
        kwargs = {f.name: ast_from_obj(obj.get(f.name)) for f in fields(cls) if f.name in obj}
        if cls is Literal and isinstance(kwargs.get("value"), int) and not isinstance(kwargs["value"], bool):
            # Lox numbers are always floats.
            kwargs["value"] = float(kwargs["value"])
        return cls(**kwargs)
    raise ValueError(f"cannot deserialize {type(obj).__name__}")
