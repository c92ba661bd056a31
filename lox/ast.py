"""Abstract Syntax Tree (AST) definitions for the Lox language.

The AST classes defined in this module represent the syntactic structure
of parsed Lox programs. Both the resolver and the interpreter walk these
nodes; each node corresponds to a construct in the Lox grammar.

Nodes compare and hash by identity (``eq=False``): the resolver keys its
depth map on the node object itself, so two textually identical
references in different places stay distinct.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(eq=False)
class Node:
    """Base class for all AST nodes."""
    line: int = field(default=0, kw_only=True)


# Statements

@dataclass(eq=False)
class Program(Node):
    body: List[Node]


@dataclass(eq=False)
class Block(Node):
    statements: List[Node]


@dataclass(eq=False)
class ExprStmt(Node):
    expr: Node


@dataclass(eq=False)
class PrintStmt(Node):
    expr: Node


@dataclass(eq=False)
class VarDecl(Node):
    name: str
    expr: Optional[Node]  # initializer


@dataclass(eq=False)
class FuncDecl(Node):
    name: str
    params: List[str]
    body: List[Node]


@dataclass(eq=False)
class ClassDecl(Node):
    name: str
    superclass: Optional['Ident']
    methods: List[FuncDecl]


@dataclass(eq=False)
class IfStmt(Node):
    condition: Node
    then_branch: Node
    else_branch: Optional[Node]


@dataclass(eq=False)
class WhileStmt(Node):
    condition: Node
    body: Node


@dataclass(eq=False)
class ReturnStmt(Node):
    value: Optional[Node]


# Expressions

@dataclass(eq=False)
class Literal(Node):
    value: Any  # None, bool, float or str


@dataclass(eq=False)
class Grouping(Node):
    expr: Node


@dataclass(eq=False)
class Ident(Node):
    name: str


@dataclass(eq=False)
class Assign(Node):
    name: str
    value: Node


@dataclass(eq=False)
class UnaryOp(Node):
    op: str
    operand: Node


@dataclass(eq=False)
class BinaryOp(Node):
    op: str
    left: Node
    right: Node


@dataclass(eq=False)
class LogicalOp(Node):
    op: str  # 'and' or 'or'
    left: Node
    right: Node


@dataclass(eq=False)
class Call(Node):
    func: Node
    args: List[Node]


@dataclass(eq=False)
class Member(Node):
    target: Node
    name: str


@dataclass(eq=False)
class SetMember(Node):
    target: Node
    name: str
    value: Node


@dataclass(eq=False)
class This(Node):
    pass


@dataclass(eq=False)
class Super(Node):
    method: str
