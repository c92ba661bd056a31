"""Render a Lox syntax tree in parenthesized prefix form, e.g. `(+ 1 (group 2))`."""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Program, Block, ExprStmt, PrintStmt, VarDecl, FuncDecl, ClassDecl,
    IfStmt, WhileStmt, ReturnStmt, Literal, Grouping, Ident, Assign,
    UnaryOp, BinaryOp, LogicalOp, Call, Member, SetMember, This, Super, Node,
)
from .types import to_string


def parenthesize(name: str, *parts: Optional[Node]) -> str:
    pieces = [name] + [print_ast(p) for p in parts if p is not None]
    return '(' + ' '.join(pieces) + ')'


def print_program(program: Program) -> str:
    return '\n'.join(print_ast(stmt) for stmt in program.body)


def print_ast(node: Node) -> str:
    if isinstance(node, Literal):
        if isinstance(node.value, str):
            return f'"{node.value}"'
        return to_string(node.value)
    if isinstance(node, Grouping):
        return parenthesize('group', node.expr)
    if isinstance(node, UnaryOp):
        return parenthesize(node.op, node.operand)
    if isinstance(node, (BinaryOp, LogicalOp)):
        return parenthesize(node.op, node.left, node.right)
    if isinstance(node, Ident):
        return node.name
    if isinstance(node, Assign):
        return parenthesize(f'= {node.name}', node.value)
    if isinstance(node, Call):
        return parenthesize('call', node.func, *node.args)
    if isinstance(node, Member):
        return parenthesize(f'. {node.name}', node.target)
    if isinstance(node, SetMember):
        return parenthesize(f'.= {node.name}', node.target, node.value)
    if isinstance(node, This):
        return 'this'
    if isinstance(node, Super):
        return f'(super {node.method})'
    if isinstance(node, ExprStmt):
        return parenthesize(';', node.expr)
    if isinstance(node, PrintStmt):
        return parenthesize('print', node.expr)
    if isinstance(node, VarDecl):
        return parenthesize(f'var {node.name}', node.expr)
    if isinstance(node, Block):
        return parenthesize('block', *node.statements)
    if isinstance(node, IfStmt):
        return parenthesize('if', node.condition, node.then_branch, node.else_branch)
    if isinstance(node, WhileStmt):
        return parenthesize('while', node.condition, node.body)
    if isinstance(node, ReturnStmt):
        return parenthesize('return', node.value)
    if isinstance(node, FuncDecl):
        return _function('fun', node)
    if isinstance(node, ClassDecl):
        header = f'class {node.name}'
        if node.superclass is not None:
            header += f' < {node.superclass.name}'
        methods: List[str] = [_function('method', m) for m in node.methods]
        return '(' + ' '.join([header] + methods) + ')'
    raise NotImplementedError(f"print_ast: unexpected node type {type(node)}")


def _function(keyword: str, node: FuncDecl) -> str:
    params = ' '.join(node.params)
    body = ' '.join(print_ast(stmt) for stmt in node.body)
    head = f'{keyword} {node.name} ({params})'
    return f'({head} {body})' if body else f'({head})'
