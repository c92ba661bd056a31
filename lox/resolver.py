"""Static resolution pass for Lox programs.

Before anything runs, the resolver walks the whole tree with a stack of
scopes that mirrors the environments the interpreter will create. For
every variable reference, assignment, `this` and `super` it records how
many scopes lie between the use and its binding. References it cannot
find in any local scope are left out of the map and are treated as
globals at runtime.

Scoping mistakes are collected as diagnostics rather than raised, so one
pass reports every error in the program.
"""

from __future__ import annotations

import enum
from typing import Callable, Dict, List, Optional

from .ast import (
    Program, Block, ExprStmt, PrintStmt, VarDecl, FuncDecl, ClassDecl,
    IfStmt, WhileStmt, ReturnStmt, Literal, Grouping, Ident, Assign,
    UnaryOp, BinaryOp, LogicalOp, Call, Member, SetMember, This, Super, Node,
)
from .errors import Diagnostic
from .runtime import INITIALIZER_NAME


class FunctionKind(enum.Enum):
    NONE = enum.auto()
    FUNCTION = enum.auto()
    INITIALIZER = enum.auto()
    METHOD = enum.auto()


class ClassKind(enum.Enum):
    NONE = enum.auto()
    CLASS = enum.auto()
    SUBCLASS = enum.auto()


class Resolver:
    """Computes the resolved-depth map for a syntax tree."""
    def __init__(self, debug: Optional[Callable[[int, str], None]] = None):
        # Each scope maps a name to True once its initializer has finished.
        self.scopes: List[Dict[str, bool]] = []
        self.locals: Dict[Node, int] = {}
        self.diagnostics: List[Diagnostic] = []
        self.current_function = FunctionKind.NONE
        self.current_class = ClassKind.NONE
        self._debug = debug

    @property
    def had_error(self) -> bool:
        return bool(self.diagnostics)

    def debug(self, level: int, msg: str) -> None:
        if self._debug is not None:
            self._debug(level, msg)

    def error(self, node: Node, message: str) -> None:
        self.diagnostics.append(Diagnostic(node.line, message))

    # Public API
    def resolve(self, program: Program) -> Dict[Node, int]:
        self.resolve_statements(program.body)
        self.debug(1, f"resolved {len(self.locals)} local references, {len(self.diagnostics)} error(s)")
        return self.locals

    def resolve_statements(self, statements: List[Node]) -> None:
        for stmt in statements:
            self.resolve_stmt(stmt)

    # Scopes
    def begin_scope(self) -> None:
        self.scopes.append({})

    def end_scope(self) -> None:
        self.scopes.pop()

    def declare(self, node: Node, name: str) -> None:
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if name in scope:
            self.error(node, "Already a variable with this name in this scope.")
        scope[name] = False

    def define(self, name: str) -> None:
        if not self.scopes:
            return
        self.scopes[-1][name] = True

    def resolve_local(self, node: Node, name: str) -> None:
        for depth, scope in enumerate(reversed(self.scopes)):
            if name in scope:
                self.locals[node] = depth
                self.debug(2, f"resolve {name} at line {node.line} -> depth {depth}")
                return
        # Not found: global.

    # Statements
    def resolve_stmt(self, node: Node) -> None:
        if isinstance(node, Block):
            self.begin_scope()
            self.resolve_statements(node.statements)
            self.end_scope()
            return
        if isinstance(node, VarDecl):
            self.declare(node, node.name)
            if node.expr is not None:
                self.resolve_expr(node.expr)
            self.define(node.name)
            return
        if isinstance(node, FuncDecl):
            # Defined before the body so the function can recurse.
            self.declare(node, node.name)
            self.define(node.name)
            self.resolve_function(node, FunctionKind.FUNCTION)
            return
        if isinstance(node, ClassDecl):
            self.resolve_class(node)
            return
        if isinstance(node, ExprStmt):
            self.resolve_expr(node.expr)
            return
        if isinstance(node, PrintStmt):
            self.resolve_expr(node.expr)
            return
        if isinstance(node, IfStmt):
            self.resolve_expr(node.condition)
            self.resolve_stmt(node.then_branch)
            if node.else_branch is not None:
                self.resolve_stmt(node.else_branch)
            return
        if isinstance(node, WhileStmt):
            self.resolve_expr(node.condition)
            self.resolve_stmt(node.body)
            return
        if isinstance(node, ReturnStmt):
            if self.current_function is FunctionKind.NONE:
                self.error(node, "Can't return from top-level code.")
            if node.value is not None:
                if self.current_function is FunctionKind.INITIALIZER:
                    self.error(node, "Can't return a value from an initializer.")
                self.resolve_expr(node.value)
            return
        raise NotImplementedError(f"resolve_stmt: unexpected node type {type(node)}")

    def resolve_function(self, node: FuncDecl, kind: FunctionKind) -> None:
        enclosing_function = self.current_function
        self.current_function = kind
        self.begin_scope()
        for param in node.params:
            self.declare(node, param)
            self.define(param)
        self.resolve_statements(node.body)
        self.end_scope()
        self.current_function = enclosing_function

    def resolve_class(self, node: ClassDecl) -> None:
        enclosing_class = self.current_class
        self.current_class = ClassKind.CLASS
        self.declare(node, node.name)
        self.define(node.name)

        if node.superclass is not None:
            if node.superclass.name == node.name:
                self.error(node.superclass, "A class can't inherit from itself.")
            self.current_class = ClassKind.SUBCLASS
            self.resolve_expr(node.superclass)
            self.begin_scope()
            self.scopes[-1]['super'] = True

        self.begin_scope()
        self.scopes[-1]['this'] = True
        for method in node.methods:
            if method.name == INITIALIZER_NAME:
                kind = FunctionKind.INITIALIZER
            else:
                kind = FunctionKind.METHOD
            self.resolve_function(method, kind)
        self.end_scope()

        if node.superclass is not None:
            self.end_scope()
        self.current_class = enclosing_class

    # Expressions
    def resolve_expr(self, node: Node) -> None:
        if isinstance(node, Ident):
            if self.scopes and self.scopes[-1].get(node.name) is False:
                self.error(node, "Can't read local variable in its own initializer.")
            self.resolve_local(node, node.name)
            return
        if isinstance(node, Assign):
            self.resolve_expr(node.value)
            self.resolve_local(node, node.name)
            return
        if isinstance(node, (BinaryOp, LogicalOp)):
            self.resolve_expr(node.left)
            self.resolve_expr(node.right)
            return
        if isinstance(node, UnaryOp):
            self.resolve_expr(node.operand)
            return
        if isinstance(node, Grouping):
            self.resolve_expr(node.expr)
            return
        if isinstance(node, Call):
            self.resolve_expr(node.func)
            for arg in node.args:
                self.resolve_expr(arg)
            return
        if isinstance(node, Member):
            # Property names are looked up dynamically; only the owner resolves.
            self.resolve_expr(node.target)
            return
        if isinstance(node, SetMember):
            self.resolve_expr(node.value)
            self.resolve_expr(node.target)
            return
        if isinstance(node, This):
            if self.current_class is ClassKind.NONE:
                self.error(node, "Can't use 'this' outside of a class.")
                return
            self.resolve_local(node, 'this')
            return
        if isinstance(node, Super):
            if self.current_class is ClassKind.NONE:
                self.error(node, "Can't use 'super' outside of a class.")
            elif self.current_class is not ClassKind.SUBCLASS:
                self.error(node, "Can't use 'super' in a class with no superclass.")
            self.resolve_local(node, 'super')
            return
        if isinstance(node, Literal):
            return
        raise NotImplementedError(f"resolve_expr: unexpected node type {type(node)}")
