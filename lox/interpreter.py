"""Tree-walking interpreter for the Lox language.

This module evaluates a resolved Lox syntax tree. Statements are run by
`execute`, expressions by `evaluate`; both receive the environment that
is current for the node, so entering a block or a call hands a fresh
environment down and the caller's own environment is untouched when the
callee finishes, however it finishes.

A `return` statement does not raise: `execute` hands a `ReturnSignal`
back up through blocks, branches and loops until the function call that
owns it. Runtime errors are `LoxRuntimeError` exceptions that abandon
the program.
"""

from __future__ import annotations

import math
import sys
from typing import Any, Dict, List, Optional, TextIO

from .ast import (
    Program, Block, ExprStmt, PrintStmt, VarDecl, FuncDecl, ClassDecl,
    IfStmt, WhileStmt, ReturnStmt, Literal, Grouping, Ident, Assign,
    UnaryOp, BinaryOp, LogicalOp, Call, Member, SetMember, This, Super, Node,
)
from .builtin_function import BuiltinFunction, LoxCallable
from .environment import Environment
from .errors import LoxResolveError, LoxRuntimeError, ReturnSignal
from .parser import parse_program
from .resolver import Resolver
from .runtime import INITIALIZER_NAME, LoxClass, LoxFunction, LoxInstance
from .std import populate_native_environment
from .types import is_equal, is_number, is_truthy, to_string, type_name

# Each Lox call costs several Python frames.
RECURSION_LIMIT = 10000


class Interpreter:
    """Core interpreter that executes a Lox AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.global_env = Environment()
        self.locals: Dict[Node, int] = {}
        self.debug_level = debug_level
        self.debug_fp: Optional[TextIO] = open(debug_file, 'w') if debug_level > 0 else None
        self.load_standard_module()

    def debug(self, level: int, msg: str) -> None:
        if self.debug_level >= level and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self) -> None:
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def load_standard_module(self) -> None:
        std_env = populate_native_environment()
        for name, value in std_env.values.items():
            self.global_env.define(name, value)

    def define_native(self, name: str, arity: int, fn) -> None:
        """Register a host function as a global before the program runs."""
        self.global_env.define(name, BuiltinFunction(name, arity, fn))

    # Public API
    def resolve(self, program: Program) -> None:
        """Run the resolver, keeping its depth map or raising its diagnostics.

        Depths accumulate across runs: functions declared by an earlier
        REPL line still evaluate that line's nodes when called later.
        """
        resolver = Resolver(debug=self.debug)
        depths = resolver.resolve(program)
        if resolver.had_error:
            raise LoxResolveError(resolver.diagnostics)
        self.locals.update(depths)

    def interpret(self, program: Program) -> None:
        """Execute an already resolved program against the global environment."""
        for stmt in program.body:
            self.debug(1, f"execute {type(stmt).__name__} at line {stmt.line}")
            self.execute(stmt, self.global_env)

    def run(self, program: Program) -> None:
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)
        self.resolve(program)
        self.interpret(program)

    # Statements
    def execute_block(self, statements: List[Node], env: Environment) -> Optional[ReturnSignal]:
        for stmt in statements:
            result = self.execute(stmt, env)
            if isinstance(result, ReturnSignal):
                return result
        return None

    def execute(self, node: Node, env: Environment) -> Optional[ReturnSignal]:
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr, env)
            return None
        if isinstance(node, PrintStmt):
            value = self.evaluate(node.expr, env)
            print(to_string(value))
            return None
        if isinstance(node, VarDecl):
            value = self.evaluate(node.expr, env) if node.expr is not None else None
            env.define(node.name, value)
            self.debug(2, f"declare {node.name}: {type_name(value)} = {to_string(value)}")
            return None
        if isinstance(node, Block):
            return self.execute_block(node.statements, Environment(parent=env))
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition, env)
            truthy = is_truthy(cond)
            self.debug(3, f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                return self.execute(node.then_branch, env)
            if node.else_branch is not None:
                return self.execute(node.else_branch, env)
            return None
        if isinstance(node, WhileStmt):
            while is_truthy(self.evaluate(node.condition, env)):
                res = self.execute(node.body, env)
                if isinstance(res, ReturnSignal):
                    return res
            return None
        if isinstance(node, FuncDecl):
            env.define(node.name, LoxFunction(node, env))
            self.debug(2, f"define function {node.name}")
            return None
        if isinstance(node, ClassDecl):
            self.execute_class(node, env)
            return None
        if isinstance(node, ReturnStmt):
            value = self.evaluate(node.value, env) if node.value is not None else None
            return ReturnSignal(value)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def execute_class(self, node: ClassDecl, env: Environment) -> None:
        superclass: Optional[LoxClass] = None
        if node.superclass is not None:
            value = self.evaluate(node.superclass, env)
            if not isinstance(value, LoxClass):
                raise LoxRuntimeError('TypeError', "Superclass must be a class.", node.superclass.line)
            superclass = value

        # Methods close over the scope, so they see the finished class by name.
        env.define(node.name, None)

        method_env = env
        if superclass is not None:
            method_env = Environment(parent=env)
            method_env.define('super', superclass)

        methods: Dict[str, LoxFunction] = {}
        for method in node.methods:
            methods[method.name] = LoxFunction(method, method_env, method.name == INITIALIZER_NAME)

        klass = LoxClass(node.name, superclass, methods)
        env.assign(node.name, klass, node.line)
        self.debug(2, f"define class {node.name}" + (f" < {superclass.name}" if superclass else ""))

    # Expressions
    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expr, env)
        if isinstance(node, Ident):
            return self.lookup_variable(node, node.name, env)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            depth = self.locals.get(node)
            if depth is not None:
                env.assign_at(depth, node.name, value)
            else:
                self.global_env.assign(node.name, value, node.line)
            return value
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand, env)
            if node.op == '!':
                return not is_truthy(operand)
            if node.op == '-':
                self.check_number_operands(node, operand)
                return -operand
            raise LoxRuntimeError('TypeError', f"Unsupported unary operator '{node.op}'.", node.line)
        if isinstance(node, LogicalOp):
            left = self.evaluate(node.left, env)
            if node.op == 'or':
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right, env)
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node, left, right)
        if isinstance(node, Call):
            func = self.evaluate(node.func, env)
            args = [self.evaluate(arg, env) for arg in node.args]
            return self.call_function(node, func, args)
        if isinstance(node, Member):
            target = self.evaluate(node.target, env)
            if isinstance(target, LoxInstance):
                return target.get(node.name, node.line)
            raise LoxRuntimeError('TypeError', "Only instances have properties.", node.line)
        if isinstance(node, SetMember):
            target = self.evaluate(node.target, env)
            if not isinstance(target, LoxInstance):
                raise LoxRuntimeError('TypeError', "Only instances have fields.", node.line)
            value = self.evaluate(node.value, env)
            target.set(node.name, value)
            return value
        if isinstance(node, This):
            return self.lookup_variable(node, 'this', env)
        if isinstance(node, Super):
            depth = self.locals[node]
            superclass: LoxClass = env.get_at(depth, 'super')
            # `this` is bound one scope inside the `super` scope.
            instance = env.get_at(depth - 1, 'this')
            method = superclass.find_method(node.method)
            if method is None:
                raise LoxRuntimeError('UndefinedProperty', f"Undefined property '{node.method}'.", node.line)
            return method.bind(instance)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def lookup_variable(self, node: Node, name: str, env: Environment) -> Any:
        depth = self.locals.get(node)
        if depth is not None:
            return env.get_at(depth, name)
        return self.global_env.get(name, node.line)

    def call_function(self, node: Call, func: Any, args: List[Any]) -> Any:
        if not isinstance(func, LoxCallable):
            raise LoxRuntimeError('NotCallable', "Can only call functions and classes.", node.line)
        if len(args) != func.arity():
            raise LoxRuntimeError(
                'ArityMismatch', f"Expected {func.arity()} arguments but got {len(args)}.", node.line)
        self.debug(3, f"call {func} with {len(args)} argument(s)")
        try:
            return func.call(self, args)
        except RecursionError:
            raise LoxRuntimeError('StackOverflow', "Stack overflow.", node.line) from None

    def check_number_operands(self, node: Node, *operands: Any) -> None:
        if all(is_number(operand) for operand in operands):
            return
        if len(operands) == 1:
            raise LoxRuntimeError('TypeError', "Operand must be a number.", node.line)
        raise LoxRuntimeError('TypeError', "Operands must be numbers.", node.line)

    def apply_binary_op(self, node: BinaryOp, a: Any, b: Any) -> Any:
        op = node.op
        if op == '==':
            return is_equal(a, b)
        if op == '!=':
            return not is_equal(a, b)
        if op == '+':
            if is_number(a) and is_number(b):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise LoxRuntimeError('TypeError', "Operands must be two numbers or two strings.", node.line)
        self.check_number_operands(node, a, b)
        if op == '-':
            return a - b
        if op == '*':
            return a * b
        if op == '/':
            return divide(a, b)
        if op == '<':
            return a < b
        if op == '<=':
            return a <= b
        if op == '>':
            return a > b
        if op == '>=':
            return a >= b
        raise LoxRuntimeError('TypeError', f"Unsupported binary operator '{op}'.", node.line)


def divide(a: float, b: float) -> float:
    """IEEE division: dividing by zero gives an infinity or NaN, never an error."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def run_program(source: str, debug_level: int = 0) -> Interpreter:
    """Convenience function to parse, resolve and run a Lox program from source."""
    ast_program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    try:
        interpreter.run(ast_program)
    finally:
        interpreter.close()
    return interpreter
