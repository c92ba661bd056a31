"""Parser for the Lox language.

Source text is parsed by a Lark LALR parser configured with the grammar
below, and the resulting parse tree is transformed into the AST defined
in `lox.ast`. Syntax sugar is removed here: a `for` loop becomes a block
holding its initializer and a `while` loop, so later passes never see it.

The `parse_program` function is the public entry point and returns a
`Program` AST node representing the entire source file.
"""

from __future__ import annotations

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken, VisitError

from .ast import (
    Program, Block, ExprStmt, PrintStmt, VarDecl, FuncDecl, ClassDecl,
    IfStmt, WhileStmt, ReturnStmt, Literal, Grouping, Ident, Assign,
    UnaryOp, BinaryOp, LogicalOp, Call, Member, SetMember, This, Super, Node,
)
from .errors import LoxSyntaxError

MAX_ARGUMENTS = 255


LOX_GRAMMAR = r"""
    start: declaration*

    // Declarations
    ?declaration: class_decl
                | fun_decl
                | var_decl
                | statement

    class_decl: "class" IDENTIFIER [superclass] "{" function* "}"
    superclass: LESS IDENTIFIER
    fun_decl: "fun" function
    function: IDENTIFIER "(" [parameters] ")" block
    parameters: IDENTIFIER ("," IDENTIFIER)*
    var_decl: "var" IDENTIFIER ["=" expression] ";"

    // Statements
    ?statement: expr_stmt
              | for_stmt
              | if_stmt
              | print_stmt
              | return_stmt
              | while_stmt
              | block

    expr_stmt: expression ";"
    for_stmt: "for" "(" for_init [expression] ";" [expression] ")" statement
    ?for_init: var_decl
             | expr_stmt
             | ";" -> empty_init
    if_stmt: "if" "(" expression ")" statement ["else" statement]
    print_stmt: "print" expression ";"
    return_stmt: "return" [expression] ";"
    while_stmt: "while" "(" expression ")" statement
    block: "{" declaration* "}"

    // Expressions with precedence
    ?expression: assignment
    ?assignment: IDENTIFIER "=" assignment -> assign
               | call "." IDENTIFIER "=" assignment -> set_expr
               | logic_or
    ?logic_or: logic_and (OR logic_and)*
    ?logic_and: equality (AND equality)*
    ?equality: comparison ((BANG_EQUAL | EQUAL_EQUAL) comparison)*
    ?comparison: term ((GREATER | GREATER_EQUAL | LESS | LESS_EQUAL) term)*
    ?term: factor ((MINUS | PLUS) factor)*
    ?factor: unary ((SLASH | STAR) unary)*
    ?unary: (BANG | MINUS) unary -> unary_expr
          | call
    ?call: primary
         | call "(" [arguments] ")" -> call_expr
         | call "." IDENTIFIER -> get_expr
    arguments: expression ("," expression)*
    ?primary: "true" -> true
            | "false" -> false
            | "nil" -> nil
            | "this" -> this
            | NUMBER -> number
            | STRING -> string
            | IDENTIFIER -> variable
            | "(" expression ")" -> grouping
            | "super" "." IDENTIFIER -> super_expr

    // Tokens
    OR: "or"
    AND: "and"
    BANG_EQUAL: "!="
    EQUAL_EQUAL: "=="
    GREATER: ">"
    GREATER_EQUAL: ">="
    LESS: "<"
    LESS_EQUAL: "<="
    MINUS: "-"
    PLUS: "+"
    SLASH: "/"
    STAR: "*"
    BANG: "!"

    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/
    NUMBER: /[0-9]+(\.[0-9]+)?/
    STRING: /"[^"]*"/

    COMMENT: /\/\/[^\n]*/
    %ignore COMMENT
    %import common.WS
    %ignore WS
"""


LOX_PARSER = Lark(
    LOX_GRAMMAR,
    parser='lalr',
    lexer='basic',  # keywords always win over IDENTIFIER
    propagate_positions=True,
    maybe_placeholders=True,
)


def _line(meta) -> int:
    # Rules that matched no tokens carry no position.
    return getattr(meta, 'line', 0)


@v_args(meta=True)
class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def start(self, meta, items):
        return Program(body=list(items), line=_line(meta))

    # Declarations
    def class_decl(self, meta, items):
        name, superclass, *methods = items
        return ClassDecl(name=str(name), superclass=superclass, methods=methods, line=_line(meta))

    def superclass(self, meta, items):
        token = items[-1]
        return Ident(str(token), line=token.line)

    def fun_decl(self, meta, items):
        return items[0]

    def function(self, meta, items):
        name, params, body = items
        return FuncDecl(name=str(name), params=params or [], body=body.statements, line=_line(meta))

    def parameters(self, meta, items):
        if len(items) > MAX_ARGUMENTS:
            raise LoxSyntaxError(f"Can't have more than {MAX_ARGUMENTS} parameters.", _line(meta))
        return [str(item) for item in items]

    def var_decl(self, meta, items):
        name, expr = items
        return VarDecl(name=str(name), expr=expr, line=_line(meta))

    # Statements
    def expr_stmt(self, meta, items):
        return ExprStmt(items[0], line=_line(meta))

    def print_stmt(self, meta, items):
        return PrintStmt(items[0], line=_line(meta))

    def return_stmt(self, meta, items):
        return ReturnStmt(items[0], line=_line(meta))

    def block(self, meta, items):
        return Block(statements=list(items), line=_line(meta))

    def if_stmt(self, meta, items):
        condition, then_branch, else_branch = items
        return IfStmt(condition, then_branch, else_branch, line=_line(meta))

    def while_stmt(self, meta, items):
        condition, body = items
        return WhileStmt(condition, body, line=_line(meta))

    def empty_init(self, meta, items):
        return None

    def for_stmt(self, meta, items):
        init, condition, increment, body = items
        line = _line(meta)
        if increment is not None:
            body = Block([body, ExprStmt(increment, line=increment.line)], line=line)
        if condition is None:
            condition = Literal(True, line=line)
        loop: Node = WhileStmt(condition, body, line=line)
        if init is not None:
            loop = Block([init, loop], line=line)
        return loop

    # Expressions
    def assign(self, meta, items):
        name, value = items
        return Assign(str(name), value, line=name.line)

    def set_expr(self, meta, items):
        target, name, value = items
        return SetMember(target, str(name), value, line=name.line)

    def _fold(self, items, node_type):
        left = items[0]
        for i in range(1, len(items), 2):
            op = items[i]
            left = node_type(str(op), left, items[i + 1], line=op.line)
        return left

    def logic_or(self, meta, items):
        return self._fold(items, LogicalOp)

    def logic_and(self, meta, items):
        return self._fold(items, LogicalOp)

    def equality(self, meta, items):
        return self._fold(items, BinaryOp)

    def comparison(self, meta, items):
        return self._fold(items, BinaryOp)

    def term(self, meta, items):
        return self._fold(items, BinaryOp)

    def factor(self, meta, items):
        return self._fold(items, BinaryOp)

    def unary_expr(self, meta, items):
        op, operand = items
        return UnaryOp(str(op), operand, line=op.line)

    def call_expr(self, meta, items):
        func, args = items
        return Call(func, args or [], line=_line(meta))

    def arguments(self, meta, items):
        if len(items) > MAX_ARGUMENTS:
            raise LoxSyntaxError(f"Can't have more than {MAX_ARGUMENTS} arguments.", _line(meta))
        return list(items)

    def get_expr(self, meta, items):
        target, name = items
        return Member(target, str(name), line=name.line)

    def true(self, meta, items):
        return Literal(True, line=_line(meta))

    def false(self, meta, items):
        return Literal(False, line=_line(meta))

    def nil(self, meta, items):
        return Literal(None, line=_line(meta))

    def this(self, meta, items):
        return This(line=_line(meta))

    def number(self, meta, items):
        token = items[0]
        return Literal(float(token), line=token.line)

    def string(self, meta, items):
        token = items[0]
        return Literal(str(token)[1:-1], line=token.line)

    def variable(self, meta, items):
        token = items[0]
        return Ident(str(token), line=token.line)

    def grouping(self, meta, items):
        return Grouping(items[0], line=_line(meta))

    def super_expr(self, meta, items):
        token = items[0]
        return Super(str(token), line=token.line)


def parse_program(source: str) -> Program:
    """Parse Lox source code into an AST Program.

    Any syntax error is raised as a `LoxSyntaxError` carrying its line.
    """
    try:
        tree = LOX_PARSER.parse(source)
    except UnexpectedCharacters as e:
        char = source[e.pos_in_stream]
        if char == '"':
            raise LoxSyntaxError("Unterminated string.", e.line) from e
        raise LoxSyntaxError(f"Unexpected character {char!r}.", e.line) from e
    except UnexpectedEOF as e:
        raise LoxSyntaxError("Unexpected end of input.", _last_line(source)) from e
    except UnexpectedToken as e:
        if e.token.type == '$END':
            raise LoxSyntaxError("Unexpected end of input.", _last_line(source)) from e
        if str(e.token) == '=' and 'IDENTIFIER' not in e.expected:
            raise LoxSyntaxError("Invalid assignment target.", e.token.line) from e
        raise LoxSyntaxError(f"Unexpected token '{e.token}'.", e.token.line) from e
    except UnexpectedInput as e:
        raise LoxSyntaxError("Invalid syntax.", getattr(e, 'line', 0)) from e
    try:
        return ASTTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, LoxSyntaxError):
            raise e.orig_exc from e
        raise


def _last_line(source: str) -> int:
    return source.count('\n') + 1
