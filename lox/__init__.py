# Lox language package
# This package provides a resolver and tree-walking interpreter for Lox.
from .interpreter import run_program, Interpreter
from .errors import LoxError, LoxResolveError, LoxRuntimeError, LoxSyntaxError
from .parser import parse_program

__all__ = [
    'run_program',
    'parse_program',
    'Interpreter',
    'LoxError',
    'LoxResolveError',
    'LoxRuntimeError',
    'LoxSyntaxError',
]
