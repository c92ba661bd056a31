from dataclasses import dataclass
from typing import Any, List, Optional


class LoxError(Exception):
    """Base class for every error the Lox toolchain reports."""


class LoxSyntaxError(LoxError):
    """Raised by the parser when source text is not valid Lox."""
    def __init__(self, message: str, line: int = 0):
        super().__init__(f"[line {line}] Error: {message}")
        self.message = message
        self.line = line


class LoxRuntimeError(LoxError):
    """Exception type used to propagate Lox runtime errors.

    `name` is the error kind (UndefinedVariable, UndefinedProperty,
    TypeError, NotCallable, ArityMismatch, StackOverflow).
    """
    def __init__(self, name: str, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.name = name
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.name}: {self.message}"
        return f"[line {self.line}] {self.name}: {self.message}"


@dataclass
class Diagnostic:
    """A static error reported by the resolver."""
    line: int
    message: str

    def __str__(self) -> str:
        return f"[line {self.line}] Error: {self.message}"


class LoxResolveError(LoxError):
    """Raised instead of running a program that failed resolution."""
    def __init__(self, diagnostics: List[Diagnostic]):
        super().__init__('\n'.join(str(d) for d in diagnostics))
        self.diagnostics = diagnostics


class ReturnSignal:
    """Result of executing a `return` statement.

    Statement execution hands this back to its caller instead of raising,
    so error handling can never intercept it. Only a function call
    consumes it.
    """
    __slots__ = ('value',)

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"ReturnSignal({self.value!r})"
