from typing import Any, Dict, Optional
from lox.errors import LoxRuntimeError


class Environment:
    """One lexical scope: a name to value mapping plus the enclosing scope.

    Closures hold a reference to the environment they were declared in, so
    a scope lives as long as anything can still reach it through a chain.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def define(self, name: str, value: Any) -> None:
        # Redefinition in the same scope is allowed; the last one wins.
        self.values[name] = value

    def get(self, name: str, line: Optional[int] = None) -> Any:
        env = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        raise LoxRuntimeError('UndefinedVariable', f"Undefined variable '{name}'.", line)

    def assign(self, name: str, value: Any, line: Optional[int] = None) -> None:
        env = self
        while env is not None:
            if name in env.values:
                env.values[name] = value
                return
            env = env.parent
        raise LoxRuntimeError('UndefinedVariable', f"Undefined variable '{name}'.", line)

    def ancestor(self, depth: int) -> 'Environment':
        env = self
        for _ in range(depth):
            env = env.parent
        return env

    def get_at(self, depth: int, name: str) -> Any:
        # The resolver proved the binding lives exactly here; a KeyError
        # means resolver and interpreter disagree about scopes.
        return self.ancestor(depth).values[name]

    def assign_at(self, depth: int, name: str, value: Any) -> None:
        self.ancestor(depth).values[name] = value

    def __repr__(self) -> str:
        return f"Environment({self.values!r}, parent={self.parent is not None})"
