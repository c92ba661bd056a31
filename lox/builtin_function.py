from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List


class LoxCallable(ABC):
    """Anything a Lox call expression can invoke."""

    @abstractmethod
    def arity(self) -> int:
        ...

    @abstractmethod
    def call(self, interpreter: Any, arguments: List[Any]) -> Any:
        ...


@dataclass(eq=False)
class BuiltinFunction(LoxCallable):
    """A native function: fixed arity, host logic, no new environment."""
    name: str
    num_params: int
    fn: Callable[[List[Any]], Any]

    def arity(self) -> int:
        return self.num_params

    def call(self, interpreter: Any, arguments: List[Any]) -> Any:
        return self.fn(arguments)

    def __str__(self) -> str:
        return "<native fn>"

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
