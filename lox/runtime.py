"""User-defined functions, classes and instances."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .ast import FuncDecl
from .builtin_function import LoxCallable
from .environment import Environment
from .errors import LoxRuntimeError, ReturnSignal

INITIALIZER_NAME = 'init'


class LoxFunction(LoxCallable):
    """Represents a user-defined Lox function or method."""
    def __init__(self, declaration: FuncDecl, closure: Environment, is_initializer: bool = False):
        self.declaration = declaration
        self.closure = closure  # environment active at declaration time
        self.is_initializer = is_initializer

    @property
    def name(self) -> str:
        return self.declaration.name

    def arity(self) -> int:
        return len(self.declaration.params)

    def bind(self, instance: 'LoxInstance') -> 'LoxFunction':
        """Return a copy of this method whose closure defines `this`.

        `super`, when the class has one, already lives in the closure chain.
        """
        env = Environment(parent=self.closure)
        env.define('this', instance)
        return LoxFunction(self.declaration, env, self.is_initializer)

    def call(self, interpreter: Any, arguments: List[Any]) -> Any:
        call_env = Environment(parent=self.closure)
        for param, arg in zip(self.declaration.params, arguments):
            call_env.define(param, arg)
        res = interpreter.execute_block(self.declaration.body, call_env)
        if self.is_initializer:
            # Both `return;` and falling off the end yield the instance.
            return self.closure.get_at(0, 'this')
        if isinstance(res, ReturnSignal):
            return res.value
        return None

    def __str__(self) -> str:
        return f"<fn {self.name}>"

    __repr__ = __str__


class LoxClass(LoxCallable):
    """A class: a name, an optional superclass and its methods.

    Calling a class constructs an instance.
    """
    def __init__(self, name: str, superclass: Optional['LoxClass'], methods: Dict[str, LoxFunction]):
        self.name = name
        self.superclass = superclass
        self.methods = methods

    def find_method(self, name: str) -> Optional[LoxFunction]:
        klass: Optional[LoxClass] = self
        while klass is not None:
            if name in klass.methods:
                return klass.methods[name]
            klass = klass.superclass
        return None

    def arity(self) -> int:
        initializer = self.find_method(INITIALIZER_NAME)
        return initializer.arity() if initializer is not None else 0

    def call(self, interpreter: Any, arguments: List[Any]) -> Any:
        instance = LoxInstance(self)
        initializer = self.find_method(INITIALIZER_NAME)
        if initializer is not None:
            initializer.bind(instance).call(interpreter, arguments)
        return instance

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<class {self.name}>"


class LoxInstance:
    """An instance of a Lox class with its own mutable fields."""
    def __init__(self, klass: LoxClass):
        self.klass = klass
        self.fields: Dict[str, Any] = {}

    def get(self, name: str, line: Optional[int] = None) -> Any:
        # Fields shadow methods on reads.
        if name in self.fields:
            return self.fields[name]
        method = self.klass.find_method(name)
        if method is not None:
            return method.bind(self)
        raise LoxRuntimeError('UndefinedProperty', f"Undefined property '{name}'.", line)

    def set(self, name: str, value: Any) -> None:
        self.fields[name] = value

    def __str__(self) -> str:
        return f"{self.klass.name} instance"

    def __repr__(self) -> str:
        return f"<{self.klass.name} instance {self.fields!r}>"
