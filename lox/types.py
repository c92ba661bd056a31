"""Runtime value helpers for Lox.

Lox values map onto Python objects: `nil` is `None`, booleans are `bool`,
numbers are `float`, strings are `str`, and callables, classes and
instances are the objects defined in `builtin_function` and `runtime`.
This module holds the rules that operate on any of them: truthiness,
equality, and conversion to printable text.
"""

from __future__ import annotations

from typing import Any


def is_number(value: Any) -> bool:
    """Return True for Lox numbers (bool is an int subclass; exclude it)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    """`nil` and `false` are falsy; everything else, `0` and `""` included, is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    """Compare two Lox values.

    Numbers, strings and booleans compare structurally, `nil` equals only
    `nil`, and callables, classes and instances compare by identity.
    Values of different types are never equal.
    """
    if a is None or b is None:
        return a is None and b is None
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if is_number(a) and is_number(b):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    return a is b


def type_name(value: Any) -> str:
    """Return the Lox type name of a runtime value."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'boolean'
    if is_number(value):
        return 'number'
    if isinstance(value, str):
        return 'string'
    # Imported lazily: runtime depends on this module.
    from .runtime import LoxClass, LoxInstance
    if isinstance(value, LoxClass):
        return 'class'
    if isinstance(value, LoxInstance):
        return 'instance'
    return 'function'


def to_string(value: Any) -> str:
    """Convert a Lox value to the text a `print` statement shows."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if is_number(value):
        value = float(value)
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)
