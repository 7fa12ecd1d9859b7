"""
Runtime values.

Values are plain Python objects:

    Numeric  -> float
    String   -> str
    Boolean  -> bool
    Nil      -> None
    Callable -> NativeCallable

`bool` is checked before anything numeric everywhere, since it subclasses `int`.
"""

import math
from decimal import Decimal
from typing import Any, Callable, List


class NativeCallable:
    """A host-provided function with a fixed arity."""

    def __init__(self, name: str, arity: int, function: Callable[[List[Any]], Any]):
        self.name = name
        self.arity = arity
        self.function = function

    def call(self, arguments: List[Any]) -> Any:
        return self.function(arguments)

    def __repr__(self) -> str:
        return f"NativeCallable(name={self.name!r}, arity={self.arity})"


def is_numeric(value: Any) -> bool:
    return isinstance(value, float) and not isinstance(value, bool)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def type_name(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, NativeCallable):
        return "callable"
    return type(value).__name__


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    # Shortest round-tripping digits, written out in full without an exponent.
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def stringify(value: Any) -> str:
    """The text `print` emits for a value."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_number(value)
    if isinstance(value, NativeCallable):
        return f"<native fn {value.name}>"
    return str(value)
