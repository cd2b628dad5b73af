"""
Value wrapper giving resolved data comparison and arithmetic semantics.
"""

import math
from typing import Any, Optional

from rulekit.exceptions import DivisionByZeroError, OperandTypeError
from rulekit.values.set import Set, is_numeric, strict_equal


def _unwrap(other: Any) -> Any:
    return other.value if isinstance(other, Value) else other


class Value:
    """
    Immutable wrapper around one raw datum.

    Comparison helpers never mutate the wrapped datum; ``as_set`` converts
    it lazily and caches the result.
    """

    __slots__ = ("_value", "_set")

    def __init__(self, value: Any = None):
        self._value = value
        self._set: Optional[Set] = None

    @property
    def value(self) -> Any:
        return self._value

    def as_set(self) -> Set:
        if self._set is None:
            self._set = Set.from_datum(self._value)
        return self._set

    def __repr__(self) -> str:
        return f"Value({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return strict_equal(self._value, other._value)

    def __hash__(self) -> int:
        try:
            return hash((type(self._value), self._value))
        except TypeError:
            return id(self)

    # -- comparison -----------------------------------------------------

    def equal_to(self, other: Any) -> bool:
        return self._value == _unwrap(other)

    def same_as(self, other: Any) -> bool:
        return strict_equal(self._value, _unwrap(other))

    def greater_than(self, other: Any) -> bool:
        return self._compare(other, "greater_than", lambda a, b: a > b)

    def less_than(self, other: Any) -> bool:
        return self._compare(other, "less_than", lambda a, b: a < b)

    def _compare(self, other: Any, name: str, op) -> bool:
        right = _unwrap(other)
        if self._value is None or right is None:
            return False
        try:
            return bool(op(self._value, right))
        except TypeError:
            raise OperandTypeError(
                f"{name}: cannot compare {type(self._value).__name__} with {type(right).__name__}",
                component="Value"
            )

    # -- arithmetic -----------------------------------------------------

    def _numeric_pair(self, other: Any):
        right = _unwrap(other)
        if not is_numeric(self._value) or not is_numeric(right):
            raise OperandTypeError(
                "Arithmetic: values must be numeric",
                component="Value",
                context={"left": self._value, "right": right}
            )
        return self._value, right

    def _numeric(self) -> Any:
        if not is_numeric(self._value):
            raise OperandTypeError(
                "Arithmetic: values must be numeric",
                component="Value",
                context={"value": self._value}
            )
        return self._value

    def add(self, other: Any) -> Any:
        left, right = self._numeric_pair(other)
        return left + right

    def subtract(self, other: Any) -> Any:
        left, right = self._numeric_pair(other)
        return left - right

    def multiply(self, other: Any) -> Any:
        left, right = self._numeric_pair(other)
        return left * right

    def divide(self, other: Any) -> Any:
        left, right = self._numeric_pair(other)
        if right == 0:
            raise DivisionByZeroError("Division by zero", component="Value")
        return left / right

    def modulo(self, other: Any) -> Any:
        left, right = self._numeric_pair(other)
        if right == 0:
            raise DivisionByZeroError("Division by zero", component="Value")
        return left % right

    def exponentiate(self, other: Any) -> Any:
        left, right = self._numeric_pair(other)
        return left ** right

    def negate(self) -> Any:
        return -self._numeric()

    def ceil(self) -> int:
        return math.ceil(self._numeric())

    def floor(self) -> int:
        return math.floor(self._numeric())

    # -- strings --------------------------------------------------------

    def _string_pair(self, other: Any, name: str):
        right = _unwrap(other)
        if not isinstance(self._value, str) or not isinstance(right, str):
            raise OperandTypeError(
                f"{name}: values must be strings",
                component="Value",
                context={"left": self._value, "right": right}
            )
        return self._value, right

    def starts_with(self, other: Any, insensitive: bool = False) -> bool:
        subject, prefix = self._string_pair(other, "starts_with")
        if not subject or not prefix:
            return False
        if insensitive:
            return subject.casefold().startswith(prefix.casefold())
        return subject.startswith(prefix)

    def ends_with(self, other: Any, insensitive: bool = False) -> bool:
        subject, suffix = self._string_pair(other, "ends_with")
        if not subject or not suffix:
            return False
        if insensitive:
            return subject.casefold().endswith(suffix.casefold())
        return subject.endswith(suffix)

    def string_contains(self, other: Any, insensitive: bool = False) -> bool:
        subject, needle = self._string_pair(other, "string_contains")
        if insensitive:
            return needle.casefold() in subject.casefold()
        return needle in subject
