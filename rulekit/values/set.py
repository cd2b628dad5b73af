"""
Ordered set of unique values used by the set operators.
"""

from decimal import Decimal
from typing import Any, Iterable, Iterator, List, Optional

from rulekit.exceptions import OperandTypeError

SEQUENCE_TYPES = (list, tuple, set, frozenset)


def is_numeric(value: Any) -> bool:
    """True for int, float and Decimal values. Booleans are not numbers here."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def strict_equal(left: Any, right: Any) -> bool:
    """Type-and-value equality (``1`` is not ``True`` and not ``1.0``)."""
    return type(left) is type(right) and left == right


class Set:
    """
    Ordered collection of unique elements.

    Insertion order is kept so results are deterministic, but it plays no
    part in equality between sets. Every operation returns a new Set.
    """

    def __init__(self, elements: Optional[Iterable[Any]] = None):
        self._elements: List[Any] = []
        for element in elements or ():
            if element not in self._elements:
                self._elements.append(element)

    @classmethod
    def from_datum(cls, datum: Any) -> "Set":
        """Coerce a raw datum: sequences become members, None is empty, scalars are singletons."""
        if isinstance(datum, Set):
            return datum
        if datum is None:
            return cls()
        if isinstance(datum, SEQUENCE_TYPES):
            return cls(datum)
        return cls([datum])

    @classmethod
    def coerce(cls, other: Any) -> "Set":
        if isinstance(other, Set):
            return other
        if hasattr(other, "as_set"):
            return other.as_set()
        return cls.from_datum(other)

    @property
    def value(self) -> List[Any]:
        return list(self._elements)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, item: Any) -> bool:
        return self.set_contains(item)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return len(self) == len(other) and self.contains_subset(other)

    def __repr__(self) -> str:
        return f"Set({self._elements!r})"

    def set_contains(self, value: Any) -> bool:
        """Membership test using strict equality."""
        if hasattr(value, "as_set") and not isinstance(value, Set):
            value = value.value
        return any(strict_equal(element, value) for element in self._elements)

    def union(self, other: Any) -> "Set":
        return Set(self._elements + Set.coerce(other).value)

    def intersect(self, other: Any) -> "Set":
        right = Set.coerce(other).value
        return Set(element for element in self._elements if element in right)

    def complement(self, other: Any) -> "Set":
        right = Set.coerce(other).value
        return Set(element for element in self._elements if element not in right)

    def symmetric_difference(self, other: Any) -> "Set":
        right = Set.coerce(other)
        return self.complement(right).union(right.complement(self))

    def contains_subset(self, other: Any) -> bool:
        if other is None:
            return True
        subset = Set.coerce(other)
        if len(subset) > len(self):
            return False
        return all(element in self._elements for element in subset)

    def min(self) -> Any:
        self._require_numeric("min")
        if not self._elements:
            return None
        return min(self._elements)

    def max(self) -> Any:
        self._require_numeric("max")
        if not self._elements:
            return None
        return max(self._elements)

    def _require_numeric(self, operation: str) -> None:
        if not all(is_numeric(element) for element in self._elements):
            raise OperandTypeError(
                f"{operation}: all values must be numeric",
                component="Set",
                context={"values": self._elements}
            )
