"""
Property Resolvers

Ordered strategies used by VariableProperty to read a named property from
its parent's resolved value. Each strategy returns MISSING to pass the
lookup to the next one; the first hit wins.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Sequence

MISSING = object()

# Values handled by the array resolver or never inspected as objects
_PLAIN_TYPES = (str, bytes, bool, int, float, Decimal, list, tuple, set, frozenset, dict)


def _is_object(value: Any) -> bool:
    return (
        value is not None
        and not callable(value)
        and not isinstance(value, _PLAIN_TYPES)
        and not isinstance(value, Mapping)
    )


def _is_public_name(name: Any) -> bool:
    return isinstance(name, str) and bool(name) and not name.startswith("_")


class PropertyResolver(ABC):
    """One step of the property lookup chain."""

    @abstractmethod
    def resolve(self, obj: Any, name: Any) -> Any:
        """Return the property value, or MISSING to try the next resolver."""


class MethodResolver(PropertyResolver):
    """Call a zero-argument method named after the property."""

    def resolve(self, obj: Any, name: Any) -> Any:
        if not _is_object(obj) or not _is_public_name(name):
            return MISSING
        method = getattr(obj, name, None)
        if method is None or not callable(method):
            return MISSING
        return method()


class AttributeResolver(PropertyResolver):
    """Read a set attribute named after the property."""

    def resolve(self, obj: Any, name: Any) -> Any:
        if not _is_object(obj) or not _is_public_name(name):
            return MISSING
        value = getattr(obj, name, None)
        return MISSING if value is None else value


class IndexedObjectResolver(PropertyResolver):
    """Look the name up on objects supporting ``in`` and ``[]`` (non-dict mappings included)."""

    def resolve(self, obj: Any, name: Any) -> Any:
        if obj is None or isinstance(obj, _PLAIN_TYPES):
            return MISSING
        if not (hasattr(obj, "__getitem__") and hasattr(obj, "__contains__")):
            return MISSING
        try:
            if name not in obj:
                return MISSING
            return obj[name]
        except (TypeError, KeyError, IndexError):
            return MISSING


class ArrayResolver(PropertyResolver):
    """Read a key from a dict, or an integer index from a list or tuple."""

    def resolve(self, obj: Any, name: Any) -> Any:
        if isinstance(obj, dict):
            try:
                return obj[name] if name in obj else MISSING
            except TypeError:
                return MISSING

        if isinstance(obj, (list, tuple)):
            index = _as_index(name)
            if index is None or not 0 <= index < len(obj):
                return MISSING
            return obj[index]

        return MISSING


def _as_index(name: Any):
    if isinstance(name, bool):
        return None
    if isinstance(name, int):
        return name
    if isinstance(name, str) and name.isdigit():
        return int(name)
    return None


DEFAULT_RESOLVERS: Sequence[PropertyResolver] = (
    MethodResolver(),
    AttributeResolver(),
    IndexedObjectResolver(),
    ArrayResolver(),
)


def resolve_property(obj: Any, name: Any, resolvers: Sequence[PropertyResolver] = DEFAULT_RESOLVERS) -> Any:
    """
    Run the resolver chain for ``name`` on ``obj``.

    Returns:
        The first resolved value, or MISSING when every resolver passed
    """
    for resolver in resolvers:
        value = resolver.resolve(obj, name)
        if value is not MISSING:
            return value
    return MISSING
