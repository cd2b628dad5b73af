"""
Context

Runtime data source a rule is evaluated against. Entries may be plain values
or zero-argument producers that are invoked lazily and memoised.
"""

from collections.abc import MutableMapping
from typing import Any, Callable, Dict, Iterator, Mapping, Optional


class _Protected:
    """Marks a callable that must be stored and returned as a plain value."""

    __slots__ = ("callable",)

    def __init__(self, func: Callable):
        self.callable = func


class Context(MutableMapping):
    """
    Mapping of string keys to values or deferred producers.

    A producer runs at most once per Context instance: the first read stores
    its result, and later reads return that result. ``has`` and ``in`` never
    run a producer.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._entries: Dict[str, Any] = {}
        self._resolved: Dict[str, Any] = {}
        for key, value in (values or {}).items():
            self.set(key, value)

    @staticmethod
    def protect(func: Callable) -> _Protected:
        """
        Wrap a callable so it is stored as data instead of being invoked.

        Args:
            func: Callable to keep as-is

        Returns:
            Marker accepted by ``set``
        """
        return _Protected(func)

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = value
        self._resolved.pop(key, None)

    def has(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._entries:
            return default
        return self[key]

    def raw(self, key: str) -> Any:
        """
        Return the stored entry without invoking it.

        Raises:
            KeyError: If the key is not bound
        """
        entry = self._entries[key]
        if isinstance(entry, _Protected):
            return entry.callable
        return entry

    def __getitem__(self, key: str) -> Any:
        if key in self._resolved:
            return self._resolved[key]

        entry = self._entries[key]
        if isinstance(entry, _Protected):
            return entry.callable
        if not callable(entry):
            return entry

        result = entry()
        self._resolved[key] = result
        return result

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        del self._entries[key]
        self._resolved.pop(key, None)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return f"Context({list(self._entries)!r})"
