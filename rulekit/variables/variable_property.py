"""
VariableProperty

Child of a Variable that reads a named property from the parent's
resolved value.
"""

from typing import Any, Optional, Sequence

from rulekit.values import Value
from rulekit.variables.property_resolvers import (
    DEFAULT_RESOLVERS,
    MISSING,
    PropertyResolver,
    resolve_property,
)
from rulekit.variables.variable import Variable


class VariableProperty(Variable):
    """
    Property lookup on a parent operand.

    Resolution never raises: when no resolver finds the property, the
    property's own default is used.
    """

    resolvers: Sequence[PropertyResolver] = DEFAULT_RESOLVERS

    def __init__(self, parent: Variable, name: Any = None, value: Any = None):
        super().__init__(name, value)
        self._parent = parent

    @property
    def parent(self) -> Variable:
        return self._parent

    @property
    def path(self) -> Optional[str]:
        parent_path = self._parent.path
        if parent_path is None or self._name is None:
            return None
        return f"{parent_path}.{self._name}"

    def prepare_value(self, context) -> Value:
        parent_value = self._parent.prepare_value(context).value

        if self._name is not None:
            resolved = resolve_property(parent_value, self._name, self.resolvers)
            if resolved is not MISSING:
                return resolved if isinstance(resolved, Value) else Value(resolved)

        resolved = self._default(context)
        return resolved if isinstance(resolved, Value) else Value(resolved)

    def __repr__(self) -> str:
        cls = self.repr_name or type(self).__name__
        if self._value is None:
            return f"{cls}({self._parent!r}, {self._name!r})"
        return f"{cls}({self._parent!r}, {self._name!r}, value={self._value!r})"
