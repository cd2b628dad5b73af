"""
Variable

Named or anonymous placeholder resolved against a Context at evaluation
time.
"""

from typing import Any, Dict, Optional

from rulekit.core.proposition import VariableOperand
from rulekit.values import Value


class Variable(VariableOperand):
    """
    Placeholder for a Context entry with a default value.

    A named Variable takes its value from the Context when the name is
    bound there; otherwise the default is used, resolved recursively when it
    is itself an operand. Anonymous Variables wrap literal data.
    """

    property_class = None
    # Builder subclasses render as their base so trees compare equal
    repr_name: Optional[str] = None

    def __init__(self, name: Optional[str] = None, value: Any = None):
        self._name = name
        self._value = value
        self._properties: Dict[Any, "Variable"] = {}

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        self._value = value

    @property
    def path(self) -> Optional[str]:
        return self._name

    def prepare_value(self, context) -> Value:
        if self._name is not None and self._name in context:
            resolved = context[self._name]
        else:
            resolved = self._default(context)
        return resolved if isinstance(resolved, Value) else Value(resolved)

    def _default(self, context) -> Any:
        if isinstance(self._value, VariableOperand):
            return self._value.prepare_value(context)
        return self._value

    def get_property(self, name: Any, default: Any = None) -> "Variable":
        """
        Return the cached child property, creating it on first access.

        Args:
            name: Property name or index
            default: Value used when the property cannot be resolved

        Returns:
            VariableProperty bound to this variable
        """
        if name not in self._properties:
            self._properties[name] = self._make_property(name, default)
        return self._properties[name]

    def _make_property(self, name: Any, default: Any) -> "Variable":
        from rulekit.variables.variable_property import VariableProperty

        factory = self.property_class or VariableProperty
        return factory(self, name, default)

    def __getitem__(self, name: Any) -> "Variable":
        return self.get_property(name)

    def __repr__(self) -> str:
        cls = self.repr_name or type(self).__name__
        if self._name is None:
            return f"{cls}(value={self._value!r})"
        if self._value is None:
            return f"{cls}({self._name!r})"
        return f"{cls}({self._name!r}, value={self._value!r})"
