"""
Helpers for reading compiled operator trees back, used by the serializers.
"""

from typing import Any, List

from rulekit.builder.registry import normalize_token
from rulekit.core.operator import Operator
from rulekit.core.proposition import VariableOperand
from rulekit.core.rule import Rule
from rulekit.exceptions import SerializationError
from rulekit.variables import Variable, VariableProperty


def unwrap_rule(node: Any) -> Any:
    """Return the proposition of a Rule, or the node itself."""
    while isinstance(node, Rule):
        node = node.proposition
    return node


def operator_name(node: Operator) -> str:
    """Registry id of an operator instance (``GreaterThanOrEqualTo`` -> ``greater_than_or_equal_to``)."""
    return normalize_token(type(node).__name__)


def is_field(operand: Any) -> bool:
    if isinstance(operand, VariableProperty):
        return operand.name is not None and is_field(operand.parent)
    return isinstance(operand, Variable) and operand.name is not None


def is_literal(operand: Any) -> bool:
    return (
        isinstance(operand, Variable)
        and not isinstance(operand, VariableProperty)
        and operand.name is None
        and not isinstance(operand.value, VariableOperand)
    )


def field_segments(operand: Any) -> List[str]:
    """
    Return the path segments of a field operand.

    Raises:
        SerializationError: If the operand is not a named variable chain
    """
    if not is_field(operand):
        raise SerializationError(
            f"Expected a field reference, got {operand!r}",
            component="Serializer"
        )

    segments = []
    while isinstance(operand, VariableProperty):
        segments.append(str(operand.name))
        operand = operand.parent
    segments.append(operand.name)
    return list(reversed(segments))


def field_path(operand: Any, separator: str = ".") -> str:
    return separator.join(field_segments(operand))


def literal_value(operand: Any) -> Any:
    """
    Return the raw value of a literal operand.

    Raises:
        SerializationError: If the operand is not an anonymous literal
    """
    if not is_literal(operand):
        raise SerializationError(
            f"Expected a literal value, got {operand!r}",
            component="Serializer"
        )
    return operand.value
