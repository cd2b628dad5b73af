"""
Natural Language Serializer

Writes operator trees as controlled English. Only the conditions the
parser understands can be written: a field on the left and literal values
on the right.
"""

import json
import re
from typing import Any, List, Tuple

from rulekit.core.operator import Operator
from rulekit.dsl.introspection import field_segments, is_literal, literal_value, operator_name, unwrap_rule
from rulekit.dsl.natural.parser import CONNECTIVES
from rulekit.exceptions import SerializationError

PHRASES = {
    "equal_to": "is",
    "not_equal_to": "is not",
    "greater_than": "is greater than",
    "greater_than_or_equal_to": "is at least",
    "less_than": "is less than",
    "less_than_or_equal_to": "is at most",
    "string_contains": "contains",
    "string_does_not_contain": "does not contain",
    "starts_with": "starts with",
    "ends_with": "ends with",
}

LOGICAL = {"logical_or": ("or", 1), "logical_and": ("and", 2)}
CONDITION = 3

_SEGMENT = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_\-]*$")
_NUMBER = re.compile(r"^-?\d+(?:\.\d+)?$")


def _field(operand: Any) -> str:
    segments = field_segments(operand)
    path = ".".join(segments)
    if not all(_SEGMENT.match(segment) for segment in segments) or _NUMBER.match(path) or path.lower() in CONNECTIVES:
        raise SerializationError(
            f"Field {path!r} cannot be written as a natural language field name",
            component="NaturalLanguageSerializer"
        )
    return path


def _value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    raise SerializationError(
        f"Cannot write value of type {type(value).__name__} in natural language",
        component="NaturalLanguageSerializer"
    )


def _value_list(values: Any) -> str:
    if not isinstance(values, (list, tuple)) or not values:
        raise SerializationError(
            "Membership conditions need a non-empty list of values",
            component="NaturalLanguageSerializer"
        )
    return ", ".join(_value(item) for item in values)


class NaturalLanguageSerializer:
    """Serialize Rules or Propositions into controlled natural language."""

    def serialize(self, node: Any) -> str:
        return self._render(unwrap_rule(node))[0]

    def _render(self, node: Any) -> Tuple[str, int]:
        node = unwrap_rule(node)
        if not isinstance(node, Operator):
            raise SerializationError(f"Cannot serialize {node!r}", component="NaturalLanguageSerializer")

        name = operator_name(node)
        operands: List[Any] = node.operands

        if name in LOGICAL:
            word, precedence = LOGICAL[name]
            parts = []
            for operand in operands:
                text, inner = self._render(operand)
                parts.append(f"({text})" if inner <= precedence else text)
            return f" {word} ".join(parts), precedence

        field = _field(operands[0])
        values = [literal_value(operand) for operand in operands[1:]]

        if name in PHRASES and len(values) == 1:
            return f"{field} {PHRASES[name]} {_value(values[0])}", CONDITION
        if name == "between":
            return f"{field} is between {_value(values[0])} and {_value(values[1])}", CONDITION
        if name == "in":
            return f"{field} is one of {_value_list(values[0])}", CONDITION
        if name == "not_in":
            return f"{field} is not one of {_value_list(values[0])}", CONDITION

        raise SerializationError(
            f"Operator '{name}' has no natural language form",
            component="NaturalLanguageSerializer"
        )
