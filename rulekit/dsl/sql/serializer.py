"""
SQL WHERE Serializer

Writes operator trees as SQL WHERE conditions. ``Matches`` and
``DoesNotMatch`` are written as ``LIKE`` when their pattern is one the
parser produces from a ``LIKE`` pattern.
"""

import math
import re
from typing import Any, List, Tuple

from rulekit.core.operator import Operator
from rulekit.dsl.introspection import field_segments, is_field, is_literal, literal_value, operator_name, unwrap_rule
from rulekit.dsl.sql.parser import KEYWORDS
from rulekit.exceptions import SerializationError

COMPONENT = "SQLWhereSerializer"

COMPARISONS = {
    "equal_to": "=",
    "not_equal_to": "<>",
    "less_than": "<",
    "less_than_or_equal_to": "<=",
    "greater_than": ">",
    "greater_than_or_equal_to": ">=",
}

LOGICAL = {"logical_or": ("OR", 1), "logical_and": ("AND", 2)}
NOT = 3
CONDITION = 4

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_INDEX = re.compile(r"^\d+$")
_REGEX_SPECIAL = set("()[]{}?*+|^$")


def render_field(segments: List[str]) -> str:
    """Join field segments, double-quoting those that are not plain identifiers."""
    parts = []
    for index, segment in enumerate(segments):
        plain = _IDENTIFIER.match(segment) or (index and _INDEX.match(segment))
        if len(segments) == 1 and segment.lower() in KEYWORDS:
            plain = False
        parts.append(segment if plain else '"' + segment.replace('"', '""') + '"')
    return ".".join(parts)


def render_literal(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(f"Cannot write non-finite number {value!r}", component=COMPONENT)
        return repr(value)
    if isinstance(value, str):
        return "'" + value.replace("'", "''") + "'"
    raise SerializationError(f"Cannot write value of type {type(value).__name__} in SQL", component=COMPONENT)


def regex_to_like(regex: Any) -> str:
    """
    Translate an anchored regular expression back into a LIKE pattern.

    Raises:
        SerializationError: If the expression uses anything LIKE cannot say
    """
    match = re.fullmatch(r"\^(.*)\$", regex, re.DOTALL) if isinstance(regex, str) else None
    if match is None:
        raise SerializationError(f"Pattern {regex!r} has no LIKE form", component=COMPONENT)

    body = match.group(1)
    out = []
    index = 0
    while index < len(body):
        char = body[index]
        if body.startswith(".*", index):
            out.append("%")
            index += 2
            continue
        if char == "\\" and index + 1 < len(body) and not body[index + 1].isalnum():
            escaped = body[index + 1]
            out.append("\\" + escaped if escaped in "%_" else escaped)
            index += 2
            continue
        if char == "\\" or char in _REGEX_SPECIAL:
            raise SerializationError(f"Pattern {regex!r} has no LIKE form", component=COMPONENT)

        if char == ".":
            out.append("_")
        elif char in "%_":
            out.append("\\" + char)
        else:
            out.append(char)
        index += 1
    return "".join(out)


class SQLWhereSerializer:
    """Serialize Rules or Propositions into SQL WHERE conditions."""

    def serialize(self, node: Any) -> str:
        return self._render(unwrap_rule(node))[0]

    def _render(self, node: Any) -> Tuple[str, int]:
        node = unwrap_rule(node)
        if not isinstance(node, Operator):
            raise SerializationError(f"Cannot serialize {node!r}", component=COMPONENT)

        name = operator_name(node)
        operands = node.operands

        if name in LOGICAL:
            word, precedence = LOGICAL[name]
            parts = []
            for operand in operands:
                text, inner = self._render(operand)
                parts.append(f"({text})" if inner <= precedence else text)
            return f" {word} ".join(parts), precedence

        if name == "logical_not":
            return self._negation(operands[0])

        if name in COMPARISONS:
            left, right = operands
            return f"{self._operand(left)} {COMPARISONS[name]} {self._operand(right)}", CONDITION
        if name == "is_null":
            return f"{self._operand(operands[0])} IS NULL", CONDITION
        if name == "between":
            return self._between(operands, "BETWEEN")
        if name in ("in", "not_in"):
            keyword = "IN" if name == "in" else "NOT IN"
            return f"{self._operand(operands[0])} {keyword} {self._value_list(operands[1])}", CONDITION
        if name in ("matches", "does_not_match"):
            keyword = "LIKE" if name == "matches" else "NOT LIKE"
            pattern = regex_to_like(literal_value(operands[1]))
            return f"{self._operand(operands[0])} {keyword} {render_literal(pattern)}", CONDITION

        raise SerializationError(f"Operator '{name}' has no SQL form", component=COMPONENT)

    def _negation(self, operand: Any) -> Tuple[str, int]:
        operand = unwrap_rule(operand)
        if isinstance(operand, Operator):
            name = operator_name(operand)
            if name == "is_null":
                return f"{self._operand(operand.operands[0])} IS NOT NULL", CONDITION
            if name == "between":
                return self._between(operand.operands, "NOT BETWEEN")

        text, inner = self._render(operand)
        return "NOT " + (f"({text})" if inner < NOT else text), NOT

    def _between(self, operands: List[Any], keyword: str) -> Tuple[str, int]:
        value, low, high = (self._operand(operand) for operand in operands)
        return f"{value} {keyword} {low} AND {high}", CONDITION

    @staticmethod
    def _operand(operand: Any) -> str:
        if is_field(operand):
            return render_field(field_segments(operand))
        return render_literal(literal_value(operand))

    @staticmethod
    def _value_list(operand: Any) -> str:
        values = literal_value(operand)
        if not isinstance(values, (list, tuple)) or not values:
            raise SerializationError("IN needs a non-empty list of values", component=COMPONENT)
        return "(" + ", ".join(render_literal(value) for value in values) + ")"
