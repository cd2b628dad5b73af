"""
LDAP Filter Serializer

Writes operator trees as LDAP search filters. Comparisons need a field on
the left and a literal on the right; ``Matches`` is written only for the
anchored wildcard patterns the parser produces.
"""

import math
import re
from typing import Any, List, Optional

from rulekit.core.operator import Operator
from rulekit.dsl.introspection import field_segments, literal_value, operator_name, unwrap_rule
from rulekit.dsl.ldap.parser import NUMBER, WORD_CONSTANTS
from rulekit.exceptions import SerializationError

COMPONENT = "LDAPFilterSerializer"

COMPARISONS = {
    "equal_to": "=",
    "not_equal_to": "!=",
    "greater_than_or_equal_to": ">=",
    "less_than_or_equal_to": "<=",
    "greater_than": ">",
    "less_than": "<",
}

LOGICAL = {"logical_and": "&", "logical_or": "|"}

_ATTRIBUTE_SEGMENT = re.compile(r"^[A-Za-z0-9_\-]+$")
_RESERVED = set("\\*()\0")
_REGEX_SPECIAL = set("()[]{}?*+|^$")


def _hex(char: str) -> str:
    return "".join(f"\\{byte:02x}" for byte in char.encode("utf-8"))


def escape_value(text: str, leading: bool = True, trailing: bool = True) -> str:
    """Escape reserved characters, and whitespace the parser would trim."""
    out = [_hex(char) if char in _RESERVED else char for char in text]
    if leading:
        for index, char in enumerate(text):
            if not char.isspace():
                break
            out[index] = _hex(char)
    if trailing:
        for index in range(len(text) - 1, -1, -1):
            if not text[index].isspace():
                break
            out[index] = _hex(text[index])
    return "".join(out)


def render_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(f"Cannot write non-finite number {value!r}", component=COMPONENT)
        return repr(value)
    if isinstance(value, str):
        text = escape_value(value)
        # An escape keeps words and numbers from being read back typed
        if value in WORD_CONSTANTS or NUMBER.match(value):
            text = _hex(value[0]) + text[1:]
        return text
    raise SerializationError(f"Cannot write value of type {type(value).__name__} in a filter", component=COMPONENT)


def render_attribute(operand: Any) -> str:
    segments = field_segments(operand)
    if not all(_ATTRIBUTE_SEGMENT.match(segment) for segment in segments):
        raise SerializationError(
            f"Field {'.'.join(segments)!r} cannot be written as an LDAP attribute",
            component=COMPONENT
        )
    return ".".join(segments)


def regex_to_wildcard(regex: Any) -> Optional[List[str]]:
    """Split an anchored wildcard pattern into its literal parts, or None."""
    match = re.fullmatch(r"\^(.*)\$", regex, re.DOTALL) if isinstance(regex, str) else None
    if match is None:
        return None

    body = match.group(1)
    parts = [""]
    index = 0
    while index < len(body):
        char = body[index]
        if body.startswith(".*", index):
            parts.append("")
            index += 2
            continue
        if char == "\\" and index + 1 < len(body) and not body[index + 1].isalnum():
            parts[-1] += body[index + 1]
            index += 2
            continue
        if char in "\\." or char in _REGEX_SPECIAL:
            return None
        parts[-1] += char
        index += 1

    if len(parts) < 2 or parts == ["", ""]:
        return None
    return parts


class LDAPFilterSerializer:
    """Serialize Rules or Propositions into LDAP search filters."""

    def serialize(self, node: Any) -> str:
        return self._render(unwrap_rule(node))

    def _render(self, node: Any) -> str:
        node = unwrap_rule(node)
        if not isinstance(node, Operator):
            raise SerializationError(f"Cannot serialize {node!r}", component=COMPONENT)

        name = operator_name(node)
        operands = node.operands

        if name in LOGICAL:
            return f"({LOGICAL[name]}{''.join(self._render(operand) for operand in operands)})"

        if name == "logical_not":
            inner = unwrap_rule(operands[0])
            if isinstance(inner, Operator) and operator_name(inner) == "is_null":
                return f"({render_attribute(inner.operands[0])}=*)"
            return f"(!{self._render(inner)})"

        if name == "is_null":
            return f"(!({render_attribute(operands[0])}=*))"

        if name in COMPARISONS:
            field, value = operands
            return f"({render_attribute(field)}{COMPARISONS[name]}{render_value(literal_value(value))})"

        if name == "string_contains_insensitive":
            field, value = operands
            text = literal_value(value)
            if not isinstance(text, str):
                raise SerializationError("Approximate matches need a string value", component=COMPONENT)
            return f"({render_attribute(field)}~={escape_value(text)})"

        if name == "matches":
            field, pattern = operands
            parts = regex_to_wildcard(literal_value(pattern))
            if parts is None:
                raise SerializationError(
                    f"Pattern {literal_value(pattern)!r} has no LDAP wildcard form",
                    component=COMPONENT
                )
            last = len(parts) - 1
            value = "*".join(
                escape_value(part, leading=index == 0, trailing=index == last)
                for index, part in enumerate(parts)
            )
            return f"({render_attribute(field)}={value})"

        raise SerializationError(f"Operator '{name}' has no LDAP filter form", component=COMPONENT)
