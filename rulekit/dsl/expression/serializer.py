"""
Expression Serializer

Writes operator trees back as infix expressions, adding parentheses only
where precedence requires them.
"""

import json
import math
import re
from decimal import Decimal
from typing import Any, List, Tuple

from rulekit.core.operator import Operator
from rulekit.core.proposition import VariableOperand
from rulekit.dsl.expression.parser import KEYWORDS
from rulekit.dsl.introspection import (
    field_segments,
    is_field,
    is_literal,
    operator_name,
    unwrap_rule,
)
from rulekit.exceptions import SerializationError
from rulekit.variables import Variable

ATOM = 10
PREFIX_PRECEDENCE = 9

INFIX = {
    "logical_or": ("or", 1),
    "logical_xor": ("xor", 2),
    "logical_and": ("and", 3),
    "equal_to": ("==", 4),
    "not_equal_to": ("!=", 4),
    "same_as": ("===", 4),
    "not_same_as": ("!==", 4),
    "less_than": ("<", 5),
    "less_than_or_equal_to": ("<=", 5),
    "greater_than": (">", 5),
    "greater_than_or_equal_to": (">=", 5),
    "in": ("in", 5),
    "not_in": ("not in", 5),
    "matches": ("matches", 5),
    "addition": ("+", 6),
    "subtraction": ("-", 6),
    "multiplication": ("*", 7),
    "division": ("/", 7),
    "modulo": ("%", 7),
    "exponentiate": ("**", 8),
}

PREFIX = {
    "logical_not": "not ",
    "negation": "-",
}

# Flattened by the parser, so their operands always need grouping
N_ARY = {"logical_and", "logical_or"}

FUNCTION_NAMES = {
    "string_contains": "contains",
}


_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_INDEX = re.compile(r"^\d+$")


def render_field(segments: List[str]) -> str:
    """
    Join field segments into one expression identifier.

    Raises:
        SerializationError: If a segment would not read back as the same field
    """
    for index, segment in enumerate(segments):
        if not (_IDENTIFIER.match(segment) or (index and _INDEX.match(segment))):
            raise SerializationError(
                f"Field segment {segment!r} is not a valid expression identifier",
                component="ExpressionSerializer"
            )
    if len(segments) == 1 and segments[0].lower() in KEYWORDS:
        raise SerializationError(
            f"Field name {segments[0]!r} is a reserved word",
            component="ExpressionSerializer"
        )
    return ".".join(segments)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def render_literal(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(f"Cannot write non-finite number {value!r}", component="ExpressionSerializer")
        return repr(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(render_literal(item) for item in value) + "]"
    raise SerializationError(
        f"Cannot write literal of type {type(value).__name__}",
        component="ExpressionSerializer"
    )


class ExpressionSerializer:
    """Serialize Rules or Propositions into infix expression text."""

    def serialize(self, node: Any) -> str:
        text, _ = self._render(unwrap_rule(node))
        return text

    def _render(self, node: Any) -> Tuple[str, int]:
        node = unwrap_rule(node)

        if is_field(node):
            return render_field(field_segments(node)), ATOM
        if is_literal(node):
            return render_literal(node.value), ATOM
        if isinstance(node, Variable) and node.name is None and isinstance(node.value, VariableOperand):
            return self._render(node.value)
        if not isinstance(node, Operator):
            raise SerializationError(
                f"Cannot serialize {node!r}",
                component="ExpressionSerializer"
            )

        name = operator_name(node)
        operands = node.operands

        if name in PREFIX:
            text, precedence = self._render(operands[0])
            if precedence < PREFIX_PRECEDENCE or (name == "negation" and is_literal(operands[0])):
                text = f"({text})"
            return PREFIX[name] + text, PREFIX_PRECEDENCE

        if name in N_ARY:
            symbol, precedence = INFIX[name]
            parts = [self._group(operand, precedence, strict=True) for operand in operands]
            return f" {symbol} ".join(parts), precedence

        if name in INFIX and len(operands) == 2:
            symbol, precedence = INFIX[name]
            right_assoc = name == "exponentiate"
            left = self._group(operands[0], precedence, strict=right_assoc)
            right = self._group(operands[1], precedence, strict=not right_assoc)
            return f"{left} {symbol} {right}", precedence

        function = FUNCTION_NAMES.get(name, _camel(name))
        arguments = ", ".join(self._render(operand)[0] for operand in operands)
        return f"{function}({arguments})", ATOM

    def _group(self, operand: Any, precedence: int, strict: bool) -> str:
        text, inner = self._render(operand)
        if inner < precedence or (strict and inner == precedence):
            return f"({text})"
        return text
