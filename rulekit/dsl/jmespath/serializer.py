"""
JMESPath Serializer

Writes operator trees as JMESPath queries. Numeric path segments are written
as list indexes. Operators without a JMESPath spelling are written as
function calls named after their registry id, which the parser reads back
through the registry. Queries evaluated by the JMESPath runtime are written
back verbatim.
"""

import json
import re
from typing import Any, List, Tuple

from rulekit.core.operator import Operator
from rulekit.core.proposition import VariableOperand
from rulekit.dsl.introspection import field_segments, is_field, is_literal, operator_name, unwrap_rule
from rulekit.dsl.jmespath.proposition import JMESPathProposition
from rulekit.exceptions import SerializationError
from rulekit.variables import Variable

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_INDEX = re.compile(r"^[0-9]+$")

ATOM = 5
NOT_PRECEDENCE = 4
COMPARISON_PRECEDENCE = 3

LOGICAL = {"logical_or": ("||", 1), "logical_and": ("&&", 2)}

COMPARATORS = {
    "equal_to": "==",
    "not_equal_to": "!=",
    "less_than": "<",
    "less_than_or_equal_to": "<=",
    "greater_than": ">",
    "greater_than_or_equal_to": ">=",
}

FUNCTION_NAMES = {"string_contains": "contains"}


def _path(segments: List[str]) -> str:
    text = ""
    for segment in segments:
        if text and _INDEX.match(segment):
            text += f"[{segment}]"
        elif _IDENTIFIER.match(segment):
            text += ("." if text else "") + segment
        else:
            text += ("." if text else "") + json.dumps(segment)
    return text


def _literal(value: Any) -> str:
    if isinstance(value, str):
        return "'" + value.replace("'", "\\'") + "'"
    try:
        body = json.dumps(value)
    except TypeError:
        raise SerializationError(
            f"Cannot write literal of type {type(value).__name__}",
            component="JMESPathSerializer"
        )
    return "`" + body.replace("`", "\\`") + "`"


class JMESPathSerializer:
    """Serialize Rules or Propositions into JMESPath queries."""

    def serialize(self, node: Any) -> str:
        node = unwrap_rule(node)
        if isinstance(node, JMESPathProposition):
            return node.expression
        return self._render(node)[0]

    def _render(self, node: Any) -> Tuple[str, int]:
        node = unwrap_rule(node)

        if isinstance(node, JMESPathProposition):
            return f"({node.expression})", ATOM

        if is_field(node):
            return _path(field_segments(node)), ATOM
        if is_literal(node):
            return _literal(node.value), ATOM
        if isinstance(node, Variable) and node.name is None and isinstance(node.value, VariableOperand):
            return self._render(node.value)
        if not isinstance(node, Operator):
            raise SerializationError(f"Cannot serialize {node!r}", component="JMESPathSerializer")

        name = operator_name(node)
        operands = node.operands

        if name in LOGICAL:
            symbol, precedence = LOGICAL[name]
            parts = []
            for operand in operands:
                text, inner = self._render(operand)
                parts.append(f"({text})" if inner <= precedence else text)
            return f" {symbol} ".join(parts), precedence

        if name == "logical_not":
            text, inner = self._render(operands[0])
            return "!" + (text if inner >= ATOM else f"({text})"), NOT_PRECEDENCE

        if name in COMPARATORS:
            parts = []
            for operand in operands:
                text, inner = self._render(operand)
                parts.append(text if inner > COMPARISON_PRECEDENCE else f"({text})")
            return f"{parts[0]} {COMPARATORS[name]} {parts[1]}", COMPARISON_PRECEDENCE

        function = FUNCTION_NAMES.get(name, name)
        arguments = ", ".join(self._render(operand)[0] for operand in operands)
        return f"{function}({arguments})", ATOM
