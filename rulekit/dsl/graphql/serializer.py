"""
GraphQL Filter Serializer

Writes operator trees back as GraphQL filter objects. Field paths are
written as flat keys, which the parser reads back the same way as nested
objects.
"""

from typing import Any, Dict, List

from rulekit.core.operator import Operator
from rulekit.dsl.graphql.builder import VOCABULARY
from rulekit.dsl.graphql.parser import TYPE_NAMES
from rulekit.dsl.introspection import field_path, is_field, literal_value, operator_name, unwrap_rule
from rulekit.exceptions import SerializationError

COMPONENT = "GraphQLFilterSerializer"

OPERATORS = {name: token for token, name in VOCABULARY.items()}
TYPES = {name: spelling for spelling, name in reversed(list(TYPE_NAMES.items()))}


def _unsupported(node: Any) -> SerializationError:
    return SerializationError(f"Cannot express {node!r} as a GraphQL filter", component=COMPONENT)


class GraphQLFilterSerializer:
    """Serialize Rules or Propositions into GraphQL filter objects."""

    def __init__(self, separator: str = "."):
        self.separator = separator

    def serialize(self, node: Any) -> Dict[str, Any]:
        return self._filter(unwrap_rule(node))

    def _filter(self, node: Any) -> Dict[str, Any]:
        if not isinstance(node, Operator):
            raise _unsupported(node)

        name = operator_name(node)
        operands: List[Any] = node.operands

        if name == "logical_and":
            parts = [self._filter(operand) for operand in operands]
            return self._merge(parts) or {"AND": parts}
        if name == "logical_or":
            return {"OR": [self._filter(operand) for operand in operands]}
        if name == "logical_not":
            inner = operands[0]
            if isinstance(inner, Operator) and operator_name(inner) == "is_null" and is_field(inner.operands[0]):
                return {self._field(inner.operands[0]): {"isNull": False}}
            return {"NOT": self._filter(inner)}

        if not operands or not is_field(operands[0]):
            raise _unsupported(node)
        field = self._field(operands[0])

        if name == "is_null":
            return {field: {"isNull": True}}
        if name in TYPES:
            return {field: {"isType": TYPES[name]}}

        if name in OPERATORS and len(operands) == 2:
            value = literal_value(operands[1])
            if name == "equal_to" and not isinstance(value, dict):
                return {field: value}
            return {field: {OPERATORS[name]: value}}

        raise _unsupported(node)

    def _field(self, operand: Any) -> str:
        return field_path(operand, self.separator)

    @staticmethod
    def _merge(parts: List[Dict[str, Any]]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for part in parts:
            if len(part) != 1:
                return {}
            key = next(iter(part))
            if key in ("AND", "OR", "NOT") or key in merged:
                return {}
            merged.update(part)
        return merged
