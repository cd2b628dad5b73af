"""
MongoDB Query Serializer

Writes operator trees back as MongoDB-style query documents. Equality
against a literal is written implicitly and single-field conditions under
an AND are merged into one document when their fields are distinct.
"""

import re
from typing import Any, Dict, List

from rulekit.core.operator import Operator
from rulekit.dsl.introspection import field_path, is_field, is_literal, literal_value, operator_name, unwrap_rule
from rulekit.dsl.mongo.builder import VOCABULARY
from rulekit.dsl.mongo.parser import TYPE_NAMES
from rulekit.exceptions import SerializationError

COMPONENT = "MongoQuerySerializer"

# Registry id -> query operator, first spelling wins
OPERATORS: Dict[str, str] = {}
for _token, _name in VOCABULARY.items():
    OPERATORS.setdefault(_name, _token)

LOGICAL = {"logical_and", "logical_or", "logical_nor", "logical_xor", "logical_nand"}
MEASURES = {"string_length": "$strLength", "array_count": "$size"}
COMPARISONS = {"equal_to", "not_equal_to", "greater_than", "greater_than_or_equal_to", "less_than", "less_than_or_equal_to"}
TYPES = {name: spelling for spelling, name in reversed(list(TYPE_NAMES.items()))}

INLINE_FLAGS = re.compile(r"^\(\?([ims]+)\)")


def _unsupported(node: Any) -> SerializationError:
    return SerializationError(f"Cannot express {node!r} as a MongoDB query", component=COMPONENT)


def _regex(pattern: Any) -> Dict[str, Any]:
    if isinstance(pattern, str):
        match = INLINE_FLAGS.match(pattern)
        if match:
            return {"$regex": pattern[match.end():], "$options": match.group(1)}
    return {"$regex": pattern}


class MongoQuerySerializer:
    """Serialize Rules or Propositions into MongoDB-style query documents."""

    def __init__(self, separator: str = "."):
        self.separator = separator

    def serialize(self, node: Any) -> Dict[str, Any]:
        return self._query(unwrap_rule(node))

    def _query(self, node: Any) -> Dict[str, Any]:
        if not isinstance(node, Operator):
            raise _unsupported(node)

        name = operator_name(node)
        operands: List[Any] = node.operands

        if name in LOGICAL:
            parts = [self._query(operand) for operand in operands]
            if name == "logical_and":
                merged = self._merge(parts)
                if merged is not None:
                    return merged
            return {OPERATORS[name]: parts}

        if name == "logical_not":
            return self._negated(operands[0])

        if name == "equal_to" and all(is_literal(operand) for operand in operands):
            if literal_value(operands[0]) is True and literal_value(operands[1]) is True:
                return {}

        if name in COMPARISONS and isinstance(operands[0], Operator):
            return self._measured(name, operands[0], operands[1])

        field = self._field(operands[0])

        if name == "is_null":
            return {field: {"$exists": False}}
        if name == "is_empty":
            return {field: {"$empty": True}}
        if name in TYPES:
            return {field: {"$type": TYPES[name]}}

        values = [literal_value(operand) for operand in operands[1:]]

        if name == "equal_to" and not isinstance(values[0], dict):
            return {field: values[0]}
        if name == "matches":
            return {field: _regex(values[0])}
        if name in ("between", "is_between_dates"):
            return {field: {OPERATORS[name]: values}}
        if name in OPERATORS and len(values) == 1:
            return {field: {OPERATORS[name]: values[0]}}

        raise _unsupported(node)

    def _negated(self, operand: Any) -> Dict[str, Any]:
        if isinstance(operand, Operator) and len(operand.operands) == 1 and is_field(operand.operands[0]):
            name = operator_name(operand)
            field = self._field(operand.operands[0])
            if name == "is_null":
                return {field: {"$exists": True}}
            if name == "is_empty":
                return {field: {"$empty": False}}
        return {"$not": self._query(operand)}

    def _measured(self, name: str, measure: Operator, limit: Any) -> Dict[str, Any]:
        measure_name = operator_name(measure)
        if measure_name not in MEASURES:
            raise _unsupported(measure)
        field = self._field(measure.operands[0])
        value = literal_value(limit)
        if name == "equal_to" and isinstance(value, (int, float)) and not isinstance(value, bool):
            return {field: {MEASURES[measure_name]: value}}
        return {field: {MEASURES[measure_name]: {OPERATORS[name]: value}}}

    def _field(self, operand: Any) -> str:
        return field_path(operand, self.separator)

    @staticmethod
    def _merge(parts: List[Dict[str, Any]]) -> Any:
        keys = []
        for part in parts:
            if len(part) != 1:
                return None
            key = next(iter(part))
            if key.startswith("$") or key in keys:
                return None
            keys.append(key)
        merged: Dict[str, Any] = {}
        for part in parts:
            merged.update(part)
        return merged
