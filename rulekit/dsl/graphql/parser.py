"""
GraphQL Filter Parser

Parses GraphQL-style filter objects (dicts or JSON text) into the shared
AST. ``AND``/``OR`` take lists of filters, ``NOT`` takes one filter, and
nested objects without operator keys are flattened into field paths:
``{"user": {"age": {"gte": 18}}}`` is ``user.age >= 18``.
"""

import json
from typing import Any, Dict, List, Union

from rulekit.dsl.ast import FieldNode, LiteralNode, Node, OperatorNode
from rulekit.exceptions import DSLSyntaxError

COMPONENT = "GraphQLFilterParser"

COMPARISON_OPERATORS = ("eq", "ne", "gt", "gte", "lt", "lte")
LIST_OPERATORS = ("in", "notIn")
STRING_OPERATORS = (
    "contains", "notContains", "containsInsensitive", "notContainsInsensitive",
    "startsWith", "endsWith", "match",
)
OPERATORS = COMPARISON_OPERATORS + LIST_OPERATORS + STRING_OPERATORS + ("isNull", "isType")

TYPE_NAMES = {
    "null": "is_null",
    "string": "is_string",
    "number": "is_numeric",
    "numeric": "is_numeric",
    "boolean": "is_boolean",
    "bool": "is_boolean",
    "array": "is_array",
}


def _error(message: str) -> DSLSyntaxError:
    return DSLSyntaxError(message, component=COMPONENT)


def _all_of(nodes: List[Node]) -> Node:
    return nodes[0] if len(nodes) == 1 else OperatorNode("AND", tuple(nodes))


def _has_operators(value: Dict[str, Any]) -> bool:
    return any(key in OPERATORS for key in value)


class GraphQLFilterParser:
    """
    Parse GraphQL filter objects into the shared AST.

    Args:
        separator: Joins nested object keys into field paths
    """

    def __init__(self, separator: str = "."):
        self.separator = separator

    def parse(self, source: Union[str, Dict[str, Any]]) -> Node:
        if isinstance(source, str):
            try:
                source = json.loads(source)
            except json.JSONDecodeError as e:
                raise DSLSyntaxError(f"Invalid JSON: {e.msg}", position=e.pos, component=COMPONENT)

        if not isinstance(source, dict):
            raise _error(f"Invalid filter: expected object, got {type(source).__name__}")
        return self._filter(source)

    def _filter(self, source: Dict[str, Any]) -> Node:
        if not source:
            raise _error("Filter must not be empty")

        nodes = []
        for key, value in source.items():
            if key in ("AND", "OR"):
                nodes.append(OperatorNode(key, tuple(self._filters(key, value))))
            elif key == "NOT":
                if not isinstance(value, dict):
                    raise _error("NOT operator expects an object")
                nodes.append(OperatorNode("NOT", (self._filter(value),)))
            else:
                nodes.append(self._field_condition(str(key), value))
        return _all_of(nodes)

    def _filters(self, operator: str, value: Any) -> List[Node]:
        if not isinstance(value, list) or not value:
            raise _error(f"{operator} operator expects a non-empty array")
        nodes = []
        for item in value:
            if not isinstance(item, dict):
                raise _error(f"Invalid filter in {operator}")
            nodes.append(self._filter(item))
        return nodes

    def _field_condition(self, path: str, value: Any) -> Node:
        if not isinstance(value, dict):
            return OperatorNode("eq", (FieldNode(path), LiteralNode(value)))
        if not value:
            raise _error(f"Empty condition for field '{path}'")
        if not _has_operators(value):
            return _all_of([
                self._field_condition(f"{path}{self.separator}{key}", nested)
                for key, nested in value.items()
            ])
        return _all_of([
            self._operator(FieldNode(path), operator, operand)
            for operator, operand in value.items()
        ])

    @staticmethod
    def _operator(field: FieldNode, operator: str, operand: Any) -> Node:
        if operator in COMPARISON_OPERATORS:
            return OperatorNode(operator, (field, LiteralNode(operand)))

        if operator in LIST_OPERATORS:
            if not isinstance(operand, list):
                raise _error(f"{operator} operator expects an array")
            return OperatorNode(operator, (field, LiteralNode(operand)))

        if operator in STRING_OPERATORS:
            if not isinstance(operand, str):
                raise _error(f"{operator} operator expects a string")
            return OperatorNode(operator, (field, LiteralNode(operand)))

        if operator == "isNull":
            if not isinstance(operand, bool):
                raise _error("isNull operator expects a boolean")
            null_check = OperatorNode("is_null", (field,))
            return null_check if operand else OperatorNode("NOT", (null_check,))

        if operator == "isType":
            if operand not in TYPE_NAMES:
                raise _error(f"Unsupported type: {operand!r}")
            return OperatorNode(TYPE_NAMES[operand], (field,))

        raise _error(f"Unsupported operator: {operator}")
