"""
MongoDB Query Parser

Parses MongoDB-style query documents (dicts or JSON text) into the shared
AST. Keys of one document are combined with AND; a bare value is an
equality check; ``{}`` matches everything.
"""

import json
from typing import Any, Dict, List, Union

from rulekit.dsl.ast import FieldNode, LiteralNode, Node, OperatorNode
from rulekit.exceptions import DSLSyntaxError

COMPONENT = "MongoQueryParser"

LOGICAL_OPERATORS = ("$and", "$or", "$nor", "$xor", "$nand")

COMPARISON_OPERATORS = ("$eq", "$ne", "$gt", "$gte", "$lt", "$lte")

# Field operators taking the field and one literal
VALUE_OPERATORS = COMPARISON_OPERATORS + (
    "$in", "$nin", "$same", "$nsame", "$notRegex",
    "$contains", "$containsi", "$notContains", "$notContainsi",
    "$startsWith", "$startsWithi", "$endsWith", "$endsWithi",
    "$after", "$before",
)

TYPE_NAMES = {
    "null": "is_null",
    "string": "is_string",
    "number": "is_numeric",
    "numeric": "is_numeric",
    "boolean": "is_boolean",
    "bool": "is_boolean",
    "array": "is_array",
}

REGEX_FLAGS = "ims"


def _error(message: str) -> DSLSyntaxError:
    return DSLSyntaxError(message, component=COMPONENT)


def _negate(node: Node) -> Node:
    return OperatorNode("logical_not", (node,))


def _all_of(nodes: List[Node]) -> Node:
    return nodes[0] if len(nodes) == 1 else OperatorNode("$and", tuple(nodes))


def _is_operator_document(value: Any) -> bool:
    return isinstance(value, dict) and bool(value) and all(
        isinstance(key, str) and key.startswith("$") for key in value
    )


class MongoQueryParser:
    """Parse MongoDB-style queries into the shared AST."""

    def parse(self, query: Union[str, Dict[str, Any]]) -> Node:
        if isinstance(query, str):
            try:
                query = json.loads(query)
            except json.JSONDecodeError as e:
                raise DSLSyntaxError(f"Invalid JSON: {e.msg}", position=e.pos, component=COMPONENT)

        if not isinstance(query, dict):
            raise _error(f"Query must be an object, got {type(query).__name__}")
        return self._query(query)

    def _query(self, query: Dict[str, Any]) -> Node:
        if not query:
            return OperatorNode("$eq", (LiteralNode(True), LiteralNode(True)))

        nodes = []
        for key, value in query.items():
            if key in LOGICAL_OPERATORS:
                nodes.append(OperatorNode(key, tuple(self._subqueries(key, value))))
            elif key == "$not":
                nodes.append(_negate(self._not_operand(value)))
            elif isinstance(key, str) and key.startswith("$"):
                raise _error(f"Unsupported top-level operator: {key}")
            else:
                nodes.append(self._field_condition(key, value))
        return _all_of(nodes)

    def _subqueries(self, operator: str, value: Any) -> List[Node]:
        if not isinstance(value, list) or not value:
            raise _error(f"{operator} requires a non-empty array of queries")
        nodes = []
        for item in value:
            if not isinstance(item, dict):
                raise _error(f"{operator} items must be query objects")
            nodes.append(self._query(item))
        return nodes

    def _not_operand(self, value: Any) -> Node:
        if isinstance(value, str):
            return _negate(OperatorNode("is_null", (FieldNode(value),)))
        if isinstance(value, dict):
            return self._query(value)
        raise _error("$not requires a query object or a field name")

    def _field_condition(self, key: Any, value: Any) -> Node:
        if not isinstance(key, str) or not key:
            raise _error(f"Invalid field name: {key!r}")
        field = FieldNode(key)

        if not _is_operator_document(value):
            return OperatorNode("$eq", (field, LiteralNode(value)))

        nodes = []
        for operator, operand in value.items():
            if operator == "$options":
                if "$regex" not in value:
                    raise _error("$options requires $regex")
                continue
            nodes.append(self._field_operator(field, operator, operand, value))
        return _all_of(nodes)

    def _field_operator(self, field: FieldNode, operator: str, operand: Any, document: Dict[str, Any]) -> Node:
        if operator in VALUE_OPERATORS:
            if operator in ("$in", "$nin") and not isinstance(operand, list):
                raise _error(f"{operator} requires an array")
            return OperatorNode(operator, (field, LiteralNode(operand)))

        if operator == "$regex":
            return OperatorNode("$regex", (field, LiteralNode(self._regex(operand, document.get("$options", "")))))

        if operator in ("$between", "$betweenDates"):
            if not isinstance(operand, list) or len(operand) != 2:
                raise _error(f"{operator} requires exactly 2 values [min, max]")
            return OperatorNode(operator, (field, LiteralNode(operand[0]), LiteralNode(operand[1])))

        if operator == "$exists":
            if not isinstance(operand, bool):
                raise _error("$exists requires a boolean")
            exists_check = OperatorNode("is_null", (field,))
            return _negate(exists_check) if operand else exists_check

        if operator == "$empty":
            if not isinstance(operand, bool):
                raise _error("$empty requires a boolean")
            empty_check = OperatorNode("is_empty", (field,))
            return empty_check if operand else _negate(empty_check)

        if operator == "$type":
            if operand not in TYPE_NAMES:
                raise _error(f"Unsupported $type: {operand!r}")
            return OperatorNode(TYPE_NAMES[operand], (field,))

        if operator in ("$strLength", "$size"):
            return self._measure(OperatorNode(operator, (field,)), operator, operand)

        raise _error(f"Unsupported operator: {operator}")

    def _measure(self, measured: Node, operator: str, operand: Any) -> Node:
        if isinstance(operand, (int, float)) and not isinstance(operand, bool):
            return OperatorNode("$eq", (measured, LiteralNode(operand)))
        if _is_operator_document(operand):
            nodes = []
            for comparison, limit in operand.items():
                if comparison not in COMPARISON_OPERATORS:
                    raise _error(f"{operator} does not support {comparison}")
                nodes.append(OperatorNode(comparison, (measured, LiteralNode(limit))))
            return _all_of(nodes)
        raise _error(f"{operator} requires a number or comparison object")

    @staticmethod
    def _regex(pattern: Any, options: Any) -> str:
        if not isinstance(pattern, str):
            raise _error("$regex requires a string")
        if not isinstance(options, str):
            raise _error("$options must be a string")
        flags = "".join(flag for flag in REGEX_FLAGS if flag in options)
        return f"(?{flags}){pattern}" if flags else pattern
