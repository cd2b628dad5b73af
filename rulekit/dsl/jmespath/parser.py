"""
JMESPath Query Parser

Parses queries with the ``jmespath`` library and lowers the boolean part
of its AST (comparators, ``&&``, ``||``, ``!``, function calls, field paths,
list indexes and literals) into the shared AST. Queries using anything
else (projections, filters, pipes, JMESPath built-in functions, bare
truthiness tests) are left to the library; ``lower`` returns None for them.
"""

from typing import Any, Dict, List, Optional

import jmespath
from jmespath import exceptions as jmespath_exceptions
from jmespath.functions import Functions
from jmespath.parser import ParsedResult

from rulekit.dsl.ast import FieldNode, LiteralNode, Node, OperatorNode
from rulekit.exceptions import CompileError, DSLSyntaxError, UnknownOperatorError

COMPONENT = "JMESPathParser"

CONDITION_NODES = ("comparator", "and_expression", "or_expression", "not_expression")

# Built-ins with an operator counterpart; every other built-in runs in the library
LOWERED_FUNCTIONS = frozenset({"contains", "starts_with", "ends_with"})
JMESPATH_FUNCTIONS = frozenset(Functions.FUNCTION_TABLE)


class _NotLowerable(Exception):
    pass


def _describe(error: jmespath_exceptions.ParseError) -> str:
    if isinstance(error, jmespath_exceptions.LexerError):
        return error.message
    if isinstance(error, jmespath_exceptions.IncompleteExpressionError):
        return "Incomplete expression"
    return error.msg


class JMESPathParser:
    """Parse JMESPath queries into the shared AST."""

    def __init__(self, separator: str = "."):
        self.separator = separator

    def compile_query(self, source: Any) -> ParsedResult:
        """
        Parse source with the JMESPath grammar.

        Raises:
            DSLSyntaxError: If the query is empty or not valid JMESPath
        """
        if not isinstance(source, str) or not source.strip():
            raise DSLSyntaxError("Query is empty", position=0, component=COMPONENT)

        try:
            return jmespath.compile(source)
        except jmespath_exceptions.ParseError as e:
            raise DSLSyntaxError(_describe(e), position=e.lex_position, component=COMPONENT)

    def lower(self, parsed: Dict[str, Any]) -> Optional[Node]:
        """
        Lower a JMESPath AST into the shared AST.

        Returns:
            The shared AST, or None when the query needs the JMESPath runtime
        """
        try:
            return self._condition(parsed)
        except _NotLowerable:
            return None

    def parse(self, source: Any) -> Node:
        """
        Parse and lower source.

        Raises:
            DSLSyntaxError: If the query is not valid JMESPath
            CompileError: If the query has no operator tree equivalent
        """
        node = self.lower(self.compile_query(source).parsed)
        if node is None:
            raise CompileError(
                "Query needs the JMESPath runtime and has no operator tree equivalent",
                component=COMPONENT
            )
        return node

    @staticmethod
    def check_functions(parsed: Dict[str, Any]) -> None:
        """
        Reject function calls the JMESPath runtime does not know.

        Raises:
            UnknownOperatorError: For the first unknown function name
        """
        if parsed.get("type") == "function_expression" and parsed["value"] not in JMESPATH_FUNCTIONS:
            raise UnknownOperatorError(
                f"Unknown JMESPath function: {parsed['value']}",
                component=COMPONENT
            )
        for child in parsed.get("children", []):
            if isinstance(child, dict):
                JMESPathParser.check_functions(child)

    def _condition(self, node: Dict[str, Any]) -> Node:
        kind = node["type"]

        if kind == "comparator":
            left, right = node["children"]
            return OperatorNode(node["value"], (self._value(left), self._value(right)))

        if kind in ("and_expression", "or_expression"):
            token = "and" if kind == "and_expression" else "or"
            return OperatorNode(token, tuple(self._condition(child) for child in self._chain(node, kind)))

        if kind == "not_expression":
            return OperatorNode("not", (self._condition(node["children"][0]),))

        if kind == "function_expression":
            return self._function(node)

        raise _NotLowerable(kind)

    def _chain(self, node: Dict[str, Any], kind: str) -> List[Dict[str, Any]]:
        # a && b && c parses as and(and(a, b), c)
        if node["type"] != kind:
            return [node]
        return [part for child in node["children"] for part in self._chain(child, kind)]

    def _value(self, node: Dict[str, Any]) -> Node:
        kind = node["type"]
        if kind == "literal":
            return LiteralNode(node["value"])
        if kind == "function_expression":
            return self._function(node)
        return FieldNode(self.separator.join(self._path(node)))

    def _argument(self, node: Dict[str, Any]) -> Node:
        if node["type"] in CONDITION_NODES:
            return self._condition(node)
        return self._value(node)

    def _function(self, node: Dict[str, Any]) -> Node:
        name = node["value"]
        if name in JMESPATH_FUNCTIONS and name not in LOWERED_FUNCTIONS:
            raise _NotLowerable(name)
        return OperatorNode(name, tuple(self._argument(child) for child in node["children"]))

    def _path(self, node: Dict[str, Any]) -> List[str]:
        kind = node["type"]

        if kind == "field":
            return [node["value"]]

        if kind == "subexpression":
            return [segment for child in node["children"] for segment in self._path(child)]

        if kind == "index_expression":
            base, *indexes = node["children"]
            segments = self._path(base)
            for index in indexes:
                if index["type"] != "index" or index["value"] < 0:
                    raise _NotLowerable(index["type"])
                segments.append(str(index["value"]))
            return segments

        raise _NotLowerable(kind)
