"""
SQL WHERE Parser

Parses the condition part of a SQL ``WHERE`` clause, such as
``age >= 18 AND country IN ('US', 'CA')``, into the shared AST.

Precedence from lowest to highest is ``OR``, ``AND``, ``NOT``, then the
conditions: comparisons (``=``, ``!=``, ``<>``, ``<``, ``<=``, ``>``,
``>=``), ``IS [NOT] NULL``, ``[NOT] BETWEEN``, ``[NOT] IN`` and
``[NOT] LIKE``. Keywords are case-insensitive. Strings use single quotes
with ``''`` for a quote; identifiers may be double-quoted.
"""

import re
from typing import Any, List

from rulekit.dsl.ast import FieldNode, LiteralNode, Node, OperatorNode
from rulekit.dsl.lexer import Lexer, Token, TokenStream, parse_number
from rulekit.exceptions import DSLSyntaxError

COMPONENT = "SQLWhereParser"

_QUOTED = r'"(?:[^"]|"")*"'
_SEGMENT = re.compile(rf'[A-Za-z0-9_]+|{_QUOTED}')

LEXER = Lexer(
    [
        ("WS", r"\s+"),
        ("STRING", r"'(?:[^']|'')*'"),
        ("NUMBER", r"-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?(?![A-Za-z0-9_])"),
        ("NAME", rf"(?:[A-Za-z_][A-Za-z0-9_]*|{_QUOTED})(?:\.(?:[A-Za-z0-9_]+|{_QUOTED}))*"),
        ("OP", r"<>|!=|<=|>=|[=<>(),]"),
    ],
    component=COMPONENT,
)

KEYWORDS = ("and", "or", "not", "in", "like", "between", "is", "null", "true", "false")
COMPARISONS = ("=", "!=", "<>", "<", "<=", ">", ">=")
WORD_CONSTANTS = {"true": True, "false": False, "null": None}


def like_to_regex(pattern: str) -> str:
    """
    Translate a LIKE pattern into an anchored regular expression.

    ``%`` matches any run of characters and ``_`` any single character;
    ``\\%`` and ``\\_`` match them literally.
    """
    parts = []
    index = 0
    while index < len(pattern):
        char = pattern[index]
        if char == "\\" and index + 1 < len(pattern) and pattern[index + 1] in "%_":
            parts.append(re.escape(pattern[index + 1]))
            index += 2
            continue
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
        index += 1
    return "^" + "".join(parts) + "$"


class SQLWhereParser:
    """Parse SQL WHERE conditions into the shared AST."""

    def __init__(self, separator: str = "."):
        self.separator = separator

    def parse(self, source: Any) -> Node:
        if not isinstance(source, str) or not source.strip():
            raise DSLSyntaxError("WHERE clause is empty", position=0, component=COMPONENT)

        stream = TokenStream(LEXER.tokenize(source), COMPONENT)
        node = self._or(stream)
        stream.expect_end()
        return node

    def _or(self, stream: TokenStream) -> Node:
        operands = [self._and(stream)]
        while stream.accept_word("or"):
            operands.append(self._and(stream))
        return operands[0] if len(operands) == 1 else OperatorNode("or", tuple(operands))

    def _and(self, stream: TokenStream) -> Node:
        operands = [self._not(stream)]
        while stream.accept_word("and"):
            operands.append(self._not(stream))
        return operands[0] if len(operands) == 1 else OperatorNode("and", tuple(operands))

    def _not(self, stream: TokenStream) -> Node:
        if stream.accept_word("not"):
            return OperatorNode("not", (self._not(stream),))
        return self._condition(stream)

    def _condition(self, stream: TokenStream) -> Node:
        if stream.accept("OP", "("):
            node = self._or(stream)
            stream.expect("OP", ")")
            return node

        left = self._primary(stream)

        if stream.accept_word("is"):
            negated = stream.accept_word("not") is not None
            stream.expect_word("null")
            node = OperatorNode("is_null", (left,))
            return OperatorNode("not", (node,)) if negated else node

        negated = stream.at_word("not") and stream.peek(1).is_word("between", "in", "like")
        if negated:
            stream.advance()

        if stream.accept_word("between"):
            low = self._primary(stream)
            stream.expect_word("and")
            high = self._primary(stream)
            node = OperatorNode("between", (left, low, high))
            return OperatorNode("not", (node,)) if negated else node

        if stream.accept_word("in"):
            values = LiteralNode(self._value_list(stream))
            return OperatorNode("not_in" if negated else "in", (left, values))

        if stream.accept_word("like"):
            token = stream.peek()
            if token.kind != "STRING":
                raise stream.error("Expected a string pattern after LIKE")
            stream.advance()
            pattern = LiteralNode(like_to_regex(self._string(token)))
            return OperatorNode("not_like" if negated else "like", (left, pattern))

        token = stream.peek()
        if token.kind == "OP" and token.text in COMPARISONS:
            stream.advance()
            return OperatorNode(token.text, (left, self._primary(stream)))

        raise stream.error("Expected a comparison")

    def _primary(self, stream: TokenStream) -> Node:
        token = stream.peek()
        if token.kind in ("STRING", "NUMBER") or token.is_word(*WORD_CONSTANTS):
            return LiteralNode(self._literal(stream))
        if token.kind == "NAME" and not token.is_word(*KEYWORDS):
            stream.advance()
            return FieldNode(self.separator.join(self._segments(token)))
        raise stream.error("Expected a field or value")

    def _literal(self, stream: TokenStream) -> Any:
        token = stream.peek()
        if token.kind == "STRING":
            stream.advance()
            return self._string(token)
        if token.kind == "NUMBER":
            stream.advance()
            return parse_number(token.text)
        if token.is_word(*WORD_CONSTANTS):
            stream.advance()
            return WORD_CONSTANTS[token.text.lower()]
        raise stream.error("Expected a literal value")

    def _value_list(self, stream: TokenStream) -> List[Any]:
        stream.expect("OP", "(")
        values = [self._literal(stream)]
        while stream.accept("OP", ","):
            values.append(self._literal(stream))
        stream.expect("OP", ")")
        return values

    @staticmethod
    def _string(token: Token) -> str:
        return token.text[1:-1].replace("''", "'")

    @staticmethod
    def _segments(token: Token) -> List[str]:
        segments = []
        for segment in _SEGMENT.findall(token.text):
            if segment.startswith('"'):
                segment = segment[1:-1].replace('""', '"')
            segments.append(segment)
        return segments
