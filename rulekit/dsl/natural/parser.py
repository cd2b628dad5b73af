"""
Natural Language Parser

Parses controlled English such as
``age is at least 18 and country is "US"`` into the shared AST.

Conditions are ``<field> <phrase> <value>``. Values may be quoted strings,
numbers, ``true``/``yes``, ``false``/``no``, ``null`` or bare words (runs of
bare words form one string). ``and`` binds tighter than ``or``; parentheses
group.
"""

from typing import Any, List, Sequence, Tuple

from rulekit.dsl.ast import FieldNode, LiteralNode, Node, OperatorNode
from rulekit.dsl.lexer import Lexer, TokenStream, parse_number, unescape
from rulekit.exceptions import DSLSyntaxError

COMPONENT = "NaturalLanguageParser"

LEXER = Lexer(
    [
        ("WS", r"\s+"),
        ("STRING", r"\"(?:[^\"\\]|\\.)*\"|'(?:[^'\\]|\\.)*'"),
        ("NUMBER", r"-?\d+(?:\.\d+)?(?=$|[\s(),])"),
        ("NAME", r"[A-Za-z0-9_][A-Za-z0-9_\-]*(?:\.[A-Za-z0-9_\-]+)*"),
        ("OP", r"[(),]"),
    ],
    component=COMPONENT,
)

WORD_CONSTANTS = {"true": True, "yes": True, "false": False, "no": False, "null": None}
CONNECTIVES = ("and", "or")

# Tried in order; longer phrases sharing a prefix come first
COMPARISON_PHRASES: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("is", "not", "less", "than", "or", "equal", "to"), "gt"),
    (("is", "not", "less", "than"), "gte"),
    (("is", "not", "greater", "than", "or", "equal", "to"), "lt"),
    (("is", "not", "greater", "than"), "lte"),
    (("is", "not", "at", "least"), "lt"),
    (("is", "not", "at", "most"), "gt"),
    (("is", "not", "more", "than"), "lte"),
    (("is", "at", "least"), "gte"),
    (("is", "greater", "than", "or", "equal", "to"), "gte"),
    (("is", "more", "than"), "gt"),
    (("is", "greater", "than"), "gt"),
    (("is", "at", "most"), "lte"),
    (("is", "less", "than", "or", "equal", "to"), "lte"),
    (("is", "less", "than"), "lt"),
    (("does", "not", "equal"), "ne"),
    (("does", "not", "contain"), "not_contains"),
    (("contains",), "contains"),
    (("includes",), "contains"),
    (("starts", "with"), "starts_with"),
    (("begins", "with"), "starts_with"),
    (("ends", "with"), "ends_with"),
    (("is", "not"), "ne"),
    (("equals",), "eq"),
    (("is",), "eq"),
)


class NaturalLanguageParser:
    """Parse controlled natural language rules into the shared AST."""

    def __init__(self, separator: str = "."):
        self.separator = separator

    def parse(self, source: str) -> Node:
        if not isinstance(source, str) or not source.strip():
            raise DSLSyntaxError("Rule text is empty", position=0, component=COMPONENT)

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
        operands = [self._term(stream)]
        while stream.accept_word("and"):
            operands.append(self._term(stream))
        return operands[0] if len(operands) == 1 else OperatorNode("and", tuple(operands))

    def _term(self, stream: TokenStream) -> Node:
        if stream.accept("OP", "("):
            node = self._or(stream)
            stream.expect("OP", ")")
            return node
        return self._condition(stream)

    def _condition(self, stream: TokenStream) -> Node:
        token = stream.peek()
        if token.kind != "NAME" or token.text.lower() in CONNECTIVES:
            raise stream.error("Expected a field name")
        stream.advance()
        field = FieldNode(self.separator.join(token.text.split(".")))

        if self._match(stream, ("is", "between")) or self._match(stream, ("is", "from")):
            low = self._value(stream)
            stream.expect_word("and", "to")
            high = self._value(stream)
            return OperatorNode("between", (field, LiteralNode(low), LiteralNode(high)))

        if self._match(stream, ("is", "either")):
            first = self._value(stream)
            stream.expect_word("or")
            second = self._value(stream)
            return OperatorNode("in", (field, LiteralNode([first, second])))

        if self._match(stream, ("is", "not", "one", "of")):
            return OperatorNode("not_in", (field, LiteralNode(self._value_list(stream))))

        if self._match(stream, ("is", "one", "of")):
            return OperatorNode("in", (field, LiteralNode(self._value_list(stream))))

        for words, operator in COMPARISON_PHRASES:
            if self._match(stream, words):
                return OperatorNode(operator, (field, LiteralNode(self._value(stream))))

        raise stream.error(f"Could not understand the condition on '{token.text}'")

    @staticmethod
    def _match(stream: TokenStream, words: Tuple[str, ...]) -> bool:
        for offset, word in enumerate(words):
            if not stream.peek(offset).is_word(word):
                return False
        for _ in words:
            stream.advance()
        return True

    def _value_list(self, stream: TokenStream) -> List[Any]:
        values = [self._value(stream)]
        while stream.accept("OP", ","):
            values.append(self._value(stream))
        return values

    def _value(self, stream: TokenStream) -> Any:
        token = stream.peek()
        if token.kind == "STRING":
            stream.advance()
            return unescape(token.text[1:-1], token.position + 1, COMPONENT)
        if token.kind == "NUMBER":
            stream.advance()
            return parse_number(token.text)
        if token.kind != "NAME" or token.text.lower() in CONNECTIVES:
            raise stream.error("Expected a value")

        words = [stream.advance().text]
        while stream.peek().kind == "NAME" and not stream.peek().is_word(*CONNECTIVES, "to"):
            words.append(stream.advance().text)

        if len(words) == 1 and words[0].lower() in WORD_CONSTANTS:
            return WORD_CONSTANTS[words[0].lower()]
        return " ".join(words)
