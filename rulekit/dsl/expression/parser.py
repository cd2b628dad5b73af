"""
Expression Parser

Recursive-descent parser for infix rule expressions such as
``age >= 18 and country == "US"``.

Precedence, tightest first: parentheses; unary ``not`` ``!`` ``-``; ``**``
(right associative); ``* / %``; ``+ -``; ``< <= > >= in``, ``not in``,
``matches``; ``== != === !==``; ``and`` ``&&``; ``xor``; ``or`` ``||``.
"""

from typing import Any, List

from rulekit.dsl.ast import FieldNode, LiteralNode, Node, OperatorNode
from rulekit.dsl.lexer import Lexer, TokenStream, parse_number, unescape
from rulekit.exceptions import DSLSyntaxError

COMPONENT = "ExpressionParser"

LEXER = Lexer(
    [
        ("WS", r"\s+"),
        ("NUMBER", r"(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?"),
        ("STRING", r"\"(?:[^\"\\]|\\.)*\"|'(?:[^'\\]|\\.)*'"),
        ("NAME", r"[A-Za-z_][A-Za-z0-9_]*(?:\.(?:[A-Za-z_][A-Za-z0-9_]*|\d+))*"),
        ("OP", r"===|!==|==|!=|<=|>=|\*\*|&&|\|\||[<>+\-*/%!(),\[\]]"),
    ],
    component=COMPONENT,
)

KEYWORDS = {"and", "or", "xor", "not", "in", "matches", "true", "false", "null"}
CONSTANTS = {"true": True, "false": False, "null": None}

EQUALITY_OPERATORS = ("==", "!=", "===", "!==")
RELATIONAL_OPERATORS = ("<", "<=", ">", ">=")
ADDITIVE_OPERATORS = ("+", "-")
MULTIPLICATIVE_OPERATORS = ("*", "/", "%")


class ExpressionParser:
    """
    Parse infix expressions into the shared AST.

    Operator nodes carry the surface token (``>=``, ``and``, ``not in``,
    ``neg``) or the function name as written.
    """

    def __init__(self, separator: str = "."):
        self.separator = separator

    def parse(self, source: str) -> Node:
        if not isinstance(source, str) or not source.strip():
            raise DSLSyntaxError("Expression is empty", position=0, component=COMPONENT)

        stream = TokenStream(LEXER.tokenize(source), COMPONENT)
        node = self._or(stream)
        stream.expect_end()
        return node

    # -- boolean layers -------------------------------------------------

    def _or(self, stream: TokenStream) -> Node:
        operands = [self._xor(stream)]
        while stream.accept_word("or") or stream.accept("OP", "||"):
            operands.append(self._xor(stream))
        return operands[0] if len(operands) == 1 else OperatorNode("or", tuple(operands))

    def _xor(self, stream: TokenStream) -> Node:
        node = self._and(stream)
        while stream.accept_word("xor"):
            node = OperatorNode("xor", (node, self._and(stream)))
        return node

    def _and(self, stream: TokenStream) -> Node:
        operands = [self._equality(stream)]
        while stream.accept_word("and") or stream.accept("OP", "&&"):
            operands.append(self._equality(stream))
        return operands[0] if len(operands) == 1 else OperatorNode("and", tuple(operands))

    # -- comparison layers ----------------------------------------------

    def _equality(self, stream: TokenStream) -> Node:
        node = self._relational(stream)
        while stream.peek().kind == "OP" and stream.peek().text in EQUALITY_OPERATORS:
            operator = stream.advance().text
            node = OperatorNode(operator, (node, self._relational(stream)))
        return node

    def _relational(self, stream: TokenStream) -> Node:
        node = self._additive(stream)
        while True:
            token = stream.peek()
            if token.kind == "OP" and token.text in RELATIONAL_OPERATORS:
                operator = stream.advance().text
            elif token.is_word("in", "matches"):
                operator = stream.advance().text.lower()
            elif token.is_word("not") and stream.peek(1).is_word("in"):
                stream.advance()
                stream.advance()
                operator = "not in"
            else:
                return node
            node = OperatorNode(operator, (node, self._additive(stream)))

    # -- arithmetic layers ----------------------------------------------

    def _additive(self, stream: TokenStream) -> Node:
        node = self._multiplicative(stream)
        while stream.peek().kind == "OP" and stream.peek().text in ADDITIVE_OPERATORS:
            operator = stream.advance().text
            node = OperatorNode(operator, (node, self._multiplicative(stream)))
        return node

    def _multiplicative(self, stream: TokenStream) -> Node:
        node = self._power(stream)
        while stream.peek().kind == "OP" and stream.peek().text in MULTIPLICATIVE_OPERATORS:
            operator = stream.advance().text
            node = OperatorNode(operator, (node, self._power(stream)))
        return node

    def _power(self, stream: TokenStream) -> Node:
        base = self._unary(stream)
        if stream.accept("OP", "**"):
            return OperatorNode("**", (base, self._power(stream)))
        return base

    def _unary(self, stream: TokenStream) -> Node:
        if stream.accept("OP", "-"):
            if stream.at("NUMBER"):
                return LiteralNode(-parse_number(stream.advance().text))
            return OperatorNode("neg", (self._unary(stream),))
        if stream.accept("OP", "!") or stream.accept_word("not"):
            return OperatorNode("not", (self._unary(stream),))
        return self._primary(stream)

    # -- atoms ----------------------------------------------------------

    def _primary(self, stream: TokenStream) -> Node:
        token = stream.peek()

        if stream.accept("OP", "("):
            node = self._or(stream)
            stream.expect("OP", ")")
            return node

        if token.kind == "OP" and token.text == "[":
            return LiteralNode(self._array(stream))

        if token.kind in ("NUMBER", "STRING"):
            return LiteralNode(self._scalar(stream))

        if token.kind == "NAME":
            word = token.text.lower()
            if word in CONSTANTS:
                stream.advance()
                return LiteralNode(CONSTANTS[word])
            if stream.peek(1).kind == "OP" and stream.peek(1).text == "(" and "." not in token.text:
                return self._call(stream)
            if word in KEYWORDS:
                raise stream.error("Unexpected keyword")
            stream.advance()
            return FieldNode(self.separator.join(token.text.split(".")))

        raise stream.error("Expected a value, field or '('")

    def _call(self, stream: TokenStream) -> Node:
        name = stream.advance().text
        stream.expect("OP", "(")
        arguments: List[Node] = []
        if not stream.accept("OP", ")"):
            arguments.append(self._or(stream))
            while stream.accept("OP", ","):
                arguments.append(self._or(stream))
            stream.expect("OP", ")")
        return OperatorNode(name, tuple(arguments))

    def _array(self, stream: TokenStream) -> List[Any]:
        stream.expect("OP", "[")
        items: List[Any] = []
        if stream.accept("OP", "]"):
            return items

        items.append(self._array_item(stream))
        while stream.accept("OP", ","):
            items.append(self._array_item(stream))
        stream.expect("OP", "]")
        return items

    def _array_item(self, stream: TokenStream) -> Any:
        token = stream.peek()
        if token.kind == "OP" and token.text == "[":
            return self._array(stream)
        if token.kind == "OP" and token.text == "-" and stream.peek(1).kind == "NUMBER":
            stream.advance()
            return -parse_number(stream.advance().text)
        if token.kind == "NAME" and token.text.lower() in CONSTANTS:
            stream.advance()
            return CONSTANTS[token.text.lower()]
        if token.kind in ("NUMBER", "STRING"):
            return self._scalar(stream)
        raise stream.error("Array items must be literals")

    def _scalar(self, stream: TokenStream) -> Any:
        token = stream.advance()
        if token.kind == "NUMBER":
            return parse_number(token.text)
        return unescape(token.text[1:-1], token.position + 1, COMPONENT)
