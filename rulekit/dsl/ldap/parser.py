"""
LDAP Filter Parser

Parses RFC 4515 style filters such as ``(&(age>=18)(country=US))`` into
the shared AST.

- ``(&...)``, ``(|...)`` and ``(!...)`` combine filters.
- Items are ``(attribute op value)`` with ``=``, ``!=``, ``>=``, ``<=``,
  ``>``, ``<`` or ``~=`` (case-insensitive containment).
- ``(attr=*)`` tests presence; other ``*`` in an ``=`` value are wildcards.
- Values ``true``, ``false``, ``null`` and numbers are typed; anything
  else is a string. ``\\XX`` hex escapes write reserved characters, and a
  value holding an escape is always a string.
"""

import re
from typing import Any

from rulekit.dsl.ast import FieldNode, LiteralNode, Node, OperatorNode
from rulekit.dsl.lexer import Lexer, Token, TokenStream, parse_number
from rulekit.exceptions import DSLSyntaxError

COMPONENT = "LDAPFilterParser"

LEXER = Lexer(
    [
        ("WS", r"\s+"),
        ("ITEM", r"[A-Za-z0-9_.\-]+\s*(?:>=|<=|~=|!=|=|>|<)(?:[^()\\]|\\.)*"),
        ("OP", r"[()&|!]"),
    ],
    component=COMPONENT,
)

_ITEM = re.compile(r"([A-Za-z0-9_.\-]+)\s*(>=|<=|~=|!=|=|>|<)(.*)", re.DOTALL)
_ESCAPE = re.compile(r"(?:\\[0-9A-Fa-f]{2})+|\\(.)", re.DOTALL)
_STAR = re.compile(r"(?<!\\)\*")
NUMBER = re.compile(r"^-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?$")

WORD_CONSTANTS = {"true": True, "false": False, "null": None}
COMBINATORS = {"&": "and", "|": "or"}


def unescape_value(raw: str, position: int = 0) -> str:
    """Decode ``\\XX`` hex escapes (UTF-8 bytes) and ``\\c`` escapes."""
    def decode(match):
        if match.group(1) is not None:
            return match.group(1)
        try:
            return bytes.fromhex(match.group().replace("\\", "")).decode("utf-8")
        except UnicodeDecodeError:
            raise DSLSyntaxError(
                "Escaped bytes are not valid UTF-8",
                position=position + match.start(),
                component=COMPONENT
            )

    return _ESCAPE.sub(decode, raw)


def typed_value(raw: str, position: int = 0) -> Any:
    if "\\" in raw:
        return unescape_value(raw, position)
    if raw in WORD_CONSTANTS:
        return WORD_CONSTANTS[raw]
    if NUMBER.match(raw):
        return parse_number(raw)
    return raw


def wildcard_to_regex(raw: str, position: int = 0) -> str:
    parts = [re.escape(unescape_value(part, position)) for part in _STAR.split(raw)]
    return "^" + ".*".join(parts) + "$"


class LDAPFilterParser:
    """Parse LDAP search filters into the shared AST."""

    def __init__(self, separator: str = "."):
        self.separator = separator

    def parse(self, source: Any) -> Node:
        if not isinstance(source, str) or not source.strip():
            raise DSLSyntaxError("Filter is empty", position=0, component=COMPONENT)

        stream = TokenStream(LEXER.tokenize(source), COMPONENT)
        node = self._filter(stream)
        stream.expect_end()
        return node

    def _filter(self, stream: TokenStream) -> Node:
        stream.expect("OP", "(")
        token = stream.peek()

        if token.kind == "OP" and token.text in COMBINATORS:
            stream.advance()
            operands = [self._filter(stream)]
            while stream.at("OP", "("):
                operands.append(self._filter(stream))
            node = operands[0] if len(operands) == 1 else OperatorNode(COMBINATORS[token.text], tuple(operands))
        elif token.kind == "OP" and token.text == "!":
            stream.advance()
            node = OperatorNode("not", (self._filter(stream),))
        elif token.kind == "ITEM":
            stream.advance()
            node = self._item(token)
        else:
            raise stream.error("Expected '&', '|', '!' or an attribute comparison")

        stream.expect("OP", ")")
        return node

    def _item(self, token: Token) -> Node:
        attribute, operator, rest = _ITEM.match(token.text).groups()
        start = token.position + token.text.index(operator, len(attribute)) + len(operator)
        raw = rest.strip()
        position = start + (len(rest) - len(rest.lstrip()))
        field = FieldNode(self.separator.join(attribute.split(".")))

        if operator == "=" and raw == "*":
            return OperatorNode("not", (OperatorNode("is_null", (field,)),))

        if _STAR.search(raw):
            if operator != "=":
                raise DSLSyntaxError(
                    f"Wildcards need '=', found '{operator}'",
                    position=position,
                    component=COMPONENT
                )
            return OperatorNode("like", (field, LiteralNode(wildcard_to_regex(raw, position))))

        if operator == "~=":
            return OperatorNode("~=", (field, LiteralNode(unescape_value(raw, position))))

        return OperatorNode(operator, (field, LiteralNode(typed_value(raw, position))))
