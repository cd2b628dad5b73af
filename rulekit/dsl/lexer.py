"""
Regex-driven tokenizer and token cursor shared by the text front-ends.
"""

import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from rulekit.exceptions import DSLSyntaxError

EOF = "EOF"

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "0": "\0",
    "/": "/",
    "\\": "\\",
    '"': '"',
    "'": "'",
}


def unescape(body: str, position: int = 0, component: Optional[str] = None) -> str:
    """Decode backslash escapes inside a quoted string body."""
    out = []
    index = 0
    while index < len(body):
        char = body[index]
        if char != "\\" or index + 1 == len(body):
            out.append(char)
            index += 1
            continue

        code = body[index + 1]
        if code == "u":
            digits = body[index + 2:index + 6]
            if len(digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in digits):
                raise DSLSyntaxError("Invalid unicode escape", position=position + index, component=component)
            out.append(chr(int(digits, 16)))
            index += 6
            continue

        out.append(_ESCAPES.get(code, code))
        index += 2
    return "".join(out)


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    position: int

    def is_word(self, *words: str) -> bool:
        return self.kind == "NAME" and self.text.lower() in words


class Lexer:
    """
    Tokenizer built from ordered ``(kind, pattern)`` rules.

    The first rule that matches at the current position wins. Kinds listed
    in ``skip`` are dropped from the output.
    """

    def __init__(self, rules: Sequence[Tuple[str, str]], component: str, skip: Sequence[str] = ("WS",)):
        self.component = component
        self.skip = set(skip)
        self._pattern = re.compile("|".join(f"(?P<{kind}>{pattern})" for kind, pattern in rules))

    def tokenize(self, source: str) -> List[Token]:
        tokens = []
        position = 0
        while position < len(source):
            match = self._pattern.match(source, position)
            if match is None or match.end() == position:
                raise DSLSyntaxError(
                    f"Unexpected character {source[position]!r}",
                    position=position,
                    component=self.component
                )
            if match.lastgroup not in self.skip:
                tokens.append(Token(match.lastgroup, match.group(), position))
            position = match.end()

        tokens.append(Token(EOF, "", len(source)))
        return tokens


class TokenStream:
    """Cursor over a token list with the helpers recursive-descent parsers need."""

    def __init__(self, tokens: List[Token], component: str):
        self.tokens = tokens
        self.component = component
        self.index = 0

    def peek(self, offset: int = 0) -> Token:
        index = min(self.index + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def advance(self) -> Token:
        token = self.peek()
        if token.kind != EOF:
            self.index += 1
        return token

    def at(self, kind: str, text: Optional[str] = None) -> bool:
        token = self.peek()
        return token.kind == kind and (text is None or token.text == text)

    def at_word(self, *words: str) -> bool:
        return self.peek().is_word(*words)

    def accept(self, kind: str, text: Optional[str] = None) -> Optional[Token]:
        if self.at(kind, text):
            return self.advance()
        return None

    def accept_word(self, *words: str) -> Optional[Token]:
        if self.at_word(*words):
            return self.advance()
        return None

    def expect(self, kind: str, text: Optional[str] = None, description: Optional[str] = None) -> Token:
        token = self.accept(kind, text)
        if token is None:
            raise self.error(f"Expected {description or text or kind}")
        return token

    def expect_word(self, *words: str) -> Token:
        token = self.accept_word(*words)
        if token is None:
            raise self.error(f"Expected '{words[0]}'")
        return token

    def expect_end(self) -> None:
        if not self.at(EOF):
            raise self.error("Unexpected trailing input")

    def error(self, message: str, token: Optional[Token] = None) -> DSLSyntaxError:
        token = token or self.peek()
        found = "end of input" if token.kind == EOF else repr(token.text)
        return DSLSyntaxError(
            f"{message}, found {found}",
            position=token.position,
            component=self.component
        )


def parse_number(text: str) -> Any:
    if any(c in text for c in ".eE"):
        return float(text)
    return int(text)
