"""
Tokenizer for the supported subset of the .proto language.

A token is one delimiter character, or a maximal run of characters up to
whitespace, a delimiter, or the end of input. Runs are classified in a fixed
order: keyword, operator, integer literal, string literal, identifier.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import LexicalError
from .reader import Reader


class TokenKind(Enum):
    KEYWORD = "keyword"
    OPERATOR = "operator"
    DELIMITER = "delimiter"
    IDENTIFIER = "identifier"
    INTEGER_LITERAL = "integer-literal"
    STRING_LITERAL = "string-literal"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Optional[Union[str, int]] = None

    def is_a(self, kind: TokenKind, value=None) -> bool:
        """True if the token has this kind (and this value, when given)."""
        if self.kind is not kind:
            return False
        return value is None or self.value == value

    def describe(self) -> str:
        value = "" if self.value is None else self.value
        return f'token type = "{self.kind.value}", token value = "{value}"'


# =============================================================================
# CHARACTER CLASSES
# =============================================================================

KEYWORDS = frozenset({"syntax", "message", "int32", "bool", "string"})
OPERATORS = frozenset({"="})
DELIMITERS = frozenset({"{", "}", ";"})

INTEGER_PATTERN = re.compile(r"[0-9]+")
IDENTIFIER_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_]*")

EOF_TOKEN = Token(TokenKind.EOF)


def classify(text: str) -> Token:
    """Turn one run of characters into a Token."""
    if text in DELIMITERS:
        return Token(TokenKind.DELIMITER, text)
    if text in KEYWORDS:
        return Token(TokenKind.KEYWORD, text)
    if text in OPERATORS:
        return Token(TokenKind.OPERATOR, text)
    if INTEGER_PATTERN.fullmatch(text):
        return Token(TokenKind.INTEGER_LITERAL, int(text, 10))
    if text.startswith('"'):
        # Quotes are stripped, not scanned: no escapes, no embedded whitespace.
        return Token(TokenKind.STRING_LITERAL, text.replace('"', ""))
    if IDENTIFIER_PATTERN.fullmatch(text):
        return Token(TokenKind.IDENTIFIER, text)
    raise LexicalError(text)


class Lexer:
    def __init__(self, reader: Union[Reader, str]):
        if isinstance(reader, str):
            reader = Reader(reader)
        self.reader = reader

    def _skip_whitespace(self):
        while not self.reader.at_end() and self.reader.peek().isspace():
            self.reader.consume()

    def _at_boundary(self) -> bool:
        char = self.reader.peek()
        return char == "" or char.isspace() or char in DELIMITERS

    def next_token(self) -> Token:
        self._skip_whitespace()

        if self.reader.at_end():
            return EOF_TOKEN

        if self.reader.peek() in DELIMITERS:
            return classify(self.reader.consume())

        chars = []
        while not self._at_boundary():
            chars.append(self.reader.consume())
        return classify("".join(chars))

    def consume(self, k: int = 1):
        """
        Consume k tokens.

        Returns a single Token when k == 1, otherwise a list. The list stops
        early at the EOF token, which is never followed by anything.
        """
        tokens = []
        for _ in range(k):
            token = self.next_token()
            tokens.append(token)
            if token.kind is TokenKind.EOF:
                break

        if k == 1:
            return tokens[0]
        return tokens

    def peek(self, k: int = 1):
        """Like consume(), but the reader's cursor is put back afterwards."""
        snapshot = self.reader.position
        try:
            return self.consume(k)
        finally:
            self.reader.seek(snapshot)

    def __iter__(self):
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return
