"""
Recursive-descent parser for a small subset of proto3.

    proto       := (syntax_decl | message_decl)* EOF
    syntax_decl := "syntax" "=" "proto3" ";"
    message_decl:= "message" identifier "{" field_decl* "}"
    field_decl  := ("int32" | "bool" | "string") identifier "=" integer ";"

Anything recognisably proto but outside this grammar (nesting, repeated,
enums, imports, options...) raises UnsupportedConstructError instead of
being skipped.
"""

import logging
from typing import List

from .errors import SchemaSyntaxError, UnsupportedConstructError
from .lexer import Lexer, Token, TokenKind
from .schema import FIELD_TYPES, Field, Message, SchemaNode, Syntax

logger = logging.getLogger(__name__)

# Loop guards; every iteration consumes at least one token, so these only
# trip on input far larger than any real schema.
MAX_TOP_LEVEL_ITERATIONS = 1000
MAX_MESSAGE_BODY_ITERATIONS = 1000

SUPPORTED_SYNTAX = "proto3"

TOP_LEVEL_UNSUPPORTED = frozenset({
    "import", "package", "option", "enum", "service", "extend",
})
BODY_UNSUPPORTED = frozenset({
    "repeated", "optional", "required", "oneof", "map", "enum",
    "reserved", "extensions", "option",
})


class Parser:
    def __init__(self, source: str):
        self.lexer = Lexer(source)

    # --- Helpers ---
    def _expect(self, kind: TokenKind, value=None, context: str = "") -> Token:
        token = self.lexer.consume()
        if token.is_a(kind, value):
            return token

        wanted = kind.value if value is None else f'{kind.value} "{value}"'
        where = f" {context}" if context else ""
        if token.kind is TokenKind.EOF:
            raise SchemaSyntaxError(f"unexpected end of input, expected {wanted}{where}")
        raise SchemaSyntaxError(f"expected {wanted}{where}, instead saw {token.describe()}")

    def _expect_semicolon(self, context: str):
        self._expect(TokenKind.DELIMITER, ";", context)

    # --- Grammar rules ---
    def _parse_syntax(self) -> Syntax:
        self._expect(TokenKind.KEYWORD, "syntax")
        self._expect(TokenKind.OPERATOR, "=", "after syntax keyword")
        version = self._expect(TokenKind.STRING_LITERAL, context="after syntax assignment operator")
        if version.value != SUPPORTED_SYNTAX:
            raise SchemaSyntaxError(
                f'expected "{SUPPORTED_SYNTAX}" after syntax assignment operator, instead saw "{version.value}"'
            )
        self._expect_semicolon("after syntax declaration")
        return Syntax(version.value)

    def _parse_field(self, message_name: str) -> Field:
        field_type = self.lexer.consume()
        name = self._expect(TokenKind.IDENTIFIER, context="after type declaration")
        self._expect(TokenKind.OPERATOR, "=", f"after field name {name.value}")
        number = self._expect(TokenKind.INTEGER_LITERAL, context=f"for field number of {name.value}")
        self._expect_semicolon(f"after field {name.value}")

        field = Field(field_type.value, name.value, number.value)
        logger.debug("Parsed field %s.%s = %d (%s)", message_name, field.name, field.number, field.field_type)
        return field

    def _parse_message(self) -> Message:
        self._expect(TokenKind.KEYWORD, "message")
        name = self._expect(TokenKind.IDENTIFIER, context="after message statement").value
        self._expect(TokenKind.DELIMITER, "{", "after message identifier")

        body = []
        iterations = 0
        while True:
            iterations += 1
            if iterations > MAX_MESSAGE_BODY_ITERATIONS:
                raise SchemaSyntaxError(
                    f"unable to parse message {name}, saw more than {MAX_MESSAGE_BODY_ITERATIONS} iterations"
                )

            token = self.lexer.peek()

            if token.is_a(TokenKind.DELIMITER, "}"):
                self.lexer.consume()
                break

            if token.kind is TokenKind.EOF:
                raise SchemaSyntaxError(f'unexpected end of input inside message "{name}", expected "}}"')

            if token.is_a(TokenKind.KEYWORD, "message"):
                raise UnsupportedConstructError(f'nested message inside "{name}"')

            if token.kind is TokenKind.KEYWORD and token.value in FIELD_TYPES:
                body.append(self._parse_field(name))
                continue

            if token.kind is TokenKind.IDENTIFIER:
                if token.value in BODY_UNSUPPORTED:
                    raise UnsupportedConstructError(f'"{token.value}" in message "{name}"')
                # `Foo bar = 1;`: a message- or enum-typed field.
                _, following = self.lexer.peek(2)
                if following.kind is TokenKind.IDENTIFIER:
                    raise UnsupportedConstructError(f'field type "{token.value}" in message "{name}"')

            raise SchemaSyntaxError(
                f'expected field declaration inside message "{name}", {token.describe()}'
            )

        logger.debug("Parsed message %s with %d fields", name, len(body))
        return Message(name, tuple(body))

    def parse(self) -> List[SchemaNode]:
        nodes = []
        iterations = 0

        while not self.lexer.peek().is_a(TokenKind.EOF):
            iterations += 1
            if iterations > MAX_TOP_LEVEL_ITERATIONS:
                raise SchemaSyntaxError(
                    f"unable to parse schema, saw more than {MAX_TOP_LEVEL_ITERATIONS} top-level iterations"
                )

            token = self.lexer.peek()

            if token.is_a(TokenKind.KEYWORD, "syntax"):
                nodes.append(self._parse_syntax())
            elif token.is_a(TokenKind.KEYWORD, "message"):
                nodes.append(self._parse_message())
            elif token.kind is TokenKind.IDENTIFIER and token.value in TOP_LEVEL_UNSUPPORTED:
                raise UnsupportedConstructError(f'"{token.value}" statement')
            else:
                raise SchemaSyntaxError(f"unknown token at root level, {token.describe()}")

        return nodes


def parse_schema(source: str) -> List[SchemaNode]:
    """Parse schema text into a list of top-level nodes."""
    return Parser(source).parse()
