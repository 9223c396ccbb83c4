"""
Protobuf wire-format decoder with an optional .proto schema.

    >>> from protodecode import decode_message, parse_schema
    >>> schema = parse_schema('message M { int32 a = 1; }')
    >>> decode_message(b"\\x08\\x96\\x01", schema, "M")
    {'a': 150}
"""

from .assembler import FieldMetadata, assemble, decode_message, message_metadata
from .errors import (
    LexicalError,
    MissingMessageError,
    ProtoDecodeError,
    SchemaSyntaxError,
    TruncatedDataError,
    UnknownFieldTypeError,
    UnknownWireTypeError,
    UnsupportedConstructError,
)
from .lexer import Lexer, Token, TokenKind
from .parser import Parser, parse_schema
from .reader import Reader
from .schema import Field, Message, SchemaNode, Syntax
from .wire import DecodedField, WireType, as_json, decode_tag, decode_value, decode_varint, scan

__all__ = [
    "DecodedField",
    "Field",
    "FieldMetadata",
    "Lexer",
    "LexicalError",
    "Message",
    "MissingMessageError",
    "Parser",
    "ProtoDecodeError",
    "Reader",
    "SchemaNode",
    "SchemaSyntaxError",
    "Syntax",
    "Token",
    "TokenKind",
    "TruncatedDataError",
    "UnknownFieldTypeError",
    "UnknownWireTypeError",
    "UnsupportedConstructError",
    "WireType",
    "as_json",
    "assemble",
    "decode_message",
    "decode_tag",
    "decode_value",
    "decode_varint",
    "message_metadata",
    "parse_schema",
    "scan",
]
