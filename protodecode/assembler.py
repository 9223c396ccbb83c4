"""
Combine a schema with scanned wire fields into a named, typed record.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Union

from .errors import MissingMessageError, UnknownFieldTypeError, UnsupportedConstructError
from .schema import FIELD_TYPE_BOOL, FIELD_TYPE_INT32, FIELD_TYPE_STRING, Field, Message, SchemaNode
from .wire import DecodedField, scan

logger = logging.getLogger(__name__)

Value = Union[str, bool, int]

INT32_MASK = 0xFFFFFFFF
INT32_SIGN_BIT = 0x80000000

DEFAULTS = {
    FIELD_TYPE_STRING: "",
    FIELD_TYPE_BOOL: False,
    FIELD_TYPE_INT32: 0,
}


@dataclass(frozen=True)
class FieldMetadata:
    name: str
    number: int
    declared_type: str


def find_message(forest: Sequence[SchemaNode], message_name: str) -> Message:
    for node in forest:
        if isinstance(node, Message) and node.name == message_name:
            return node
    raise MissingMessageError(message_name)


def message_metadata(forest: Sequence[SchemaNode], message_name: str) -> Dict[int, FieldMetadata]:
    """Flatten one message's fields into metadata keyed by field number."""
    message = find_message(forest, message_name)

    metadata = {}
    for child in message.body:
        if isinstance(child, Field):
            if child.number in metadata:
                logger.warning(
                    "Message %s declares field number %d twice (%s, %s); using %s",
                    message_name, child.number, metadata[child.number].name, child.name, child.name,
                )
            metadata[child.number] = FieldMetadata(child.name, child.number, child.field_type)
        elif isinstance(child, Message):
            raise UnsupportedConstructError(f'nested message "{child.name}" inside "{message_name}"')
        else:
            raise UnsupportedConstructError(f"message body node {child!r}")
    return metadata


def to_int32(value: int) -> int:
    """Reinterpret the low 32 bits of a varint as a signed integer."""
    value &= INT32_MASK
    if value & INT32_SIGN_BIT:
        value -= 1 << 32
    return value


def coerce(meta: FieldMetadata, decoded: Optional[DecodedField]) -> Value:
    """
    Turn one wire value into the declared type, or the type's default.

    The wire type is not checked against the declared type.
    """
    if meta.declared_type not in DEFAULTS:
        raise UnknownFieldTypeError(meta.declared_type)

    if decoded is None:
        return DEFAULTS[meta.declared_type]

    value = decoded.value
    if meta.declared_type == FIELD_TYPE_STRING:
        if isinstance(value, int):
            return str(value)
        return bytes(value).decode("utf-8", errors="replace")

    elif meta.declared_type == FIELD_TYPE_BOOL:
        return value == 1

    else:
        if isinstance(value, bytes):
            value = int.from_bytes(value, "little")
        return to_int32(value)


def assemble(wire_fields: Dict[int, DecodedField], forest: Sequence[SchemaNode], message_name: str) -> Dict[str, Value]:
    """
    Build the typed record for `message_name`.

    Every declared field appears in the result; fields missing from the
    wire data get "", False or 0.
    """
    metadata = message_metadata(forest, message_name)

    record = {}
    for number, meta in metadata.items():
        decoded = wire_fields.get(number)
        if decoded is None:
            logger.debug("Field %s (%d) absent, using default", meta.name, number)
        record[meta.name] = coerce(meta, decoded)
    return record


def decode_message(data: bytes, forest: Optional[Sequence[SchemaNode]] = None, message_name: Optional[str] = None):
    """
    Decode a buffer, with or without a schema.

    Without both a schema and a message name this is a partial decode: the
    raw field-number mapping from scan(). Otherwise the typed record.
    """
    wire_fields = scan(data)
    if forest is None or message_name is None:
        return wire_fields
    return assemble(wire_fields, forest, message_name)
