"""
Protocol Buffers wire format - decoding without a schema.

Every field on the wire is a tag (field number + wire type) followed by a
value whose framing depends on the wire type. Nothing here knows what the
values mean; that is the assembler's job.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Union

from .errors import TruncatedDataError, UnknownWireTypeError

logger = logging.getLogger(__name__)

# MSB of each varint byte: set means another byte follows.
VARINT_CONTINUATION_BIT = 0x80
VARINT_PAYLOAD_BITS = 0x7F

# Low 3 bits of a tag.
WIRE_TYPE_BITS = 0x07


# =============================================================================
# WIRE TYPES
# =============================================================================

class WireType(IntEnum):
    VARINT = 0  # int32, int64, uint32, uint64, bool, enum
    I64 = 1     # fixed64, sfixed64, double
    LEN = 2     # string, bytes, nested messages, packed repeated
    I32 = 5     # fixed32, sfixed32, float


FIXED_WIDTHS = {
    WireType.I32: 4,
    WireType.I64: 8,
}


@dataclass(frozen=True)
class DecodedField:
    wire_type: WireType
    value: Union[int, bytes]


# =============================================================================
# VARINTS
# =============================================================================

def decode_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """
    Read the varint that starts at `offset`.

    Bytes are consumed until one arrives with its high bit clear; their low
    7 bits are stacked low group first. A lone byte below 0x80 is its own
    value.

    Returns (value, next_offset), where next_offset is the index just past
    the varint's last byte, ready to hand to the next decode call.
    """
    if offset >= len(data):
        raise TruncatedDataError(f"Not enough data to decode varint at offset {offset}")

    first = data[offset]
    if first & VARINT_CONTINUATION_BIT == 0:
        return (first, offset + 1)

    result = 0
    shift = 0
    position = offset
    while True:
        if position >= len(data):
            raise TruncatedDataError(f"Varint starting at offset {offset} runs past end of data")
        byte = data[position]
        result |= (byte & VARINT_PAYLOAD_BITS) << shift
        position += 1
        if byte & VARINT_CONTINUATION_BIT == 0:
            break
        shift += 7
    return (result, position)


# =============================================================================
# TAGS
# =============================================================================

def decode_wire_type(byte: int) -> WireType:
    """Wire type from the low 3 bits of a tag's first byte."""
    bits = byte & WIRE_TYPE_BITS
    try:
        return WireType(bits)
    except ValueError:
        raise UnknownWireTypeError(bits) from None


def decode_tag(data: bytes, offset: int = 0) -> tuple[int, WireType, int]:
    """
    Decode a tag from bytes.

    Returns: (field_number, wire_type, next_offset)
    """
    if offset >= len(data):
        raise TruncatedDataError(f"Not enough data to decode tag at offset {offset}")

    first = data[offset]
    wire_type = decode_wire_type(first)

    # Single-byte tag: field numbers 1-15.
    if first & VARINT_CONTINUATION_BIT == 0:
        return (first >> 3, wire_type, offset + 1)

    tag, next_offset = decode_varint(data, offset)
    return (tag >> 3, wire_type, next_offset)


# =============================================================================
# VALUES
# =============================================================================

def _take(data: bytes, offset: int, length: int, wire_type: WireType) -> bytes:
    end = offset + length
    if end > len(data):
        raise TruncatedDataError(
            f"{wire_type.name} value at offset {offset} needs {length} bytes, "
            f"only {len(data) - offset} available"
        )
    return bytes(data[offset:end])


def decode_value(data: bytes, offset: int, wire_type: WireType) -> tuple[Union[int, bytes], int]:
    """
    Decode one field value.

    VARINT values come back as an int; LEN, I32 and I64 values come back as
    the raw bytes, uninterpreted.

    Returns: (value, next_offset)
    """
    if wire_type == WireType.VARINT:
        return decode_varint(data, offset)

    elif wire_type == WireType.LEN:
        length, start = decode_varint(data, offset)
        payload = _take(data, start, length, wire_type)
        return (payload, start + length)

    elif wire_type in FIXED_WIDTHS:
        width = FIXED_WIDTHS[wire_type]
        return (_take(data, offset, width, wire_type), offset + width)

    else:
        raise UnknownWireTypeError(int(wire_type))


# =============================================================================
# MESSAGE SCAN
# =============================================================================

def scan(data: bytes) -> Dict[int, DecodedField]:
    """
    Walk a whole buffer as one message.

    Returns a mapping of field number to DecodedField. A field number seen
    twice keeps only its last value.
    """
    fields = {}
    offset = 0
    while offset < len(data):
        field_number, wire_type, offset = decode_tag(data, offset)
        value, offset = decode_value(data, offset, wire_type)

        if field_number in fields:
            logger.debug("Field %d repeated on the wire, keeping last value", field_number)
        logger.debug("Field %d: %s %r", field_number, wire_type.name, value)

        fields[field_number] = DecodedField(wire_type, value)
    return fields


def as_json(fields: Dict[int, DecodedField]) -> dict:
    """
    Render a scan() result as JSON-ready data.

    {1: DecodedField(VARINT, 10)} -> {"1": {"wireType": "VARINT", "value": 10}}
    Byte values become lists of ints.
    """
    rendered = {}
    for field_number, field in fields.items():
        value = field.value
        if isinstance(value, bytes):
            value = list(value)
        rendered[str(field_number)] = {"wireType": field.wire_type.name, "value": value}
    return rendered
