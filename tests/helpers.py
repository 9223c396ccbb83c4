"""
Wire encoders for building test payloads.

The package only decodes, so tests build their inputs here.
"""

from protodecode.wire import WireType

UINT64_MASK = (1 << 64) - 1


def encode_varint(n: int) -> bytes:
    """Split n into 7-bit groups, low group first; all but the final group carry 0x80."""
    n &= UINT64_MASK
    groups = [n & 0x7F]
    n >>= 7
    while n:
        groups[-1] |= 0x80
        groups.append(n & 0x7F)
        n >>= 7
    return bytes(groups)


def encode_tag(field_number: int, wire_type: int) -> bytes:
    return encode_varint((field_number << 3) | wire_type)


def encode_int_field(field_number: int, value: int) -> bytes:
    return encode_tag(field_number, WireType.VARINT) + encode_varint(value)


def encode_string_field(field_number: int, value: str) -> bytes:
    data = value.encode("utf-8")
    return encode_tag(field_number, WireType.LEN) + encode_varint(len(data)) + data


def encode_fixed32_field(field_number: int, value: int) -> bytes:
    return encode_tag(field_number, WireType.I32) + value.to_bytes(4, "little")


def encode_fixed64_field(field_number: int, value: int) -> bytes:
    return encode_tag(field_number, WireType.I64) + value.to_bytes(8, "little")
