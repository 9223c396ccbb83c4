import pytest

from tests.helpers import (
    encode_fixed32_field,
    encode_fixed64_field,
    encode_int_field,
    encode_string_field,
    encode_tag,
    encode_varint,
)
from protodecode.errors import TruncatedDataError, UnknownWireTypeError
from protodecode.wire import (
    DecodedField,
    WireType,
    as_json,
    decode_tag,
    decode_value,
    decode_varint,
    decode_wire_type,
    scan,
)


class TestDecodeVarint:
    def test_single_byte_values(self):
        for value in range(0x80):
            assert decode_varint(bytes([value])) == (value, 1)

    def test_single_byte_at_offset(self):
        assert decode_varint(b"\xff\xff\x05", 2) == (5, 3)

    @pytest.mark.parametrize("encoded, expected", [
        (b"\x80\x01", 128),
        (b"\x96\x01", 150),
        (b"\xac\x02", 300),
        (b"\xff\xff\xff\xff\x0f", 0xFFFFFFFF),
    ])
    def test_multi_byte_values(self, encoded, expected):
        assert decode_varint(encoded) == (expected, len(encoded))

    def test_64_bit_value(self):
        data = bytes([0xff] * 8 + [0x7f])
        assert decode_varint(data) == (0x7FFFFFFFFFFFFFFF, 9)

    def test_ten_byte_value(self):
        data = bytes([0xfe] + [0xff] * 8 + [0x01])
        assert decode_varint(data) == (0xFFFFFFFFFFFFFFFE, 10)

    def test_truncated(self):
        with pytest.raises(TruncatedDataError):
            decode_varint(b"\x96")

    def test_empty(self):
        with pytest.raises(TruncatedDataError):
            decode_varint(b"")


class TestDecodeTag:
    def test_single_byte_tag(self):
        assert decode_tag(b"\x50") == (10, WireType.VARINT, 1)

    @pytest.mark.parametrize("field_number, wire_type", [
        (1, WireType.VARINT),
        (2, WireType.LEN),
        (15, WireType.I32),
        (16, WireType.VARINT),
        (300, WireType.I64),
        (536870911, WireType.LEN),
    ])
    def test_encoded_tags(self, field_number, wire_type):
        encoded = encode_tag(field_number, wire_type)
        assert decode_tag(encoded) == (field_number, wire_type, len(encoded))

    @pytest.mark.parametrize("bits", [3, 4, 6, 7])
    def test_unknown_wire_types(self, bits):
        with pytest.raises(UnknownWireTypeError) as excinfo:
            decode_tag(bytes([(1 << 3) | bits]))
        assert excinfo.value.wire_type == bits

    @pytest.mark.parametrize("byte, expected", [
        (0x08, WireType.VARINT),
        (0x09, WireType.I64),
        (0x0a, WireType.LEN),
        (0x0d, WireType.I32),
    ])
    def test_wire_type_from_low_bits(self, byte, expected):
        assert decode_wire_type(byte) is expected


class TestDecodeValue:
    def test_varint(self):
        assert decode_value(b"\xac\x02", 0, WireType.VARINT) == (300, 2)

    def test_len_single_byte(self):
        assert decode_value(b"\x01h", 0, WireType.LEN) == (b"h", 2)

    def test_len_hello_world(self):
        data = bytes([11]) + b"hello world"
        assert decode_value(data, 0, WireType.LEN) == (b"hello world", 12)

    def test_len_with_multi_byte_length(self):
        text = b"abcdefghijklmnopqrstuvwxyz" * 8
        data = encode_varint(len(text)) + text
        assert data[:2] == b"\xd0\x01"
        assert decode_value(data, 0, WireType.LEN) == (text, 210)

    def test_len_empty(self):
        assert decode_value(b"\x00", 0, WireType.LEN) == (b"", 1)

    def test_i32_returns_raw_bytes(self):
        data = b"\x9a\x99\xc9\x41"
        assert decode_value(data, 0, WireType.I32) == (data, 4)

    def test_i64_returns_raw_bytes(self):
        data = b"\x33\x33\x33\x33\x33\x33\x39\x40"
        assert decode_value(data, 0, WireType.I64) == (data, 8)

    def test_offset_is_respected(self):
        data = b"\xff\xff\x02hi"
        assert decode_value(data, 2, WireType.LEN) == (b"hi", 5)

    def test_truncated_len(self):
        with pytest.raises(TruncatedDataError):
            decode_value(b"\x05abc", 0, WireType.LEN)

    def test_truncated_fixed(self):
        with pytest.raises(TruncatedDataError):
            decode_value(b"\x01\x02\x03", 0, WireType.I32)


class TestScan:
    def test_empty_buffer(self):
        assert scan(b"") == {}

    def test_single_field(self):
        assert scan(encode_int_field(1, 10)) == {1: DecodedField(WireType.VARINT, 10)}

    def test_multiple_fields(self):
        data = (
            encode_int_field(1, 10)
            + encode_fixed64_field(5, 0x4039333333333333)
            + encode_string_field(10, "hello world foo bar")
            + encode_fixed32_field(15, 12345678)
            + encode_int_field(20, 1)
        )
        assert scan(data) == {
            1: DecodedField(WireType.VARINT, 10),
            5: DecodedField(WireType.I64, b"\x33\x33\x33\x33\x33\x33\x39\x40"),
            10: DecodedField(WireType.LEN, b"hello world foo bar"),
            15: DecodedField(WireType.I32, b"\x4e\x61\xbc\x00"),
            20: DecodedField(WireType.VARINT, 1),
        }

    def test_last_duplicate_wins(self):
        data = encode_int_field(1, 10) + encode_int_field(1, 20)
        assert scan(data) == {1: DecodedField(WireType.VARINT, 20)}

    def test_unknown_wire_type_aborts(self):
        data = encode_int_field(1, 10) + bytes([(2 << 3) | 3])
        with pytest.raises(UnknownWireTypeError):
            scan(data)

    def test_accepts_bytearray(self):
        assert scan(bytearray(encode_string_field(2, "hi"))) == {2: DecodedField(WireType.LEN, b"hi")}


class TestAsJson:
    def test_renders_wire_type_names_and_byte_lists(self):
        fields = {
            1: DecodedField(WireType.VARINT, 10),
            2: DecodedField(WireType.LEN, b"hi"),
        }
        assert as_json(fields) == {
            "1": {"wireType": "VARINT", "value": 10},
            "2": {"wireType": "LEN", "value": [0x68, 0x69]},
        }
