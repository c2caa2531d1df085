from __future__ import annotations

import uuid

import pytest

from rangescan.core.codecs import BytesCodec, IntCodec, LexicalUUIDCodec, LongCodec, Utf8Codec
from rangescan.core.errors import DecodeError, ValidationError


def test_long_codec_is_big_endian_and_signed():
    codec = LongCodec()
    assert codec.encode(1) == b"\x00" * 7 + b"\x01"
    assert codec.decode(b"\xff" * 8) == -1


def test_int_codec_uses_four_bytes():
    assert IntCodec().encode(258) == b"\x00\x00\x01\x02"
    assert IntCodec().decode(b"\x00\x00\x01\x02") == 258


@pytest.mark.parametrize(
    ("codec", "data"),
    [
        (LongCodec(), b"\x00\x01"),
        (IntCodec(), b"\x00" * 8),
        (Utf8Codec(), b"\xff\xfe"),
        (LexicalUUIDCodec(), b"\x00" * 15),
    ],
    ids=["long-short", "int-long", "utf8-invalid", "uuid-short"],
)
def test_malformed_bytes_raise_decode_error(codec, data):
    with pytest.raises(DecodeError):
        codec.decode(data)


def test_decode_error_is_a_value_error():
    with pytest.raises(ValueError):
        Utf8Codec().decode(b"\xc3")


def test_out_of_range_values_are_rejected_on_encode():
    with pytest.raises(ValidationError):
        IntCodec().encode(2**31)
    with pytest.raises(ValidationError):
        LongCodec().encode("1")  # type: ignore[arg-type]
    with pytest.raises(ValidationError):
        Utf8Codec().encode(b"raw")  # type: ignore[arg-type]
    with pytest.raises(ValidationError):
        BytesCodec().encode("text")  # type: ignore[arg-type]


def test_uuid_codec_uses_sixteen_raw_bytes():
    value = uuid.UUID("12345678-1234-5678-1234-567812345678")
    encoded = LexicalUUIDCodec().encode(value)
    assert encoded == value.bytes
    assert LexicalUUIDCodec().decode(encoded) == value


def test_bytes_codec_normalizes_bytes_like_input():
    assert BytesCodec().encode(bytearray(b"ab")) == b"ab"
    assert BytesCodec().decode(memoryview(b"cd")) == b"cd"
