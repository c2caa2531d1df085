"""Byte codecs for row keys, column names and column values."""

from __future__ import annotations

import struct
import uuid
from typing import Generic, Protocol, TypeVar

from .errors import DecodeError, ValidationError

T = TypeVar("T")


class Codec(Protocol[T]):
    def encode(self, value: T) -> bytes: ...
    def decode(self, data: bytes) -> T: ...


class _FixedWidthCodec(Generic[T]):
    """Codec over a fixed-size ``struct`` format."""

    _format: struct.Struct
    _label: str

    def encode(self, value: T) -> bytes:
        try:
            return self._format.pack(value)
        except struct.error as exc:
            raise ValidationError(f"{self._label} value out of range: {value!r}") from exc

    def decode(self, data: bytes) -> T:
        if len(data) != self._format.size:
            raise DecodeError(
                f"{self._label} expects {self._format.size} bytes, got {len(data)}"
            )
        return self._format.unpack(data)[0]


class BytesCodec:
    """Identity codec."""

    def encode(self, value: bytes) -> bytes:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise ValidationError("BytesCodec encodes bytes-like values only")
        return bytes(value)

    def decode(self, data: bytes) -> bytes:
        return bytes(data)


class Utf8Codec:
    def encode(self, value: str) -> bytes:
        if not isinstance(value, str):
            raise ValidationError("Utf8Codec encodes str values only")
        return value.encode("utf-8")

    def decode(self, data: bytes) -> str:
        try:
            return bytes(data).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError("bytes are not valid UTF-8") from exc


class LongCodec(_FixedWidthCodec[int]):
    """8-byte signed big-endian integers."""

    _format = struct.Struct(">q")
    _label = "LongCodec"


class IntCodec(_FixedWidthCodec[int]):
    """4-byte signed big-endian integers."""

    _format = struct.Struct(">i")
    _label = "IntCodec"


class LexicalUUIDCodec:
    """UUIDs in their 16-byte big-endian form."""

    def encode(self, value: uuid.UUID) -> bytes:
        if not isinstance(value, uuid.UUID):
            raise ValidationError("LexicalUUIDCodec encodes uuid.UUID values only")
        return value.bytes

    def decode(self, data: bytes) -> uuid.UUID:
        if len(data) != 16:
            raise DecodeError(f"LexicalUUIDCodec expects 16 bytes, got {len(data)}")
        return uuid.UUID(bytes=bytes(data))


__all__ = [
    "Codec",
    "BytesCodec",
    "Utf8Codec",
    "LongCodec",
    "IntCodec",
    "LexicalUUIDCodec",
]
