"""Core wire and domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from .errors import ValidationError

if TYPE_CHECKING:
    from .codecs import Codec

N = TypeVar("N")
V = TypeVar("V")


@dataclass(slots=True, frozen=True)
class KeyRange:
    """Raw key bounds of one scan. Empty bytes leave that end unbounded."""

    start_key: bytes = b""
    end_key: bytes = b""

    def __post_init__(self) -> None:
        for field_name in ("start_key", "end_key"):
            if not isinstance(getattr(self, field_name), bytes):
                raise ValidationError(f"{field_name} must be bytes")

    def resume_from(self, start_key: bytes) -> "KeyRange":
        return KeyRange(start_key=start_key, end_key=self.end_key)


@dataclass(slots=True, frozen=True)
class RawColumn:
    name: bytes
    value: bytes
    timestamp: int | None = None
    ttl: int | None = None


@dataclass(slots=True, frozen=True)
class RowSlice:
    key: bytes
    columns: tuple[RawColumn, ...] | list[RawColumn] = ()

    def __post_init__(self) -> None:
        if isinstance(self.columns, tuple):
            return
        object.__setattr__(self, "columns", tuple(self.columns))


@dataclass(slots=True, frozen=True)
class Column(Generic[N, V]):
    name: N
    value: V
    timestamp: int | None = None
    ttl: int | None = None

    @classmethod
    def convert(
        cls,
        name_codec: "Codec[N]",
        value_codec: "Codec[V]",
        raw: RawColumn,
    ) -> "Column[N, V]":
        return cls(
            name=name_codec.decode(raw.name),
            value=value_codec.decode(raw.value),
            timestamp=raw.timestamp,
            ttl=raw.ttl,
        )


__all__ = [
    "KeyRange",
    "RawColumn",
    "RowSlice",
    "Column",
]
