"""Column family handle: range slices and scan cursors over one family."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Generic, Protocol, TypeVar

from ..core.codecs import BytesCodec, Codec
from ..core.errors import ValidationError
from ..core.models import KeyRange, RowSlice
from ..core.predicate import SlicePredicate
from .cursor import PageCursor
from .walker import Runner, SyncWalker

K = TypeVar("K")
N = TypeVar("N")
V = TypeVar("V")


class RangeSliceTransport(Protocol):
    async def range_slice(
        self,
        column_family: str,
        *,
        start_key: bytes,
        end_key: bytes,
        count: int,
        predicate: SlicePredicate,
        consistency_level: str | None = None,
    ) -> Sequence[RowSlice]: ...


@dataclass(slots=True, frozen=True)
class ColumnFamily(Generic[K, N, V]):
    name: str
    transport: RangeSliceTransport = field(repr=False)
    key_codec: Codec[K] = field(default_factory=BytesCodec, repr=False)
    name_codec: Codec[N] = field(default_factory=BytesCodec, repr=False)
    value_codec: Codec[V] = field(default_factory=BytesCodec, repr=False)
    read_consistency: str | None = None
    default_page_size: int = 100

    def __post_init__(self) -> None:
        if not self.name:
            raise ValidationError("column family name must not be empty")

    def with_codecs(
        self,
        *,
        key_codec: Codec[Any] | None = None,
        name_codec: Codec[Any] | None = None,
        value_codec: Codec[Any] | None = None,
    ) -> "ColumnFamily[Any, Any, Any]":
        return replace(
            self,
            key_codec=key_codec or self.key_codec,
            name_codec=name_codec or self.name_codec,
            value_codec=value_codec or self.value_codec,
        )

    async def range_slice(
        self,
        start_key: bytes,
        end_key: bytes,
        limit: int,
        predicate: SlicePredicate,
    ) -> Sequence[RowSlice]:
        return await self.transport.range_slice(
            self.name,
            start_key=start_key,
            end_key=end_key,
            count=limit,
            predicate=predicate,
            consistency_level=self.read_consistency,
        )

    def iteratee(
        self,
        page_size: int | None = None,
        *,
        start_key: K | None = None,
        end_key: K | None = None,
        column_names: Sequence[N] | None = None,
        predicate: SlicePredicate | None = None,
    ) -> PageCursor[K, N, V]:
        """Create the initial cursor of a scan over ``[start_key, end_key]``.

        Omitted keys leave that end of the range open. ``column_names`` and
        ``predicate`` are mutually exclusive; with neither, whole rows are
        returned.
        """

        if column_names is not None and predicate is not None:
            raise ValidationError("pass either column_names or predicate, not both")
        if column_names is not None:
            predicate = SlicePredicate.names([self.name_codec.encode(n) for n in column_names])
        predicate = predicate or SlicePredicate.full_row()
        predicate.validate()

        key_range = KeyRange(
            start_key=b"" if start_key is None else self.key_codec.encode(start_key),
            end_key=b"" if end_key is None else self.key_codec.encode(end_key),
        )
        return PageCursor(
            source=self,
            key_range=key_range,
            page_size=self.default_page_size if page_size is None else page_size,
            predicate=predicate,
            key_codec=self.key_codec,
            name_codec=self.name_codec,
            value_codec=self.value_codec,
        )

    def walk(
        self,
        page_size: int | None = None,
        *,
        start_key: K | None = None,
        end_key: K | None = None,
        column_names: Sequence[N] | None = None,
        predicate: SlicePredicate | None = None,
        runner: Runner | None = None,
    ) -> SyncWalker[K, N, V]:
        cursor = self.iteratee(
            page_size,
            start_key=start_key,
            end_key=end_key,
            column_names=column_names,
            predicate=predicate,
        )
        return SyncWalker(cursor, runner=runner)


__all__ = [
    "RangeSliceTransport",
    "ColumnFamily",
]
