"""Immutable page cursors over a column family key range.

A scan is a chain of ``PageCursor`` snapshots. Each call to :func:`advance`
issues exactly one bounded range-slice request and returns the next snapshot;
the predecessor is never modified, so a failed ``advance`` can be retried from
the same cursor.

The store's range slice is inclusive of its start key. Every page after the
first therefore starts with the previous page's last row (the boundary row),
which is dropped before decoding.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable, Coroutine, Sequence
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar

from ..core.codecs import Codec
from ..core.errors import InvalidStateError, ProtocolError, ValidationError
from ..core.models import Column, KeyRange, RowSlice
from ..core.predicate import SlicePredicate

if TYPE_CHECKING:
    from .walker import SyncWalker

logger = logging.getLogger("rangescan")

K = TypeVar("K")
N = TypeVar("N")
V = TypeVar("V")

# With limit 1 a continuation page could only ever return the boundary row.
MIN_CONTINUATION_LIMIT = 2


class RangeSliceSource(Protocol):
    async def range_slice(
        self,
        start_key: bytes,
        end_key: bytes,
        limit: int,
        predicate: SlicePredicate,
    ) -> Sequence[RowSlice]: ...


@dataclass(slots=True, frozen=True)
class PageRequest:
    page_size: int
    predicate: SlicePredicate
    skip_key: bytes | None = None

    @property
    def effective_limit(self) -> int:
        if self.skip_key is None:
            return self.page_size + 1
        return max(self.page_size, MIN_CONTINUATION_LIMIT)


@dataclass(slots=True, frozen=True)
class PageCursor(Generic[K, N, V]):
    source: RangeSliceSource = field(repr=False)
    key_range: KeyRange
    page_size: int
    predicate: SlicePredicate
    key_codec: Codec[K] = field(repr=False)
    name_codec: Codec[N] = field(repr=False)
    value_codec: Codec[V] = field(repr=False)
    buffer: tuple[tuple[K, Column[N, V]], ...] = ()
    terminated: bool = False
    skip_key: bytes | None = None
    pages_fetched: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int):
            raise ValidationError("page_size must be int")
        if self.page_size < 1:
            raise ValidationError("page_size must be >= 1")
        if not isinstance(self.buffer, tuple):
            object.__setattr__(self, "buffer", tuple(self.buffer))

    @property
    def has_next(self) -> bool:
        """True if :meth:`advance` will request another page."""
        return not self.terminated

    @property
    def start_key(self) -> bytes:
        return self.key_range.start_key

    @property
    def end_key(self) -> bytes:
        return self.key_range.end_key

    def page_request(self) -> PageRequest:
        return PageRequest(
            page_size=self.page_size,
            predicate=self.predicate,
            skip_key=self.skip_key,
        )

    async def advance(self) -> "PageCursor[K, N, V]":
        return await advance(self)

    def walker(
        self,
        *,
        runner: Callable[[Coroutine[Any, Any, Any]], Any] | None = None,
    ) -> "SyncWalker[K, N, V]":
        from .walker import SyncWalker

        return SyncWalker(self, runner=runner)


def decode_rows(
    rows: Sequence[RowSlice],
    *,
    key_codec: Codec[K],
    name_codec: Codec[N],
    value_codec: Codec[V],
) -> tuple[tuple[K, Column[N, V]], ...]:
    pairs: list[tuple[K, Column[N, V]]] = []
    for row in rows:
        if not row.columns:
            continue
        key = key_codec.decode(row.key)
        for raw in row.columns:
            pairs.append((key, Column.convert(name_codec, value_codec, raw)))
    return tuple(pairs)


async def advance(cursor: PageCursor[K, N, V]) -> PageCursor[K, N, V]:
    """Fetch the page after ``cursor`` and return the cursor describing it."""

    if cursor.terminated:
        raise InvalidStateError("scan is terminated; no more pages to request")

    request = cursor.page_request()
    limit = request.effective_limit
    rows = tuple(
        await cursor.source.range_slice(
            cursor.key_range.start_key,
            cursor.key_range.end_key,
            limit,
            cursor.predicate,
        )
    )

    if rows and rows[0].key == cursor.skip_key:
        fresh = rows[1:]
    else:
        fresh = rows
    buffer = decode_rows(
        fresh,
        key_codec=cursor.key_codec,
        name_codec=cursor.name_codec,
        value_codec=cursor.value_codec,
    )
    last_found_key = rows[-1].key if rows else cursor.key_range.end_key
    pages_fetched = cursor.pages_fetched + 1

    # A continuation page holding only the boundary row means the range is drained.
    if last_found_key == cursor.key_range.end_key or (rows and not fresh):
        logger.debug(
            "scan page terminated page=%s limit=%s rows=%s pairs=%s",
            pages_fetched,
            limit,
            len(rows),
            len(buffer),
        )
        return replace(
            cursor,
            buffer=buffer,
            terminated=True,
            pages_fetched=pages_fetched,
        )

    if last_found_key == cursor.skip_key:
        raise ProtocolError("range slice did not advance past the previous page")

    logger.debug(
        "scan page fetched page=%s limit=%s rows=%s pairs=%s",
        pages_fetched,
        limit,
        len(rows),
        len(buffer),
    )
    return replace(
        cursor,
        key_range=cursor.key_range.resume_from(last_found_key),
        skip_key=last_found_key,
        buffer=buffer,
        pages_fetched=pages_fetched,
    )


async def iterate_pages(cursor: PageCursor[K, N, V]) -> AsyncIterator[PageCursor[K, N, V]]:
    """Yield each successive cursor until the scan terminates."""

    current = cursor
    while not current.terminated:
        current = await advance(current)
        yield current


async def iterate_columns(cursor: PageCursor[K, N, V]) -> AsyncIterator[tuple[K, Column[N, V]]]:
    """Yield every ``(key, column)`` pair, starting with ``cursor``'s own buffer."""

    for pair in cursor.buffer:
        yield pair
    async for page in iterate_pages(cursor):
        for pair in page.buffer:
            yield pair


__all__ = [
    "MIN_CONTINUATION_LIMIT",
    "RangeSliceSource",
    "PageRequest",
    "PageCursor",
    "decode_rows",
    "advance",
    "iterate_pages",
    "iterate_columns",
]
