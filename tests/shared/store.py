from __future__ import annotations

import bisect
from collections.abc import Mapping, Sequence

from rangescan.core.models import RawColumn, RowSlice
from rangescan.core.predicate import SlicePredicate


def build_rows(keys: Sequence[bytes], *, columns_per_row: int = 1) -> dict[bytes, list[RawColumn]]:
    return {
        key: [
            RawColumn(name=f"c{i}".encode(), value=key + f":{i}".encode(), timestamp=i)
            for i in range(columns_per_row)
        ]
        for key in keys
    }


class InMemoryStore:
    """Sorted store whose range slice is inclusive of both bounds."""

    def __init__(self, rows: Mapping[bytes, Sequence[RawColumn]]):
        self._keys = sorted(rows)
        self._rows = {key: tuple(columns) for key, columns in rows.items()}
        self.calls: list[tuple[bytes, bytes, int]] = []
        self.failures: list[Exception] = []

    async def range_slice(
        self,
        start_key: bytes,
        end_key: bytes,
        limit: int,
        predicate: SlicePredicate,
    ) -> list[RowSlice]:
        self.calls.append((start_key, end_key, limit))
        if self.failures:
            raise self.failures.pop(0)
        lo = bisect.bisect_left(self._keys, start_key) if start_key else 0
        hi = bisect.bisect_right(self._keys, end_key) if end_key else len(self._keys)
        return [
            RowSlice(key=key, columns=_select(self._rows[key], predicate))
            for key in self._keys[lo:hi][:limit]
        ]

    @property
    def limits(self) -> list[int]:
        return [limit for _, _, limit in self.calls]


class StoreTransport:
    """Column-family-aware transport over one in-memory store per family."""

    def __init__(self, families: Mapping[str, InMemoryStore]):
        self.families = dict(families)
        self.consistency_levels: list[str | None] = []
        self.closed = False

    async def range_slice(
        self,
        column_family: str,
        *,
        start_key: bytes,
        end_key: bytes,
        count: int,
        predicate: SlicePredicate,
        consistency_level: str | None = None,
    ) -> list[RowSlice]:
        self.consistency_levels.append(consistency_level)
        return await self.families[column_family].range_slice(start_key, end_key, count, predicate)

    async def close(self) -> None:
        self.closed = True


class ScriptedSource:
    """Returns pre-baked pages regardless of the request."""

    def __init__(self, pages: Sequence[Sequence[RowSlice]]):
        self.pages = [list(page) for page in pages]
        self.calls: list[tuple[bytes, bytes, int]] = []

    async def range_slice(
        self,
        start_key: bytes,
        end_key: bytes,
        limit: int,
        predicate: SlicePredicate,
    ) -> list[RowSlice]:
        self.calls.append((start_key, end_key, limit))
        return self.pages.pop(0)


def _select(columns: Sequence[RawColumn], predicate: SlicePredicate) -> list[RawColumn]:
    if predicate.column_names is not None:
        wanted = set(predicate.column_names)
        return [column for column in columns if column.name in wanted]
    return list(columns)[: predicate.count]
