"""Synchronous pull-based iteration over a page cursor chain."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine, Iterator
from typing import Any, Generic, TypeVar

from ..core.errors import ExhaustedError
from ..core.models import Column
from .cursor import PageCursor

K = TypeVar("K")
N = TypeVar("N")
V = TypeVar("V")

Runner = Callable[[Coroutine[Any, Any, Any]], Any]


class SyncWalker(Generic[K, N, V]):
    """Drains a cursor's buffer, blocking on ``advance()`` between pages.

    ``runner`` must run a coroutine to completion and return its result. The
    default, :func:`asyncio.run`, starts a fresh loop per page and therefore
    cannot be used from inside a running event loop.
    """

    def __init__(self, cursor: PageCursor[K, N, V], *, runner: Runner | None = None) -> None:
        self._cursor = cursor
        self._position = 0
        self._run = runner or asyncio.run

    @property
    def cursor(self) -> PageCursor[K, N, V]:
        return self._cursor

    def has_more(self) -> bool:
        return self._position < len(self._cursor.buffer) or not self._cursor.terminated

    def next(self) -> tuple[K, Column[N, V]]:
        while self._position >= len(self._cursor.buffer):
            if self._cursor.terminated:
                raise ExhaustedError("no more columns in this scan")
            self._cursor = self._run(self._cursor.advance())
            self._position = 0
        item = self._cursor.buffer[self._position]
        self._position += 1
        return item

    def __iter__(self) -> Iterator[tuple[K, Column[N, V]]]:
        return self

    def __next__(self) -> tuple[K, Column[N, V]]:
        try:
            return self.next()
        except ExhaustedError:
            raise StopIteration from None


__all__ = [
    "Runner",
    "SyncWalker",
]
