"""Public blocking client entrypoint."""

from __future__ import annotations

from collections.abc import Coroutine, Sequence
from types import TracebackType
from typing import Any, TypeVar

from .async_client import AsyncScanClient
from .config import ScanClientConfig
from .core.async_transport import AsyncTransport
from .core.codecs import Codec
from .core.errors import ClientClosedError
from .core.models import RowSlice
from .core.predicate import SlicePredicate
from .scan.bridge import BlockingRunner
from .scan.column_family import ColumnFamily
from .scan.cursor import PageCursor
from .scan.walker import SyncWalker

T = TypeVar("T")


class SyncColumnFamily:
    """Blocking facade over a column family, bound to its client's runner."""

    def __init__(self, owner: "ScanClient", family: ColumnFamily[Any, Any, Any]) -> None:
        self._owner = owner
        self._family = family

    @property
    def family(self) -> ColumnFamily[Any, Any, Any]:
        return self._family

    @property
    def name(self) -> str:
        return self._family.name

    def range_slice(
        self,
        start_key: bytes,
        end_key: bytes,
        limit: int,
        predicate: SlicePredicate,
    ) -> Sequence[RowSlice]:
        return self._owner._run(self._family.range_slice(start_key, end_key, limit, predicate))

    def iteratee(self, page_size: int | None = None, **kwargs: Any) -> PageCursor[Any, Any, Any]:
        return self._family.iteratee(page_size, **kwargs)

    def advance(self, cursor: PageCursor[Any, Any, Any]) -> PageCursor[Any, Any, Any]:
        return self._owner._run(cursor.advance())

    def walk(self, page_size: int | None = None, **kwargs: Any) -> SyncWalker[Any, Any, Any]:
        self._owner._ensure_open()
        return self._family.walk(page_size, runner=self._owner._run, **kwargs)


class ScanClient:
    """Public blocking range scan client.

    Owns a private event loop thread; every request of this client, including
    the page fetches of its walkers, runs on that loop.
    """

    def __init__(
        self,
        *,
        config: ScanClientConfig | None = None,
        transport: AsyncTransport | None = None,
        runner: BlockingRunner | None = None,
    ) -> None:
        self._async = AsyncScanClient(config=config, transport=transport)
        self._owns_runner = runner is None
        self._runner = runner or BlockingRunner()
        self._closed = False

    @property
    def config(self) -> ScanClientConfig:
        return self._async.config

    def column_family(
        self,
        name: str,
        *,
        key_codec: Codec[Any] | None = None,
        name_codec: Codec[Any] | None = None,
        value_codec: Codec[Any] | None = None,
        read_consistency: str | None = None,
    ) -> SyncColumnFamily:
        self._ensure_open()
        family = self._async.column_family(
            name,
            key_codec=key_codec,
            name_codec=name_codec,
            value_codec=value_codec,
            read_consistency=read_consistency,
        )
        return SyncColumnFamily(self, family)

    def _run(self, coro: Coroutine[Any, Any, T]) -> T:
        if self._closed:
            coro.close()
            raise ClientClosedError("ScanClient is already closed")
        return self._runner.run(coro)

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError("ScanClient is already closed")

    def close(self) -> None:
        if self._closed:
            return
        try:
            self._runner.run(self._async.close())
        finally:
            self._closed = True
            if self._owns_runner:
                self._runner.close()

    def __enter__(self) -> "ScanClient":
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False


__all__ = [
    "SyncColumnFamily",
    "ScanClient",
]
