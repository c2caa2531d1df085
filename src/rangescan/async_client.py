"""Public async client entrypoint."""

from __future__ import annotations

from collections.abc import Sequence
from types import TracebackType
from typing import Any

from .client_shared import build_column_family, validate_client_config
from .config import ScanClientConfig
from .core.async_transport import AsyncTransport
from .core.codecs import Codec
from .core.errors import ClientClosedError
from .core.models import RowSlice
from .core.predicate import SlicePredicate
from .scan.column_family import ColumnFamily, RangeSliceTransport


class _GuardedTransport:
    """Guard wrapper to block range slices after client close."""

    def __init__(self, owner: "AsyncScanClient", delegate: RangeSliceTransport) -> None:
        self._owner = owner
        self._delegate = delegate

    async def range_slice(
        self,
        column_family: str,
        *,
        start_key: bytes,
        end_key: bytes,
        count: int,
        predicate: SlicePredicate,
        consistency_level: str | None = None,
    ) -> Sequence[RowSlice]:
        self._owner._ensure_open()
        return await self._delegate.range_slice(
            column_family,
            start_key=start_key,
            end_key=end_key,
            count=count,
            predicate=predicate,
            consistency_level=consistency_level,
        )


class AsyncScanClient:
    """Public async range scan client."""

    def __init__(
        self,
        *,
        config: ScanClientConfig | None = None,
        transport: AsyncTransport | None = None,
    ) -> None:
        self._config = config or ScanClientConfig()
        validate_client_config(self._config)

        self._transport = transport or AsyncTransport(self._config)
        self._guarded = _GuardedTransport(self, self._transport)
        self._closed = False

    @property
    def config(self) -> ScanClientConfig:
        return self._config

    def column_family(
        self,
        name: str,
        *,
        key_codec: Codec[Any] | None = None,
        name_codec: Codec[Any] | None = None,
        value_codec: Codec[Any] | None = None,
        read_consistency: str | None = None,
    ) -> ColumnFamily[Any, Any, Any]:
        self._ensure_open()
        return build_column_family(
            config=self._config,
            transport=self._guarded,
            name=name,
            key_codec=key_codec,
            name_codec=name_codec,
            value_codec=value_codec,
            read_consistency=read_consistency,
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError("AsyncScanClient is already closed")

    async def close(self) -> None:
        if self._closed:
            return
        await self._transport.close()
        self._closed = True

    async def __aenter__(self) -> "AsyncScanClient":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "AsyncScanClient",
]
