from __future__ import annotations

import pytest

from rangescan.async_client import AsyncScanClient
from rangescan.config import ScanClientConfig, ScanConfig
from rangescan.core.codecs import Utf8Codec
from rangescan.core.errors import ClientClosedError, ValidationError
from rangescan.scan.cursor import advance, iterate_columns
from tests.shared.store import InMemoryStore, StoreTransport, build_rows


def _transport() -> StoreTransport:
    return StoreTransport({"events": InMemoryStore(build_rows([b"e1", b"e2", b"e3"]))})


@pytest.mark.asyncio
async def test_async_client_context_manager_closes_transport():
    transport = _transport()
    async with AsyncScanClient(transport=transport) as client:
        assert client is not None
    assert transport.closed is True


@pytest.mark.asyncio
async def test_async_client_scans_with_configured_defaults():
    transport = _transport()
    config = ScanClientConfig(scan=ScanConfig(default_page_size=2, read_consistency="LOCAL_QUORUM"))
    async with AsyncScanClient(config=config, transport=transport) as client:
        family = client.column_family("events", key_codec=Utf8Codec())
        cursor = family.iteratee()
        keys = [key async for key, _ in iterate_columns(cursor)]

    assert keys == ["e1", "e2", "e3"]
    assert cursor.page_size == 2
    assert set(transport.consistency_levels) == {"LOCAL_QUORUM"}


@pytest.mark.asyncio
async def test_async_client_blocks_scans_after_close():
    client = AsyncScanClient(transport=_transport())
    cursor = client.column_family("events").iteratee()
    await client.close()
    with pytest.raises(ClientClosedError):
        await advance(cursor)
    with pytest.raises(ClientClosedError):
        client.column_family("events")


def test_async_client_rejects_invalid_config():
    with pytest.raises(ValidationError):
        AsyncScanClient(config=ScanClientConfig(keyspace=""), transport=_transport())


@pytest.mark.asyncio
async def test_async_client_rejects_unknown_consistency_override():
    async with AsyncScanClient(transport=_transport()) as client:
        with pytest.raises(ValidationError):
            client.column_family("events", read_consistency="MOST")
