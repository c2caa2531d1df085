"""Async HTTP transport for range-slice requests, with retry and throttling."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Protocol

import httpx

from ..config import ScanClientConfig
from .async_throttling import AsyncMinIntervalThrottler
from .errors import ProtocolError, TransportError, ValidationError
from .models import RowSlice
from .predicate import SlicePredicate
from .response_parsing import parse_json_payload, parse_key_slices
from .retry import is_retryable_http_status
from .transport_shared import (
    build_default_headers,
    build_default_timeout,
    build_range_slice_body,
    build_range_slice_endpoint,
    compute_backoff_seconds,
    should_retry_attempt,
)

logger = logging.getLogger("rangescan")


class AsyncTransportClient(Protocol):
    async def post(self, url: str, *, json: Mapping[str, object]) -> object: ...
    async def aclose(self) -> None: ...


class AsyncTransport:
    """Asynchronous transport executing one bounded range slice per call."""

    def __init__(
        self,
        config: ScanClientConfig,
        *,
        client: AsyncTransportClient | None = None,
        sleeper: Callable[[float], Awaitable[None]] | None = None,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config
        self._sleep = sleeper or _default_sleep
        self._clock = clock or time.monotonic
        self._rng = rng or random.Random()
        self._closed = False

        self._throttler = AsyncMinIntervalThrottler(
            config.throttling.min_wait_interval_seconds,
            clock=self._clock,
            sleeper=self._sleep,
        )
        self._owns_client = client is None
        normalized_base_url = config.base_url.rstrip("/") + "/"
        self._client = client or httpx.AsyncClient(
            base_url=normalized_base_url,
            headers=build_default_headers(config),
            timeout=build_default_timeout(config),
        )

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client and hasattr(self._client, "aclose"):
            await self._client.aclose()

    async def range_slice(
        self,
        column_family: str,
        *,
        start_key: bytes,
        end_key: bytes,
        count: int,
        predicate: SlicePredicate,
        consistency_level: str | None = None,
    ) -> tuple[RowSlice, ...]:
        if count < 1:
            raise ValidationError("range slice count must be >= 1")
        endpoint = build_range_slice_endpoint(self._config.keyspace, column_family)
        body = build_range_slice_body(
            start_key=start_key,
            end_key=end_key,
            count=count,
            predicate=predicate,
            consistency_level=consistency_level or self._config.scan.read_consistency,
        )
        payload = await self.request(endpoint, body=body)
        return parse_key_slices(payload)

    async def request(self, endpoint: str, *, body: Mapping[str, object]) -> dict[str, object]:
        if self._closed:
            raise TransportError("transport is already closed")

        started_at = self._clock()
        attempt = 0

        while True:
            attempt += 1
            logger.debug("request start endpoint=%s attempt=%s", endpoint, attempt)
            await self._throttler.wait()

            try:
                response = await self._client.post(endpoint, json=body)
            except Exception as exc:
                if should_retry_attempt(
                    config=self._config,
                    attempt=attempt,
                    started_at=started_at,
                    now=self._clock(),
                ):
                    logger.warning(
                        "request network error; retrying endpoint=%s attempt=%s error=%s",
                        endpoint,
                        attempt,
                        exc.__class__.__name__,
                    )
                    await self._backoff(attempt)
                    continue
                logger.error(
                    "request network error; giving up endpoint=%s attempt=%s error=%s",
                    endpoint,
                    attempt,
                    exc.__class__.__name__,
                )
                raise TransportError(
                    "network/transport error",
                    cause="network",
                ) from exc

            http_status = getattr(response, "status_code", None)
            logger.debug(
                "response received endpoint=%s attempt=%s http_status=%s",
                endpoint,
                attempt,
                http_status,
            )
            try:
                payload = parse_json_payload(response, http_status=http_status)
            except ProtocolError:
                logger.error(
                    "response parse error endpoint=%s attempt=%s http_status=%s",
                    endpoint,
                    attempt,
                    http_status,
                )
                raise
            except TransportError:
                if is_retryable_http_status(http_status) and should_retry_attempt(
                    config=self._config,
                    attempt=attempt,
                    started_at=started_at,
                    now=self._clock(),
                ):
                    logger.warning(
                        "request transient failure; retrying endpoint=%s attempt=%s http_status=%s",
                        endpoint,
                        attempt,
                        http_status,
                    )
                    await self._backoff(attempt)
                    continue
                logger.error(
                    "request failed endpoint=%s attempt=%s http_status=%s",
                    endpoint,
                    attempt,
                    http_status,
                )
                raise

            logger.info("request success endpoint=%s attempt=%s", endpoint, attempt)
            return payload

    async def _backoff(self, attempt: int) -> None:
        await self._sleep(
            compute_backoff_seconds(
                config=self._config,
                attempt=attempt,
                rng=self._rng,
            )
        )


async def _default_sleep(seconds: float) -> None:
    await asyncio.sleep(seconds)


__all__ = [
    "AsyncTransportClient",
    "AsyncTransport",
]
