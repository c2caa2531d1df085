"""Async rate throttling utilities."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable


class AsyncMinIntervalThrottler:
    """Keeps a minimum interval between outbound range-slice requests."""

    def __init__(
        self,
        min_interval_seconds: float,
        *,
        clock: Callable[[], float] | None = None,
        sleeper: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        self._min_interval_seconds = max(0.0, float(min_interval_seconds))
        self._clock = clock or time.monotonic
        self._sleep = sleeper or asyncio.sleep
        self._last_request_at: float | None = None

    async def wait(self) -> None:
        if self._min_interval_seconds == 0.0:
            return
        now = self._clock()
        if self._last_request_at is not None:
            remaining = self._min_interval_seconds - (now - self._last_request_at)
            if remaining > 0:
                await self._sleep(remaining)
                now = self._clock()
        self._last_request_at = now

    def reset(self) -> None:
        self._last_request_at = None


__all__ = [
    "AsyncMinIntervalThrottler",
]
