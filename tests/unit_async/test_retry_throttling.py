from __future__ import annotations

import random

import pytest

from rangescan.core.async_throttling import AsyncMinIntervalThrottler
from rangescan.core.retry import can_retry, is_retryable_http_status, next_backoff_seconds


def _fake_clock():
    now = {"value": 0.0}
    sleeps: list[float] = []

    def clock() -> float:
        return now["value"]

    async def sleeper(sec: float) -> None:
        sleeps.append(sec)
        now["value"] += sec

    return now, sleeps, clock, sleeper


@pytest.mark.asyncio
async def test_throttler_waits_for_remaining_interval():
    now, sleeps, clock, sleeper = _fake_clock()
    throttler = AsyncMinIntervalThrottler(1.0, clock=clock, sleeper=sleeper)
    await throttler.wait()
    now["value"] = 0.2
    await throttler.wait()
    assert sleeps and abs(sleeps[0] - 0.8) < 1e-6


@pytest.mark.asyncio
async def test_throttler_reset_and_zero_interval_never_sleep():
    now, sleeps, clock, sleeper = _fake_clock()
    throttler = AsyncMinIntervalThrottler(1.0, clock=clock, sleeper=sleeper)
    await throttler.wait()
    now["value"] = 0.1
    throttler.reset()
    await throttler.wait()

    unthrottled = AsyncMinIntervalThrottler(0.0, clock=clock, sleeper=sleeper)
    await unthrottled.wait()
    await unthrottled.wait()
    assert sleeps == []


def test_retry_budget_and_attempt_count():
    assert can_retry(attempt=1, max_attempts=3, started_at=0.0, now=1.0, total_budget_seconds=60.0)
    assert not can_retry(attempt=3, max_attempts=3, started_at=0.0, now=1.0, total_budget_seconds=60.0)
    assert not can_retry(attempt=1, max_attempts=3, started_at=0.0, now=61.0, total_budget_seconds=60.0)


def test_backoff_is_bounded_and_non_negative():
    rng = random.Random(7)
    for attempt_index in range(10):
        value = next_backoff_seconds(attempt_index=attempt_index, max_backoff_seconds=2.0, rng=rng)
        assert 0.0 <= value <= 2.2
    assert next_backoff_seconds(attempt_index=3, max_backoff_seconds=0.0) == 0.0


def test_only_transient_http_statuses_are_retryable():
    assert is_retryable_http_status(500)
    assert is_retryable_http_status(503)
    assert not is_retryable_http_status(400)
    assert not is_retryable_http_status(None)
