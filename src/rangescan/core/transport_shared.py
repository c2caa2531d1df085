"""Shared helpers for the gateway transport."""

from __future__ import annotations

import base64
import random
from collections.abc import Mapping
from urllib.parse import quote

import httpx

from ..config import ScanClientConfig
from .predicate import SlicePredicate, build_predicate_payload
from .retry import can_retry, next_backoff_seconds


def build_default_headers(config: ScanClientConfig) -> Mapping[str, str]:
    return {
        "Accept": "application/json",
        "Accept-Encoding": "gzip",
        "User-Agent": config.user_agent,
    }


def build_default_timeout(config: ScanClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def build_range_slice_endpoint(keyspace: str, column_family: str) -> str:
    return (
        f"keyspaces/{quote(keyspace, safe='')}"
        f"/column_families/{quote(column_family, safe='')}/range_slices"
    )


def build_range_slice_body(
    *,
    start_key: bytes,
    end_key: bytes,
    count: int,
    predicate: SlicePredicate,
    consistency_level: str,
) -> dict[str, object]:
    return {
        "start_key": base64.b64encode(start_key).decode("ascii"),
        "end_key": base64.b64encode(end_key).decode("ascii"),
        "count": count,
        "predicate": build_predicate_payload(predicate),
        "consistency_level": consistency_level,
    }


def should_retry_attempt(
    *,
    config: ScanClientConfig,
    attempt: int,
    started_at: float,
    now: float,
) -> bool:
    return can_retry(
        attempt=attempt,
        max_attempts=config.retry.max_attempts,
        started_at=started_at,
        now=now,
        total_budget_seconds=config.retry.total_retry_budget_seconds,
    )


def compute_backoff_seconds(
    *,
    config: ScanClientConfig,
    attempt: int,
    rng: random.Random,
) -> float:
    return next_backoff_seconds(
        attempt_index=attempt - 1,
        max_backoff_seconds=config.retry.max_backoff_seconds,
        rng=rng,
    )


__all__ = [
    "build_default_headers",
    "build_default_timeout",
    "build_range_slice_endpoint",
    "build_range_slice_body",
    "should_retry_attempt",
    "compute_backoff_seconds",
]
