"""Shared helpers for sync/async client bootstrap."""

from __future__ import annotations

from typing import Any

from .config import CONSISTENCY_LEVELS, ScanClientConfig
from .core.codecs import BytesCodec, Codec
from .core.errors import ValidationError
from .scan.column_family import ColumnFamily, RangeSliceTransport


def validate_client_config(config: ScanClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


def build_column_family(
    *,
    config: ScanClientConfig,
    transport: RangeSliceTransport,
    name: str,
    key_codec: Codec[Any] | None,
    name_codec: Codec[Any] | None,
    value_codec: Codec[Any] | None,
    read_consistency: str | None,
) -> ColumnFamily[Any, Any, Any]:
    consistency = read_consistency or config.scan.read_consistency
    if consistency not in CONSISTENCY_LEVELS:
        raise ValidationError(f"unknown read consistency: {consistency!r}")
    return ColumnFamily(
        name=name,
        transport=transport,
        key_codec=key_codec or BytesCodec(),
        name_codec=name_codec or BytesCodec(),
        value_codec=value_codec or BytesCodec(),
        read_consistency=consistency,
        default_page_size=config.scan.default_page_size,
    )


__all__ = [
    "validate_client_config",
    "build_column_family",
]
