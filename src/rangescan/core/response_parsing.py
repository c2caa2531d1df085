"""Gateway response parsing into wire-level row slices."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping
from typing import Protocol

from .errors import ProtocolError, classify_http_error
from .models import RawColumn, RowSlice


class JsonPayloadResponse(Protocol):
    def json(self) -> object: ...


def parse_json_payload(
    response: JsonPayloadResponse,
    *,
    http_status: int | None,
) -> dict[str, object]:
    """Parse response JSON and map HTTP failures to transport errors."""

    try:
        payload = response.json()
    except Exception as exc:
        mapped = classify_http_error(None, http_status=http_status)
        if mapped is not None:
            raise mapped from exc
        raise ProtocolError(
            "response body is not valid JSON",
            http_status=http_status,
        ) from exc

    mapped = classify_http_error(
        payload if isinstance(payload, Mapping) else None,
        http_status=http_status,
    )
    if mapped is not None:
        raise mapped
    if not isinstance(payload, dict):
        raise ProtocolError(
            "response JSON root must be an object",
            http_status=http_status,
        )
    return payload


def parse_key_slices(payload: Mapping[str, object]) -> tuple[RowSlice, ...]:
    """Convert a ``key_slices`` payload into ordered ``RowSlice`` values."""

    raw_slices = payload.get("key_slices")
    if not isinstance(raw_slices, list):
        raise ProtocolError("key_slices must be a list")
    return tuple(_parse_row(item) for item in raw_slices)


def _parse_row(item: object) -> RowSlice:
    if not isinstance(item, Mapping):
        raise ProtocolError("key slice entry must be an object")
    columns = item.get("columns", [])
    if not isinstance(columns, list):
        raise ProtocolError("key slice columns must be a list")
    return RowSlice(
        key=_b64decode(item.get("key"), field_name="key"),
        columns=[_parse_column(column) for column in columns],
    )


def _parse_column(item: object) -> RawColumn:
    if not isinstance(item, Mapping):
        raise ProtocolError("column entry must be an object")
    return RawColumn(
        name=_b64decode(item.get("name"), field_name="column name"),
        value=_b64decode(item.get("value"), field_name="column value"),
        timestamp=_optional_int(item.get("timestamp"), field_name="timestamp"),
        ttl=_optional_int(item.get("ttl"), field_name="ttl"),
    )


def _b64decode(value: object, *, field_name: str) -> bytes:
    if not isinstance(value, str):
        raise ProtocolError(f"{field_name} must be a base64 string")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ProtocolError(f"{field_name} is not valid base64") from exc


def _optional_int(value: object, *, field_name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ProtocolError(f"{field_name} must be an integer")
    return value


__all__ = [
    "parse_json_payload",
    "parse_key_slices",
]
