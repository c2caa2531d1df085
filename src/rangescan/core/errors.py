"""Error types and HTTP status mapping."""

from __future__ import annotations

from collections.abc import Mapping


def extract_error_message(payload: Mapping[str, object] | None) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    value = payload.get("error")
    if isinstance(value, Mapping):
        value = value.get("message")
    return str(value) if value is not None else None


class ScanError(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.cause = cause


class TransportError(ScanError):
    """Failure of a single range-slice call (network or gateway)."""


class RequestRejectedError(TransportError):
    """The gateway rejected the request (HTTP 4xx)."""


class ServerError(TransportError):
    """Store-side unexpected error."""


class UnavailableError(TransportError):
    """Store unavailable or timed out."""


class ProtocolError(ScanError):
    """Response shape is invalid or the store returned a non-advancing key sequence."""


class DecodeError(ScanError, ValueError):
    """Malformed bytes for the codec in use."""


class ValidationError(ScanError, ValueError):
    """Invalid configuration or argument."""


class InvalidStateError(ScanError):
    """Caller broke the cursor or walker contract."""


class ExhaustedError(InvalidStateError):
    """Raised when a drained walker is asked for another element."""


class ClientClosedError(InvalidStateError):
    """Raised when client is used after close."""


def classify_http_error(
    payload: Mapping[str, object] | None,
    *,
    http_status: int | None,
) -> TransportError | None:
    """Map a gateway HTTP status to a transport exception."""

    if http_status is not None and 200 <= http_status < 300:
        return None

    message = extract_error_message(payload) or "range slice request failed"
    if http_status is None:
        return TransportError("missing HTTP status in gateway response", cause="protocol")
    if http_status in (503, 504):
        return UnavailableError(message, http_status=http_status, cause="server_transient")
    if http_status >= 500:
        return ServerError(message, http_status=http_status, cause="server_transient")
    if http_status >= 400:
        return RequestRejectedError(message, http_status=http_status)
    return TransportError(
        f"unexpected HTTP status {http_status}",
        http_status=http_status,
        cause="protocol",
    )


__all__ = [
    "ScanError",
    "TransportError",
    "RequestRejectedError",
    "ServerError",
    "UnavailableError",
    "ProtocolError",
    "DecodeError",
    "ValidationError",
    "InvalidStateError",
    "ExhaustedError",
    "ClientClosedError",
    "extract_error_message",
    "classify_http_error",
]
