"""Client configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

CONSISTENCY_LEVELS = frozenset(
    {
        "ANY",
        "ONE",
        "TWO",
        "THREE",
        "QUORUM",
        "LOCAL_ONE",
        "LOCAL_QUORUM",
        "EACH_QUORUM",
        "ALL",
    }
)


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 30.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True, frozen=True)
class RetryConfig:
    """Retry-related settings."""

    max_attempts: int = 3
    max_backoff_seconds: float = 10.0
    total_retry_budget_seconds: float = 60.0

    def validate(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("retry.max_attempts must be >= 1")
        if self.max_backoff_seconds < 0:
            raise ValueError("retry.max_backoff_seconds must be >= 0")
        if self.total_retry_budget_seconds < 0:
            raise ValueError("retry.total_retry_budget_seconds must be >= 0")


@dataclass(slots=True, frozen=True)
class ThrottlingConfig:
    """Throttling-related settings."""

    min_wait_interval_seconds: float = 0.0

    def validate(self) -> None:
        if self.min_wait_interval_seconds < 0:
            raise ValueError("throttling.min_wait_interval_seconds must be >= 0")


@dataclass(slots=True, frozen=True)
class ScanConfig:
    """Range scan defaults."""

    default_page_size: int = 100
    read_consistency: str = "ONE"

    def validate(self) -> None:
        if isinstance(self.default_page_size, bool) or not isinstance(self.default_page_size, int):
            raise ValueError("scan.default_page_size must be int")
        if self.default_page_size < 1:
            raise ValueError("scan.default_page_size must be >= 1")
        if self.read_consistency not in CONSISTENCY_LEVELS:
            raise ValueError(f"scan.read_consistency is unknown: {self.read_consistency!r}")


@dataclass(slots=True, frozen=True)
class ScanClientConfig:
    """Runtime configuration for the range scan client."""

    base_url: str = "http://localhost:8080/api/v1"
    keyspace: str = "default"
    user_agent: str = "rangescan/0.1.0"

    transport: TransportConfig = field(default_factory=TransportConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    throttling: ThrottlingConfig = field(default_factory=ThrottlingConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if not self.keyspace:
            raise ValueError("keyspace must not be empty")
        self.transport.validate()
        self.retry.validate()
        self.throttling.validate()
        self.scan.validate()


__all__ = [
    "CONSISTENCY_LEVELS",
    "TransportConfig",
    "RetryConfig",
    "ThrottlingConfig",
    "ScanConfig",
    "ScanClientConfig",
]
