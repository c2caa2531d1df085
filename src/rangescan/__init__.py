"""Public package exports for the range scan client."""

from .async_client import AsyncScanClient
from .client import ScanClient
from .config import ScanClientConfig
from .core.codecs import BytesCodec, IntCodec, LexicalUUIDCodec, LongCodec, Utf8Codec
from .core.models import Column, KeyRange
from .core.predicate import SlicePredicate
from .scan import ColumnFamily, PageCursor, SyncWalker, advance

__all__ = [
    "ScanClient",
    "AsyncScanClient",
    "ScanClientConfig",
    "ColumnFamily",
    "PageCursor",
    "SyncWalker",
    "advance",
    "Column",
    "KeyRange",
    "SlicePredicate",
    "BytesCodec",
    "Utf8Codec",
    "LongCodec",
    "IntCodec",
    "LexicalUUIDCodec",
]
