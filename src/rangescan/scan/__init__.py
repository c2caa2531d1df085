"""Range scan package."""

from .bridge import BlockingRunner
from .column_family import ColumnFamily
from .cursor import PageCursor, PageRequest, advance, iterate_columns, iterate_pages
from .walker import SyncWalker

__all__ = [
    "BlockingRunner",
    "ColumnFamily",
    "PageCursor",
    "PageRequest",
    "SyncWalker",
    "advance",
    "iterate_columns",
    "iterate_pages",
]
