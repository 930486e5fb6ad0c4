"""Book, status and reading session records."""

from .schemas import (
    Book,
    BookStatusEntry,
    ReadingSession,
    ReadingStatus,
)
from .snapshot import (
    LibrarySnapshot,
    SnapshotError,
    load_snapshot,
    parse_snapshot,
)

__all__ = [
    "Book",
    "BookStatusEntry",
    "ReadingSession",
    "ReadingStatus",
    "LibrarySnapshot",
    "SnapshotError",
    "load_snapshot",
    "parse_snapshot",
]
