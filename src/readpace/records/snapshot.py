"""Library snapshot loading.

A snapshot is the JSON export of a reader's library as kept by the
persistence backend: books, their statuses and every logged session.

    {
        "version": "1.0",
        "books": [...],
        "statuses": [...],
        "sessions": [...]
    }
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, ValidationError

from .schemas import Book, BookStatusEntry, ReadingSession

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Snapshot could not be read or failed validation."""

    pass


class LibrarySnapshot(BaseModel):
    """Books, statuses and sessions of one library."""

    version: str = "1.0"
    books: list[Book] = Field(default_factory=list)
    statuses: list[BookStatusEntry] = Field(default_factory=list)
    sessions: list[ReadingSession] = Field(default_factory=list)

    def get_book(self, book_id: str) -> Optional[Book]:
        """Get a book by ID."""
        for book in self.books:
            if book.id == book_id:
                return book
        return None

    def status_for(self, book_id: str) -> Optional[BookStatusEntry]:
        """Get a book's status entry, if it has one."""
        for status in self.statuses:
            if status.book_id == book_id:
                return status
        return None

    def status_map(self) -> dict[str, BookStatusEntry]:
        """Status entries keyed by book ID."""
        return {status.book_id: status for status in self.statuses}

    def sessions_for(self, book_id: str) -> list[ReadingSession]:
        """Sessions logged for a book."""
        return [s for s in self.sessions if s.book_id == book_id]


def parse_snapshot(data: dict) -> LibrarySnapshot:
    """Validate snapshot data.

    Raises:
        SnapshotError: If the data does not match the snapshot schema
    """
    try:
        return LibrarySnapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot: {e.error_count()} error(s)\n{e}") from e


def load_snapshot(path: Union[str, Path]) -> LibrarySnapshot:
    """Load a snapshot from a JSON file.

    Args:
        path: Path to the snapshot file

    Returns:
        Validated LibrarySnapshot

    Raises:
        SnapshotError: If the file is missing, not JSON, or invalid
    """
    path = Path(path)
    if not path.exists():
        raise SnapshotError(f"Snapshot not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a JSON object")

    snapshot = parse_snapshot(data)
    logger.info(
        "Loaded snapshot %s: %d books, %d statuses, %d sessions",
        path,
        len(snapshot.books),
        len(snapshot.statuses),
        len(snapshot.sessions),
    )
    return snapshot
