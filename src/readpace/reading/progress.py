"""Per-book reading progress metrics.

Progress percentage, time spent and average pace for a single book,
as shown in the book detail view next to its projection.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..records.schemas import Book, BookStatusEntry, ReadingSession
from .aggregation import count_reading_days, most_recent_reading_date


@dataclass
class BookProgress:
    """Reading metrics for one book."""

    book_id: str
    total_pages: int

    # Totals
    pages_read: int = 0
    total_minutes: float = 0.0
    sessions_count: int = 0
    reading_days: int = 0

    # Averages
    avg_pages_per_day: float = 0.0
    avg_minutes_per_day: float = 0.0
    pages_per_minute: float = 0.0

    last_read_date: Optional[date] = None

    @property
    def progress_percent(self) -> float:
        """Percentage of the book read, capped at 100."""
        if self.total_pages <= 0:
            return 0.0
        return min(100.0, round((self.pages_read / self.total_pages) * 100, 1))

    @property
    def pages_remaining(self) -> int:
        return max(0, self.total_pages - self.pages_read)

    @classmethod
    def from_records(
        cls,
        book: Book,
        status: Optional[BookStatusEntry],
        sessions: Iterable[ReadingSession],
        today: Optional[date] = None,
    ) -> "BookProgress":
        """Calculate metrics from a book's records.

        Args:
            book: The book
            status: Its current status (pages read default to 0 without one)
            sessions: Reading sessions; only those for ``book`` are used
            today: Reference date for dating day/month sessions (default: today)

        Returns:
            BookProgress with calculated metrics
        """
        today = today or date.today()
        book_sessions = [s for s in sessions if s.book_id == book.id]

        pages_read = status.pages_read if status else 0
        total_minutes = sum(s.minutes_spent or 0 for s in book_sessions)
        sessions_count = len(book_sessions)

        # Each logged session counts as one day of reading
        avg_pages_per_day = pages_read / sessions_count if sessions_count else 0
        avg_minutes_per_day = total_minutes / sessions_count if sessions_count else 0
        pages_per_minute = pages_read / total_minutes if total_minutes > 0 else 0

        return cls(
            book_id=book.id,
            total_pages=book.total_pages,
            pages_read=pages_read,
            total_minutes=total_minutes,
            sessions_count=sessions_count,
            reading_days=count_reading_days(book_sessions),
            avg_pages_per_day=round(avg_pages_per_day, 1),
            avg_minutes_per_day=round(avg_minutes_per_day, 1),
            pages_per_minute=round(pages_per_minute, 2),
            last_read_date=most_recent_reading_date(book_sessions, today),
        )

