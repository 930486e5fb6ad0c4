"""Completion-date projection for books being read.

Given a book, its current status and the logged sessions, works out the
pace actually achieved, whether the reader has fallen behind, and when
the book should be finished. A manual target date, when set, replaces
the computed forecast.

Missing or insufficient data never raises; it produces a projection
with ``can_show`` false or zeroed fields.
"""

import logging
from dataclasses import asdict, dataclass, replace
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, Mapping, Optional, Union

from ..config import Config, get_config
from ..records.schemas import Book, BookStatusEntry, ReadingSession, ReadingStatus
from .aggregation import (
    aggregate_by_day,
    count_reading_days,
    most_recent_reading_date,
    select_rate_window,
)
from .dates import add_days, days_between, to_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadingProjection:
    """Forecast for one book. Recomputed on demand, never stored."""

    estimated_date: Optional[date] = None
    days_remaining: int = 0
    pages_per_day: float = 0.0
    reading_days_observed: int = 0
    is_delayed: bool = False
    delay_days: int = 0
    can_show: bool = False
    has_target_date: bool = False
    target_date: Optional[date] = None

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        data = asdict(self)
        for key in ("estimated_date", "target_date"):
            if data[key] is not None:
                data[key] = data[key].isoformat()
        return data


def round_pace(value: float) -> float:
    """Round pages/day to one decimal, halves away from zero."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class ProjectionEngine:
    """Computes reading projections."""

    def __init__(
        self,
        config: Optional[Config] = None,
        clock: Callable[[], date] = date.today,
    ):
        """Initialize the engine.

        Args:
            config: Configuration (default: global config)
            clock: Returns today's date; replace it to freeze time in tests
        """
        self.config = config or get_config()
        self.clock = clock

    def project(
        self,
        book: Book,
        status: Optional[BookStatusEntry],
        sessions: Iterable[ReadingSession],
        today: Optional[Union[date, datetime]] = None,
    ) -> ReadingProjection:
        """Project the completion date of a book.

        Args:
            book: The book
            status: Its current status (None when it has no status yet)
            sessions: Reading sessions; only those for ``book`` are used
            today: Reference date (default: the engine clock)

        Returns:
            ReadingProjection, with ``can_show`` false when there is
            nothing worth displaying
        """
        today = to_date(today) if today is not None else self.clock()

        if status is None or status.status != ReadingStatus.READING:
            return ReadingProjection()

        book_sessions = [s for s in sessions if s.book_id == book.id]

        if book.target_completion_date is not None:
            return self._project_to_target(book, status, book_sessions, today)
        return self._project_from_pace(book, status, book_sessions, today)

    def project_many(
        self,
        books: Iterable[Book],
        statuses: Mapping[str, BookStatusEntry],
        sessions: Iterable[ReadingSession],
        today: Optional[Union[date, datetime]] = None,
    ) -> dict[str, ReadingProjection]:
        """Project every book, keyed by book ID."""
        today = to_date(today) if today is not None else self.clock()
        sessions = list(sessions)
        return {
            book.id: self.project(book, statuses.get(book.id), sessions, today)
            for book in books
        }

    def _project_to_target(
        self,
        book: Book,
        status: BookStatusEntry,
        sessions: list[ReadingSession],
        today: date,
    ) -> ReadingProjection:
        """Projection anchored on the user's target date.

        The target always wins over the computed pace; the pace shown
        is the one needed to make the deadline.
        """
        target = book.target_completion_date
        days_remaining = days_between(today, target)
        pages_remaining = max(0, book.total_pages - status.pages_read)

        pages_per_day = pages_remaining / days_remaining if days_remaining > 0 else 0.0
        is_delayed = days_remaining < 0

        logger.debug(
            "Book %s: target %s, %d days remaining", book.id, target, days_remaining
        )

        return ReadingProjection(
            estimated_date=target,
            days_remaining=days_remaining,
            pages_per_day=round_pace(pages_per_day),
            reading_days_observed=count_reading_days(sessions),
            is_delayed=is_delayed,
            delay_days=abs(days_remaining) if is_delayed else 0,
            can_show=True,
            has_target_date=True,
            target_date=target,
        )

    def _project_from_pace(
        self,
        book: Book,
        status: BookStatusEntry,
        sessions: list[ReadingSession],
        today: date,
    ) -> ReadingProjection:
        """Projection from the reader's observed pace."""
        reading_days = count_reading_days(sessions)
        last_read = most_recent_reading_date(sessions, today)
        delay_days = self._delay_days(last_read, today)

        result = ReadingProjection(
            reading_days_observed=reading_days,
            is_delayed=delay_days > 0,
            delay_days=delay_days,
        )

        # A stale status on a finished book never shows, however short its history
        pages_remaining = book.total_pages - status.pages_read
        if pages_remaining <= 0:
            logger.debug("Book %s: no pages remaining", book.id)
            return ReadingProjection(reading_days_observed=reading_days)

        if reading_days < self.config.min_reading_days:
            logger.debug(
                "Book %s: %d reading days, not enough for a pace", book.id, reading_days
            )
            return replace(result, can_show=True)

        window = select_rate_window(
            sessions,
            today,
            window_days=self.config.window_days,
            min_sessions=self.config.min_recent_sessions,
        )
        days_in_window = len(aggregate_by_day(window))

        if days_in_window == 0 or status.pages_read <= 0:
            return replace(result, can_show=True, pages_per_day=0.0)

        pages_per_day = status.pages_read / days_in_window
        # ceil(pages_remaining / pages_per_day) in integers, so the day
        # count is exact
        days_to_finish = -(-pages_remaining * days_in_window // status.pages_read)
        total_days = days_to_finish + delay_days

        logger.debug(
            "Book %s: %.2f pages/day over %d days, %d days to finish, %d days delayed",
            book.id,
            pages_per_day,
            days_in_window,
            days_to_finish,
            delay_days,
        )

        return replace(
            result,
            estimated_date=add_days(today, total_days),
            days_remaining=total_days,
            pages_per_day=round_pace(pages_per_day),
            can_show=True,
        )

    @staticmethod
    def _delay_days(last_read: Optional[date], today: date) -> int:
        """Days behind, not counting the day after the last session."""
        if last_read is None:
            return 0
        gap = days_between(last_read, today)
        return gap - 1 if gap > 1 else 0


def project(
    book: Book,
    status: Optional[BookStatusEntry],
    sessions: Iterable[ReadingSession],
    today: Optional[Union[date, datetime]] = None,
) -> ReadingProjection:
    """Project a book's completion date with the default engine."""
    return ProjectionEngine().project(book, status, sessions, today)
