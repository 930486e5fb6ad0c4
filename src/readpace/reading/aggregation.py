"""Reading-day aggregation over a book's sessions.

Counts distinct reading days, finds the last day read, and selects the
window of sessions a pace is averaged over.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..records.schemas import ReadingSession
from .dates import SessionDateKey, add_days, resolve_date


@dataclass
class DailyRange:
    """Pages reached on one reading day."""

    min_page: int
    max_page: int
    sessions: int = 1

    @property
    def pages_covered(self) -> int:
        return self.max_page - self.min_page


def reading_day_keys(sessions: Iterable[ReadingSession]) -> set[SessionDateKey]:
    """Distinct day keys across sessions. Undated sessions are skipped."""
    return {s.date_key for s in sessions if s.date_key is not None}


def count_reading_days(sessions: Iterable[ReadingSession]) -> int:
    """Number of distinct calendar days with at least one session."""
    return len(reading_day_keys(sessions))


def most_recent_reading_date(
    sessions: Iterable[ReadingSession], today: date
) -> Optional[date]:
    """Latest resolvable session date, or None if no session can be dated."""
    dates = [resolve_date(s.date_key, today) for s in sessions]
    dates = [d for d in dates if d is not None]
    return max(dates, default=None)


def aggregate_by_day(
    sessions: Iterable[ReadingSession],
) -> dict[SessionDateKey, DailyRange]:
    """Collapse same-day sessions into one high-water mark per day.

    Several entries on one day (one per Bible chapter, for instance)
    become a single range from the lowest start page to the highest end
    page reached.
    """
    by_day: dict[SessionDateKey, DailyRange] = {}
    for session in sessions:
        key = session.date_key
        if key is None:
            continue

        day = by_day.get(key)
        if day is None:
            by_day[key] = DailyRange(session.page_start, session.page_end)
        else:
            day.min_page = min(day.min_page, session.page_start)
            day.max_page = max(day.max_page, session.page_end)
            day.sessions += 1
    return by_day


# ============================================================================
# Rate Window
# ============================================================================


def sessions_within(
    sessions: Iterable[ReadingSession], today: date, days: int
) -> list[ReadingSession]:
    """Sessions dated within the trailing ``days`` days, today included."""
    start = add_days(today, -days)
    recent = []
    for session in sessions:
        when = resolve_date(session.date_key, today)
        if when is not None and start <= when <= today:
            recent.append(session)
    return recent


def first_sufficient(
    candidates: Sequence[list[ReadingSession]], minimum: int
) -> list[ReadingSession]:
    """Return the first candidate holding at least ``minimum`` sessions.

    The last candidate is the fallback when none is large enough.
    """
    if not candidates:
        return []
    for candidate in candidates:
        if len(candidate) >= minimum:
            return candidate
    return candidates[-1]


def select_rate_window(
    sessions: Sequence[ReadingSession],
    today: date,
    window_days: int = 30,
    min_sessions: int = 3,
) -> list[ReadingSession]:
    """Sessions to average pace over.

    The trailing window is used when it holds enough sessions; a sparse
    recent window falls back to the whole history.
    """
    return first_sufficient(
        [sessions_within(sessions, today, window_days), list(sessions)],
        min_sessions,
    )
