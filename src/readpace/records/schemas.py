"""Pydantic schemas for the records the projection engine reads.

These mirror what the persistence backend stores for books, their
reading status and the logged reading sessions. The engine never
writes any of them.
"""

import re
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

if TYPE_CHECKING:
    from ..reading.dates import SessionDateKey


class ReadingStatus(str, Enum):
    """Read-status of a book."""

    NOT_STARTED = "not_started"
    READING = "reading"
    COMPLETED = "completed"


# Labels used by the original data set
_LEGACY_STATUS_LABELS = {
    "não iniciado": ReadingStatus.NOT_STARTED,
    "nao iniciado": ReadingStatus.NOT_STARTED,
    "lendo": ReadingStatus.READING,
    "concluido": ReadingStatus.COMPLETED,
    "concluído": ReadingStatus.COMPLETED,
}


def _to_date(v):
    """Truncate datetimes (or ISO datetime strings) to their calendar date."""
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, str) and "T" in v:
        return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
    return v


# ============================================================================
# Book Schemas
# ============================================================================


class Book(BaseModel):
    """A book as seen by the projection engine."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: Optional[str] = None
    author: Optional[str] = None
    total_pages: int = Field(..., gt=0, description="Page count")
    target_completion_date: Optional[date] = Field(
        None, description="User-set deadline"
    )

    @field_validator("target_completion_date", mode="before")
    @classmethod
    def truncate_target(cls, v):
        return _to_date(v)


class BookStatusEntry(BaseModel):
    """Current status of a book. Updated externally as sessions are logged."""

    book_id: str = Field(..., min_length=1)
    status: ReadingStatus = ReadingStatus.NOT_STARTED
    pages_read: int = Field(0, ge=0)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        """Accept legacy labels such as 'Lendo' and names such as 'NotStarted'."""
        if isinstance(v, str):
            # NotStarted -> not_started
            key = re.sub(r"(?<=[a-z])(?=[A-Z])", "_", v.strip()).lower()
            if key in _LEGACY_STATUS_LABELS:
                return _LEGACY_STATUS_LABELS[key]
            return key.replace(" ", "_").replace("-", "_")
        return v


# ============================================================================
# Reading Session Schemas
# ============================================================================


class ReadingSession(BaseModel):
    """One logged reading event for a book.

    A session is dated either by an explicit ``period_start`` or, for
    entries made through the daily log, by a ``day``/``month`` pair
    with no year.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    book_id: str = Field(..., min_length=1)
    page_start: int = Field(..., ge=1)
    page_end: int = Field(..., ge=1)
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    day: Optional[int] = Field(None, ge=1, le=31)
    month: Optional[str] = Field(None, description="Month name, e.g. 'Março'")
    minutes_spent: Optional[float] = Field(None, ge=0, description="Decimal minutes")

    @field_validator("period_start", "period_end", mode="before")
    @classmethod
    def truncate_period(cls, v):
        return _to_date(v)

    @field_validator("month", mode="before")
    @classmethod
    def clean_month(cls, v) -> Optional[str]:
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @model_validator(mode="after")
    def check_page_range(self) -> "ReadingSession":
        if self.page_end < self.page_start:
            raise ValueError(
                f"page_end ({self.page_end}) must be >= page_start ({self.page_start})"
            )
        return self

    @property
    def pages_read(self) -> int:
        """Pages covered by the session."""
        return self.page_end - self.page_start

    @property
    def date_key(self) -> Optional["SessionDateKey"]:
        """Key identifying the calendar day this session belongs to.

        Returns:
            ExplicitDate, DayMonth, or None when the session carries no date
        """
        # Imported here: reading imports records at module level
        from ..reading.dates import DayMonth, ExplicitDate

        if self.period_start is not None:
            return ExplicitDate(self.period_start)
        if self.day is not None and self.month:
            return DayMonth(self.day, self.month)
        return None
