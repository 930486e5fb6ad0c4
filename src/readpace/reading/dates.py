"""Calendar-day helpers for reading sessions.

Sessions are dated in one of two ways: an explicit period start date,
or a day/month pair from the daily log, which records no year. Both are
represented as a ``SessionDateKey`` and turned into a comparable date by
``resolve_date``, which holds the only year-inference rule.
"""

import calendar
import unicodedata
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional, Union

# pt-BR month names, as used by the daily log form
MONTH_NAMES_PT = [
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
]
MONTH_ABBREVIATIONS_PT = [
    "jan", "fev", "mar", "abr", "mai", "jun",
    "jul", "ago", "set", "out", "nov", "dez",
]


def _fold(text: str) -> str:
    """Lowercase and strip accents ('Março' -> 'marco')."""
    normalized = unicodedata.normalize("NFKD", text.strip().lower())
    return "".join(c for c in normalized if not unicodedata.combining(c))


_MONTH_LOOKUP: dict[str, int] = {}
for _i, _name in enumerate(MONTH_NAMES_PT, 1):
    _MONTH_LOOKUP[_fold(_name)] = _i
    _MONTH_LOOKUP[MONTH_ABBREVIATIONS_PT[_i - 1]] = _i
for _i in range(1, 13):
    _MONTH_LOOKUP.setdefault(_fold(calendar.month_name[_i]), _i)
    _MONTH_LOOKUP.setdefault(_fold(calendar.month_abbr[_i]), _i)


def parse_month(name: Optional[Union[str, int]]) -> Optional[int]:
    """Parse a month name into its number.

    Accepts pt-BR names and abbreviations (with or without accents),
    English names, and numeric strings.

    Args:
        name: Month name or number

    Returns:
        Month number 1-12, or None if unrecognised

    Example:
        >>> parse_month("Março")
        3
        >>> parse_month("set.")
        9
    """
    if name is None:
        return None
    if isinstance(name, int):
        return name if 1 <= name <= 12 else None

    key = _fold(str(name)).rstrip(".")
    if key.isdigit():
        number = int(key)
        return number if 1 <= number <= 12 else None
    return _MONTH_LOOKUP.get(key)


@dataclass(frozen=True)
class ExplicitDate:
    """Session dated by its period start."""

    value: date


@dataclass(frozen=True)
class DayMonth:
    """Session dated by the daily log's day and month name, with no year."""

    day: int
    month: str = field(compare=False)
    # Equality and hashing go through the parsed month, so "Março" and
    # "marco" land on the same reading day.
    month_id: str = field(init=False, repr=False)

    def __post_init__(self):
        number = parse_month(self.month)
        object.__setattr__(
            self, "month_id", str(number) if number else _fold(self.month)
        )

    @property
    def month_number(self) -> Optional[int]:
        return parse_month(self.month)


SessionDateKey = Union[ExplicitDate, DayMonth]


def resolve_date(key: Optional[SessionDateKey], today: date) -> Optional[date]:
    """Resolve a session date key to a calendar date.

    Day/month pairs are placed in today's year, or in the previous year
    when that would put them after today.

    Args:
        key: Session date key
        today: Reference date

    Returns:
        The resolved date, or None if the key cannot be dated
    """
    if key is None:
        return None
    if isinstance(key, ExplicitDate):
        return key.value

    month = key.month_number
    if month is None:
        return None

    for year in (today.year, today.year - 1):
        try:
            candidate = date(year, month, key.day)
        except ValueError:
            # e.g. 29 February outside a leap year
            continue
        if candidate <= today:
            return candidate
    return None


def to_date(value: Union[date, datetime]) -> date:
    """Drop the time of day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start: Union[date, datetime], end: Union[date, datetime]) -> int:
    """Whole calendar days from start to end (negative if end is earlier)."""
    return (to_date(end) - to_date(start)).days


def add_days(start: Union[date, datetime], days: int) -> date:
    """Calendar date ``days`` after start."""
    return to_date(start) + timedelta(days=days)
