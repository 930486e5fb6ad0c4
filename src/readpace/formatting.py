"""Display formatting for projected dates and durations (pt-BR)."""

from datetime import date

from .reading.dates import MONTH_ABBREVIATIONS_PT, MONTH_NAMES_PT


def format_projected_date(value: date) -> str:
    """Long form of a projected date.

    Example:
        >>> format_projected_date(date(2025, 3, 14))
        '14 de março de 2025'
    """
    return f"{value.day} de {MONTH_NAMES_PT[value.month - 1]} de {value.year}"


def format_projected_date_compact(value: date) -> str:
    """Compact form of a projected date, abbreviated month without a period.

    Example:
        >>> format_projected_date_compact(date(2025, 3, 14))
        '14 mar 2025'
    """
    return f"{value.day} {MONTH_ABBREVIATIONS_PT[value.month - 1]} {value.year}"


def format_duration(minutes: float) -> str:
    """Format decimal minutes as hours and minutes.

    Example:
        >>> format_duration(90)
        '1h 30min'
        >>> format_duration(10.5)
        '11min'
    """
    hours = int(minutes // 60)
    mins = int(minutes % 60 + 0.5)
    if mins == 60:
        hours, mins = hours + 1, 0
    if hours > 0:
        return f"{hours}h {mins}min"
    return f"{mins}min"
