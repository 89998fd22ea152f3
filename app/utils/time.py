"""Time Utilities for UTC management and day-granularity date math"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Union

DateLike = Union[date, datetime]


def get_utc_now() -> datetime:
    """
    Returns a naive UTC datetime.
    Matches the DB schema (TIMESTAMP WITHOUT TIME ZONE).
    Avoids 'datetime.utcnow()' deprecation warnings.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value.date()
    return value


def start_of_day(value: DateLike) -> datetime:
    """Midnight (00:00:00) of the calendar day of ``value``."""
    return datetime.combine(_as_date(value), time.min)


def end_of_day(value: DateLike) -> datetime:
    """23:59:59 of the calendar day of ``value``. Due dates always sit here."""
    return datetime.combine(_as_date(value), time(23, 59, 59))


def add_days(value: DateLike, days: Union[int, float]) -> date:
    """Calendar date shifted by ``days`` (fractions truncated)."""
    return _as_date(value) + timedelta(days=int(days))


def days_between(start: DateLike, end: DateLike) -> int:
    """
    Whole calendar days from ``start`` to ``end``.

    Time of day is stripped before subtracting, so 23:59 on one day and
    00:01 on the next are one day apart. Negative when ``end`` is earlier.
    """
    return (_as_date(end) - _as_date(start)).days
