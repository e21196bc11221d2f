from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}") from None


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO 8601 local timestamp (offset, if any, is dropped)."""
    try:
        return datetime.fromisoformat(value).replace(tzinfo=None)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid timestamp: {value!r}") from None


def parse_hhmm(value: str) -> time:
    """Parse HH:MM (or HH:MM:SS) into time."""
    fmt = "%H:%M:%S" if value and value.count(":") == 2 else "%H:%M"
    try:
        return datetime.strptime(value, fmt).time()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid time: {value!r}") from None


def now_local(tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Current wall-clock time in the store timezone, as a naive datetime.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(ZoneInfo(tz_name)).replace(tzinfo=None)


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Every calendar date from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def sunday_based_weekday(value: date) -> int:
    """Weekday number with 0 = Sunday ... 6 = Saturday."""
    return value.isoweekday() % 7


def week_range(value: date) -> tuple[date, date]:
    """Sunday..Saturday week containing value."""
    start = value - timedelta(days=sunday_based_weekday(value))
    return start, start + timedelta(days=6)


def month_range(value: date) -> tuple[date, date]:
    start = value.replace(day=1)
    next_month = (start + timedelta(days=32)).replace(day=1)
    return start, next_month - timedelta(days=1)
