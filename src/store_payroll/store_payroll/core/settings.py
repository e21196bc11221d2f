from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import ModuleType
from typing import Iterable

from ..common.datetime_utils import parse_iso_date
from .constants import (
    DEFAULT_EXPECTED_END_HOUR,
    DEFAULT_EXPECTED_START_HOUR,
    DEFAULT_OVERTIME_THRESHOLD_HOURS,
    DEFAULT_TIMEZONE,
)
from .exceptions import ValidationError


@dataclass(frozen=True)
class PayrollSettings:
    """Store-level calculation settings read from the active settings module."""

    timezone: str = DEFAULT_TIMEZONE
    overtime_threshold_hours: float = DEFAULT_OVERTIME_THRESHOLD_HOURS
    expected_start_hour: int = DEFAULT_EXPECTED_START_HOUR
    expected_end_hour: int = DEFAULT_EXPECTED_END_HOUR
    holidays: frozenset[date] = field(default_factory=frozenset)

    def __post_init__(self):
        if self.overtime_threshold_hours < 0:
            raise ValidationError("Overtime threshold must not be negative")
        for hour in (self.expected_start_hour, self.expected_end_hour):
            if not 0 <= int(hour) <= 23:
                raise ValidationError(f"Invalid hour of day: {hour}")

    def is_holiday(self, work_date: date) -> bool:
        return work_date in self.holidays

    @classmethod
    def from_module(cls, settings: ModuleType) -> "PayrollSettings":
        return cls(
            timezone=str(getattr(settings, "STORE_TIMEZONE", DEFAULT_TIMEZONE)),
            overtime_threshold_hours=float(
                getattr(settings, "OVERTIME_THRESHOLD_HOURS", DEFAULT_OVERTIME_THRESHOLD_HOURS)
            ),
            expected_start_hour=int(getattr(settings, "EXPECTED_START_HOUR", DEFAULT_EXPECTED_START_HOUR)),
            expected_end_hour=int(getattr(settings, "EXPECTED_END_HOUR", DEFAULT_EXPECTED_END_HOUR)),
            holidays=parse_holidays(getattr(settings, "STORE_HOLIDAYS", ())),
        )


def parse_holidays(value: str | Iterable[str] | None) -> frozenset[date]:
    """Accept "2026-01-01,2026-01-02" or an iterable of ISO dates."""
    if not value:
        return frozenset()
    items = value.split(",") if isinstance(value, str) else value
    return frozenset(parse_iso_date(item.strip()) for item in items if item and item.strip())
