from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AnomalyKind, HoursSource


@dataclass(frozen=True)
class WorkInterval:
    """One worked (or planned) interval, normalized from a record or a shift."""

    work_date: date
    start: datetime
    end: datetime
    break_minutes: float = 0
    is_holiday: bool = False


@dataclass(frozen=True)
class DayHours:
    work_date: date
    weekday: int
    total_hours: float
    regular_hours: float
    overtime_hours: float
    night_hours: float
    holiday_hours: float
    first_in: datetime
    last_out: datetime
    is_late: bool = False
    is_early_leave: bool = False


@dataclass(frozen=True)
class AttendanceAnomaly:
    employee_id: int
    work_date: date
    kind: AnomalyKind
    detail: Optional[str] = None


@dataclass(frozen=True)
class HourBucket:
    """Hours of one employee over one period.

    regular_hours + overtime_hours == total_hours. night_hours and holiday_hours
    are overlays on top of them, not additional time.
    """

    employee_id: int
    start: date
    end: date
    source: HoursSource
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    night_hours: float = 0.0
    holiday_hours: float = 0.0
    work_days: int = 0
    late_days: int = 0
    early_leave_days: int = 0
    days: tuple[DayHours, ...] = ()
    anomalies: tuple[AttendanceAnomaly, ...] = ()

    @property
    def total_hours(self) -> float:
        return self.regular_hours + self.overtime_hours

    @property
    def average_hours_per_day(self) -> float:
        return self.total_hours / self.work_days if self.work_days else 0.0
