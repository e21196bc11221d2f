from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TimeRecordStatus


@dataclass(frozen=True)
class TimeRecord:
    """Domain entity: one attendance record (actual clock events) for a day."""

    record_id: Optional[int]
    employee_id: int
    work_date: date
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    break_start: Optional[datetime] = None
    break_end: Optional[datetime] = None
    break_minutes: float = 0
    working_hours: float = 0
    overtime_hours: float = 0
    status: TimeRecordStatus = TimeRecordStatus.WORKING
    notes: Optional[str] = None
    approved_by: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.clock_in is not None and self.clock_out is None

    @property
    def has_pair(self) -> bool:
        return self.clock_in is not None and self.clock_out is not None
