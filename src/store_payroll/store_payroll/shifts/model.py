from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..common.validators import require_non_negative
from ..core.constants import DEFAULT_SHIFT_BREAK_MINUTES
from ..core.enums import ShiftStatus, ShiftType


@dataclass(frozen=True)
class Shift:
    """Domain entity: a planned work interval for one employee on one date."""

    shift_id: Optional[int]
    employee_id: int
    work_date: date
    start_time: time
    end_time: time
    break_minutes: int = DEFAULT_SHIFT_BREAK_MINUTES
    type: ShiftType = ShiftType.REGULAR
    status: ShiftStatus = ShiftStatus.SCHEDULED
    notes: Optional[str] = None

    def __post_init__(self):
        require_non_negative(self.break_minutes, "break_minutes")

    @property
    def is_overnight(self) -> bool:
        # Equal times are a zero-length shift, not a 24 hour one.
        return self.end_time < self.start_time

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.work_date, self.start_time)

    @property
    def ends_at(self) -> datetime:
        end = datetime.combine(self.work_date, self.end_time)
        if self.is_overnight:
            end += timedelta(days=1)
        return end
