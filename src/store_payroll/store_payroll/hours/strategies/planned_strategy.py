from __future__ import annotations

from datetime import date
from typing import Optional

from ...core.enums import HoursSource, ShiftStatus, ShiftType
from ...shifts.model import Shift
from ..model import WorkInterval
from .base import IntervalStrategy


class PlannedIntervalStrategy(IntervalStrategy):
    """Shifts: start/end of the shift, rolled to the next day for overnight shifts."""

    source = HoursSource.ESTIMATED
    record_type = Shift

    def work_date(self, item: Shift) -> date:
        return item.work_date

    def employee_id(self, item: Shift) -> int:
        return item.employee_id

    def to_interval(self, item: Shift) -> Optional[WorkInterval]:
        if item.status == ShiftStatus.CANCELLED:
            return None
        return WorkInterval(
            work_date=item.work_date,
            start=item.starts_at,
            end=item.ends_at,
            break_minutes=item.break_minutes,
            is_holiday=item.type == ShiftType.HOLIDAY,
        )
