from __future__ import annotations

from datetime import date
from typing import Optional

from ...attendance.model import TimeRecord
from ...core.enums import HoursSource
from ...core.exceptions import MissingPair
from ..model import WorkInterval
from .base import IntervalStrategy


class ActualIntervalStrategy(IntervalStrategy):
    """Clock records: the in/out punches of a record form the pair."""

    source = HoursSource.ACTUAL
    record_type = TimeRecord

    def work_date(self, item: TimeRecord) -> date:
        return item.work_date

    def employee_id(self, item: TimeRecord) -> int:
        return item.employee_id

    def to_interval(self, item: TimeRecord) -> Optional[WorkInterval]:
        if not item.has_pair:
            missing = "clock-out" if item.clock_in is not None else "clock-in"
            raise MissingPair(f"Record {item.record_id} on {item.work_date:%Y-%m-%d} has no {missing}")
        return WorkInterval(
            work_date=item.work_date,
            start=item.clock_in,
            end=item.clock_out,
            break_minutes=item.break_minutes,
        )
