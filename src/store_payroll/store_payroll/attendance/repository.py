from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import TimeRecord


class TimeRecordRepository(Protocol):
    def get_time_records(
        self,
        employee_id: Optional[int] = None,
        *,
        start_date: date,
        end_date: date,
    ) -> Sequence[TimeRecord]:
        """Records with work_date in [start_date, end_date], newest date first."""

        raise NotImplementedError

    def get_time_record(self, record_id: int) -> Optional[TimeRecord]:
        raise NotImplementedError

    def get_open_record(self, employee_id: int) -> Optional[TimeRecord]:
        """Latest record that has a clock-in but no clock-out."""

        raise NotImplementedError

    def create_time_record(self, record: TimeRecord) -> int:
        raise NotImplementedError

    def update_time_record(self, record: TimeRecord) -> bool:
        raise NotImplementedError
