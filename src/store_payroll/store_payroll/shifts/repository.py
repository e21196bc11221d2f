from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ShiftStatus
from .model import Shift


class ShiftRepository(Protocol):
    def get_shifts(
        self,
        employee_id: Optional[int] = None,
        *,
        start_date: date,
        end_date: date,
    ) -> Sequence[Shift]:
        """Shifts with work_date in [start_date, end_date], oldest date first."""

        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def create_shift(self, shift: Shift) -> int:
        raise NotImplementedError

    def update_status(self, shift_id: int, status: ShiftStatus) -> bool:
        raise NotImplementedError

    def delete_range(self, *, start_date: date, end_date: date, employee_id: Optional[int] = None) -> int:
        """Remove shifts in the range; returns how many were deleted."""

        raise NotImplementedError
