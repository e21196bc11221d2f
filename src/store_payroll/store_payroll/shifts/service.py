from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import Optional

from ..core.enums import ShiftStatus
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from .generator import ShiftAutoGenerator
from .model import Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


class ShiftService:
    def __init__(
        self,
        shifts: ShiftRepository,
        employees: EmployeeRepository,
        *,
        generator: ShiftAutoGenerator | None = None,
    ):
        self._shifts = shifts
        self._employees = employees
        self._generator = generator or ShiftAutoGenerator()

    def auto_generate(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
        replace_existing: bool = True,
    ) -> int:
        """Generate shifts from fixed work-day patterns over [start, end].

        With replace_existing the target range is cleared first, so existing
        shifts for regenerated dates are superseded.
        """
        if end < start:
            raise ValidationError("Period end must not be before its start")

        employees = self._employees.list_active()
        if employee_id is not None:
            employees = [e for e in employees if e.employee_id == int(employee_id)]

        if replace_existing:
            removed = self._shifts.delete_range(start_date=start, end_date=end, employee_id=employee_id)
            logger.info("Cleared %s shifts between %s and %s", removed, start, end)

        count = self._generator.generate(self._shifts, employees, start=start, end=end)
        logger.info("Generated %s shifts between %s and %s", count, start, end)
        return count

    def add_shift(self, shift: Shift) -> int:
        """Create a single hand-planned shift."""
        if not self._employees.get_by_id(shift.employee_id):
            raise ValidationError(f"Employee {shift.employee_id} does not exist")
        shift_id = self._shifts.create_shift(shift)
        logger.info("Planned shift %s for employee %s on %s", shift_id, shift.employee_id, shift.work_date)
        return shift_id

    def copy_to_next_week(self, shift_id: int) -> int:
        shift = self._get(shift_id)
        copy = replace(
            shift,
            shift_id=None,
            work_date=shift.work_date + timedelta(days=7),
            status=ShiftStatus.SCHEDULED,
        )
        return self._shifts.create_shift(copy)

    def cancel(self, shift_id: int) -> None:
        shift = self._get(shift_id)
        if shift.status == ShiftStatus.CANCELLED:
            raise ValidationError("Shift is already cancelled")
        self._shifts.update_status(shift_id, ShiftStatus.CANCELLED)

    def _get(self, shift_id: int) -> Shift:
        shift = self._shifts.get_by_id(int(shift_id))
        if not shift:
            raise ValidationError(f"Shift {shift_id} does not exist")
        return shift
