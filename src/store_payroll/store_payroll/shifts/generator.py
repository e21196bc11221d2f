from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol

from ..common.datetime_utils import iter_dates, sunday_based_weekday
from ..core.constants import DEFAULT_SHIFT_BREAK_MINUTES, DEFAULT_SHIFT_END, DEFAULT_SHIFT_START
from ..core.enums import ShiftStatus, ShiftType
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from .model import Shift


class ShiftSink(Protocol):
    def create_shift(self, shift: Shift) -> int:
        raise NotImplementedError


class ShiftAutoGenerator:
    """Expands each employee's fixed weekly pattern into scheduled shifts.

    Purely additive: the generator never looks for existing shifts. Callers that
    want overwrite semantics clear the target range first.
    """

    def expand(self, employees: Iterable[Employee], *, start: date, end: date) -> list[Shift]:
        if end < start:
            raise ValidationError("Period end must not be before its start")

        active = [e for e in employees if e.is_active]
        out: list[Shift] = []
        for day in iter_dates(start, end):
            weekday = sunday_based_weekday(day)
            for employee in active:
                if weekday in employee.fixed_days_off:
                    continue
                if weekday not in employee.fixed_work_days:
                    continue
                out.append(
                    Shift(
                        shift_id=None,
                        employee_id=employee.employee_id,
                        work_date=day,
                        start_time=employee.work_start_time or DEFAULT_SHIFT_START,
                        end_time=employee.work_end_time or DEFAULT_SHIFT_END,
                        break_minutes=DEFAULT_SHIFT_BREAK_MINUTES,
                        type=ShiftType.REGULAR,
                        status=ShiftStatus.SCHEDULED,
                    )
                )
        return out

    def generate(self, sink: ShiftSink, employees: Iterable[Employee], *, start: date, end: date) -> int:
        """Create the expanded shifts through sink; returns how many were created."""
        count = 0
        for shift in self.expand(employees, start=start, end=end):
            sink.create_shift(shift)
            count += 1
        return count
