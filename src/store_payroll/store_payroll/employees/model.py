from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Optional

from ..common.validators import require_non_negative, require_weekdays
from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: a store employee.

    Note: Weekday sets use 0 = Sunday ... 6 = Saturday.
    """

    employee_id: int
    code: str
    name: str
    role: str
    department: str
    hourly_wage: float
    hire_date: date
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    email: Optional[str] = None
    fixed_work_days: frozenset[int] = field(default_factory=frozenset)
    fixed_days_off: frozenset[int] = field(default_factory=frozenset)
    work_start_time: Optional[time] = None
    work_end_time: Optional[time] = None

    def __post_init__(self):
        require_non_negative(self.hourly_wage, "hourly_wage")
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "status", EmployeeStatus(self.status))
        object.__setattr__(self, "fixed_work_days", require_weekdays(self.fixed_work_days, "fixed_work_days"))
        object.__setattr__(self, "fixed_days_off", require_weekdays(self.fixed_days_off, "fixed_days_off"))

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE
