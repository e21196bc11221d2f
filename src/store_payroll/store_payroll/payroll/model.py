from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import HoursSource
from ..hours.model import AttendanceAnomaly


@dataclass(frozen=True)
class PayrollRecord:
    """Pay breakdown for one employee, one period and one hours source.

    Computed on demand; a new computation replaces it wholesale.
    """

    employee_id: int
    employee_code: str
    employee_name: str
    source: HoursSource
    start: date
    end: date
    regular_hours: float
    overtime_hours: float
    night_hours: float
    holiday_hours: float
    regular_pay: float
    overtime_pay: float
    night_pay: float
    holiday_pay: float
    total_pay: float

    @property
    def total_hours(self) -> float:
        return self.regular_hours + self.overtime_hours


@dataclass(frozen=True)
class MonthlySummary:
    start: date
    end: date
    total_working_hours: float
    total_overtime_hours: float
    employee_count: int
    average_hours_per_employee: float
    total_payroll_cost: float
    estimated_payroll_cost: float

    @property
    def payroll_difference(self) -> float:
        """Actual minus estimated cost."""
        return self.total_payroll_cost - self.estimated_payroll_cost


@dataclass(frozen=True)
class AttendanceReportRow:
    """Per-employee attendance quality merged with the actual pay figures."""

    employee_id: int
    employee_code: str
    employee_name: str
    work_days: int
    total_hours: float
    regular_hours: float
    overtime_hours: float
    average_hours: float
    late_days: int
    early_leave_days: int
    total_pay: float


@dataclass(frozen=True)
class PayrollReport:
    start: date
    end: date
    actual: tuple[PayrollRecord, ...]
    estimated: tuple[PayrollRecord, ...]
    summary: MonthlySummary
    attendance: tuple[AttendanceReportRow, ...]
    anomalies: tuple[AttendanceAnomaly, ...]


@dataclass(frozen=True)
class DashboardStats:
    total_employees: int
    currently_working: int
    on_break: int
    total_hours_today: float
    pending_approvals: int


@dataclass(frozen=True)
class DailyStats:
    work_date: date
    hours: float
    overtime: float
