from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Any, Iterable, Optional, Sequence

from ..attendance.repository import TimeRecordRepository
from ..common.datetime_utils import iter_dates, month_range
from ..core.constants import DEFAULT_WEEKLY_STATS_DAYS
from ..core.enums import HoursSource, TimeRecordStatus
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..hours.calculator import HoursCalculator
from ..hours.model import HourBucket
from ..shifts.repository import ShiftRepository
from ..wages.engine import WageRuleEngine
from ..wages.model import WageRule
from ..wages.service import WageRuleService
from .model import (
    AttendanceReportRow,
    DailyStats,
    DashboardStats,
    MonthlySummary,
    PayrollRecord,
    PayrollReport,
)

logger = logging.getLogger(__name__)


def _group_by_employee(items: Iterable[Any]) -> dict[int, list[Any]]:
    grouped: dict[int, list[Any]] = defaultdict(list)
    for item in items:
        grouped[item.employee_id].append(item)
    return grouped


class PayrollReportService:
    """Actual vs estimated payroll, monthly summary and attendance report for a period.

    Everything is recomputed from the raw records on each call; nothing derived
    is stored, so running it twice on the same records gives the same report.
    """

    def __init__(
        self,
        time_records: TimeRecordRepository,
        shifts: ShiftRepository,
        employees: EmployeeRepository,
        wage_rules: WageRuleService,
        *,
        calculator: Optional[HoursCalculator] = None,
        engine: Optional[WageRuleEngine] = None,
    ):
        self._time_records = time_records
        self._shifts = shifts
        self._employees = employees
        self._wage_rules = wage_rules
        self._calculator = calculator or HoursCalculator()
        self._engine = engine or WageRuleEngine()

    def build_report(self, *, start: date, end: date, employee_id: Optional[int] = None) -> PayrollReport:
        if end < start:
            raise ValidationError("Period end must not be before its start")

        rule = self._wage_rules.get_active_wage_rule()
        employees = self._target_employees(employee_id)

        records = _group_by_employee(
            self._time_records.get_time_records(employee_id, start_date=start, end_date=end)
        )
        shifts = _group_by_employee(self._shifts.get_shifts(employee_id, start_date=start, end_date=end))

        actual: list[PayrollRecord] = []
        estimated: list[PayrollRecord] = []
        attendance: list[AttendanceReportRow] = []
        anomalies = []
        for employee in employees:
            actual_bucket = self._bucket(employee, records.get(employee.employee_id, []), HoursSource.ACTUAL, start, end, rule)
            estimated_bucket = self._bucket(
                employee, shifts.get(employee.employee_id, []), HoursSource.ESTIMATED, start, end, rule
            )
            actual_pay = self._engine.apply(actual_bucket, employee, rule)

            actual.append(actual_pay)
            estimated.append(self._engine.apply(estimated_bucket, employee, rule))
            attendance.append(self._attendance_row(employee, actual_bucket, actual_pay))
            anomalies.extend(actual_bucket.anomalies)

        summary = self._summary(start, end, actual, estimated, employee_count=len(employees))
        logger.info(
            "Payroll %s..%s: %s employees, actual=%.2f estimated=%.2f, %s anomalies",
            start,
            end,
            summary.employee_count,
            summary.total_payroll_cost,
            summary.estimated_payroll_cost,
            len(anomalies),
        )
        return PayrollReport(
            start=start,
            end=end,
            actual=tuple(actual),
            estimated=tuple(estimated),
            summary=summary,
            attendance=tuple(attendance),
            anomalies=tuple(anomalies),
        )

    def build_monthly_report(self, *, month: date, employee_id: Optional[int] = None) -> PayrollReport:
        start, end = month_range(month)
        return self.build_report(start=start, end=end, employee_id=employee_id)

    def _target_employees(self, employee_id: Optional[int]) -> Sequence[Employee]:
        if employee_id is None:
            return self._employees.list_active()
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise ValidationError(f"Employee {employee_id} does not exist")
        return [employee]

    def _bucket(
        self,
        employee: Employee,
        items: Sequence[Any],
        source: HoursSource,
        start: date,
        end: date,
        rule: WageRule,
    ) -> HourBucket:
        return self._calculator.compute(
            employee_id=employee.employee_id,
            start=start,
            end=end,
            items=items,
            source=source,
            rule=rule,
        )

    @staticmethod
    def _attendance_row(employee: Employee, bucket: HourBucket, pay: PayrollRecord) -> AttendanceReportRow:
        return AttendanceReportRow(
            employee_id=employee.employee_id,
            employee_code=employee.code,
            employee_name=employee.name,
            work_days=bucket.work_days,
            total_hours=bucket.total_hours,
            regular_hours=bucket.regular_hours,
            overtime_hours=bucket.overtime_hours,
            average_hours=bucket.average_hours_per_day,
            late_days=bucket.late_days,
            early_leave_days=bucket.early_leave_days,
            total_pay=pay.total_pay,
        )

    @staticmethod
    def _summary(
        start: date,
        end: date,
        actual: Sequence[PayrollRecord],
        estimated: Sequence[PayrollRecord],
        *,
        employee_count: int,
    ) -> MonthlySummary:
        total_hours = sum(p.total_hours for p in actual)
        return MonthlySummary(
            start=start,
            end=end,
            total_working_hours=total_hours,
            total_overtime_hours=sum(p.overtime_hours for p in actual),
            employee_count=employee_count,
            average_hours_per_employee=total_hours / employee_count if employee_count else 0.0,
            total_payroll_cost=sum(p.total_pay for p in actual),
            estimated_payroll_cost=sum(p.total_pay for p in estimated),
        )


class DashboardService:
    """Store-wide figures for the time clock dashboard."""

    def __init__(
        self,
        time_records: TimeRecordRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[HoursCalculator] = None,
    ):
        self._time_records = time_records
        self._employees = employees
        self._calculator = calculator or HoursCalculator()

    def build_stats(self, today: date) -> DashboardStats:
        todays = self._time_records.get_time_records(start_date=today, end_date=today)
        month_start, month_end = month_range(today)
        month_records = self._time_records.get_time_records(start_date=month_start, end_date=month_end)

        return DashboardStats(
            total_employees=len(self._employees.list_active()),
            currently_working=sum(1 for r in todays if r.is_open and r.status == TimeRecordStatus.WORKING),
            on_break=sum(1 for r in todays if r.is_open and r.status == TimeRecordStatus.BREAK),
            total_hours_today=sum(r.working_hours for r in todays if r.has_pair),
            pending_approvals=sum(1 for r in month_records if r.status == TimeRecordStatus.PENDING_APPROVAL),
        )

    def weekly_stats(self, end_date: date, *, days: int = DEFAULT_WEEKLY_STATS_DAYS) -> list[DailyStats]:
        start = end_date - timedelta(days=days - 1)
        records = _group_by_employee(self._time_records.get_time_records(start_date=start, end_date=end_date))

        hours: dict[date, float] = defaultdict(float)
        overtime: dict[date, float] = defaultdict(float)
        for employee_id, items in records.items():
            bucket = self._calculator.compute(
                employee_id=employee_id,
                start=start,
                end=end_date,
                items=items,
                source=HoursSource.ACTUAL,
            )
            for day in bucket.days:
                hours[day.work_date] += day.total_hours
                overtime[day.work_date] += day.overtime_hours

        return [DailyStats(work_date=d, hours=hours[d], overtime=overtime[d]) for d in iter_dates(start, end_date)]
