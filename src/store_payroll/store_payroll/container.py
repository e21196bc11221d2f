from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_time_record_repository import MySQLTimeRecordRepository
from .attendance.repository import TimeRecordRepository
from .attendance.service import AttendanceService
from .attendance.status_machine import WorkStatusMachine
from .core.settings import PayrollSettings
from .database.connection import DatabaseConnection, DBConfig
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .hours.calculator import HoursCalculator
from .hours.factory import IntervalStrategyFactory
from .payroll.service import DashboardService, PayrollReportService
from .shifts.generator import ShiftAutoGenerator
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService
from .wages.engine import WageRuleEngine
from .wages.mysql_wage_rule_repository import MySQLWageRuleRepository
from .wages.repository import WageRuleRepository
from .wages.service import WageRuleService


@dataclass(frozen=True)
class Container:
    settings: PayrollSettings

    employees_repo: EmployeeRepository
    time_records_repo: TimeRecordRepository
    shifts_repo: ShiftRepository
    wage_rules_repo: WageRuleRepository

    attendance_service: AttendanceService
    shift_service: ShiftService
    wage_rule_service: WageRuleService
    payroll_report_service: PayrollReportService
    dashboard_service: DashboardService


def wire_container(
    *,
    settings: PayrollSettings,
    employees_repo: EmployeeRepository,
    time_records_repo: TimeRecordRepository,
    shifts_repo: ShiftRepository,
    wage_rules_repo: WageRuleRepository,
) -> Container:
    """Build services around the given repositories (MySQL in production, fakes in tests)."""
    calculator = HoursCalculator(settings, strategy_factory=IntervalStrategyFactory())
    wage_rule_service = WageRuleService(wage_rules_repo)

    attendance_service = AttendanceService(
        time_records_repo,
        employees_repo,
        machine=WorkStatusMachine(overtime_threshold_hours=settings.overtime_threshold_hours),
        timezone=settings.timezone,
    )
    shift_service = ShiftService(shifts_repo, employees_repo, generator=ShiftAutoGenerator())
    payroll_report_service = PayrollReportService(
        time_records_repo,
        shifts_repo,
        employees_repo,
        wage_rule_service,
        calculator=calculator,
        engine=WageRuleEngine(),
    )
    dashboard_service = DashboardService(time_records_repo, employees_repo, calculator=calculator)

    return Container(
        settings=settings,
        employees_repo=employees_repo,
        time_records_repo=time_records_repo,
        shifts_repo=shifts_repo,
        wage_rules_repo=wage_rules_repo,
        attendance_service=attendance_service,
        shift_service=shift_service,
        wage_rule_service=wage_rule_service,
        payroll_report_service=payroll_report_service,
        dashboard_service=dashboard_service,
    )


def build_container(*, db_config: dict, settings: Optional[PayrollSettings] = None) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return wire_container(
        settings=settings or PayrollSettings(),
        employees_repo=MySQLEmployeeRepository(conn),
        time_records_repo=MySQLTimeRecordRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        wage_rules_repo=MySQLWageRuleRepository(conn),
    )
