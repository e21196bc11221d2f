from datetime import date, time

import pytest

from src.store_payroll.store_payroll.common.datetime_utils import sunday_based_weekday
from src.store_payroll.store_payroll.core.enums import EmployeeStatus, ShiftStatus, ShiftType
from src.store_payroll.store_payroll.core.exceptions import ValidationError
from src.store_payroll.store_payroll.shifts.generator import ShiftAutoGenerator
from src.store_payroll.store_payroll.shifts.model import Shift
from src.store_payroll.store_payroll.shifts.service import ShiftService
from tests.fakes import InMemoryEmployees, InMemoryShifts, make_employee

# Sunday .. Saturday
WEEK_START = date(2026, 3, 1)
WEEK_END = date(2026, 3, 7)


def test_one_week_of_weekday_pattern_gives_five_shifts():
    employee = make_employee(1, fixed_work_days={1, 2, 3, 4, 5}, fixed_days_off=set())

    shifts = ShiftAutoGenerator().expand([employee], start=WEEK_START, end=WEEK_END)

    assert len(shifts) == 5
    assert not any(sunday_based_weekday(s.work_date) in (0, 6) for s in shifts)
    assert all(s.status == ShiftStatus.SCHEDULED and s.type == ShiftType.REGULAR for s in shifts)
    assert all(s.break_minutes == 60 for s in shifts)


def test_days_off_override_work_days():
    employee = make_employee(1, fixed_work_days={1, 2, 3, 4, 5}, fixed_days_off={3})

    shifts = ShiftAutoGenerator().expand([employee], start=WEEK_START, end=WEEK_END)

    assert [s.work_date.day for s in shifts] == [2, 3, 5, 6]


def test_default_times_and_inactive_employees():
    employees = [
        make_employee(1, work_start_time=None, work_end_time=None),
        make_employee(2, status=EmployeeStatus.INACTIVE),
        make_employee(3, work_start_time=time(17), work_end_time=time(23)),
    ]

    shifts = ShiftAutoGenerator().expand(employees, start=date(2026, 3, 2), end=date(2026, 3, 2))

    assert {(s.employee_id, s.start_time, s.end_time) for s in shifts} == {
        (1, time(9), time(18)),
        (3, time(17), time(23)),
    }


def test_overnight_shift_ends_next_day():
    s = Shift(shift_id=None, employee_id=1, work_date=date(2026, 3, 2), start_time=time(22), end_time=time(6))

    assert s.is_overnight
    assert s.ends_at.date() == date(2026, 3, 3)


def build_service():
    shifts = InMemoryShifts()
    employees = InMemoryEmployees([make_employee(1), make_employee(2, fixed_work_days={6}, fixed_days_off={0})])
    return ShiftService(shifts, employees), shifts


def test_regenerating_replaces_existing_shifts():
    service, shifts = build_service()

    assert service.auto_generate(start=WEEK_START, end=WEEK_END) == 6
    assert service.auto_generate(start=WEEK_START, end=WEEK_END) == 6
    assert len(shifts.all()) == 6

    service.auto_generate(start=WEEK_START, end=WEEK_END, replace_existing=False)
    assert len(shifts.all()) == 12


def test_generate_for_one_employee_keeps_the_others():
    service, shifts = build_service()
    service.auto_generate(start=WEEK_START, end=WEEK_END)

    assert service.auto_generate(start=WEEK_START, end=WEEK_END, employee_id=2) == 1
    assert len(shifts.all()) == 6


def test_copy_to_next_week_and_cancel():
    service, shifts = build_service()
    service.auto_generate(start=WEEK_START, end=WEEK_END, employee_id=2)
    original = shifts.all()[0]

    copy_id = service.copy_to_next_week(original.shift_id)
    assert shifts.get_by_id(copy_id).work_date == date(2026, 3, 14)

    service.cancel(copy_id)
    assert shifts.get_by_id(copy_id).status == ShiftStatus.CANCELLED
    with pytest.raises(ValidationError):
        service.cancel(copy_id)
    with pytest.raises(ValidationError):
        service.cancel(999)


def test_period_must_be_ordered():
    service, _ = build_service()

    with pytest.raises(ValidationError):
        service.auto_generate(start=WEEK_END, end=WEEK_START)
