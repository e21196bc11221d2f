from datetime import datetime

import pytest

from src.store_payroll.store_payroll.attendance.status_machine import WorkStatusMachine
from src.store_payroll.store_payroll.core.enums import TimeRecordStatus, WorkStatus
from src.store_payroll.store_payroll.core.exceptions import InvalidTransition


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 3, 4, hour, minute)


def test_clock_in_opens_a_record():
    machine = WorkStatusMachine()

    t = machine.transition(1, WorkStatus.WORKING, at(9))

    assert t.created is True
    assert t.previous == WorkStatus.OFFLINE
    assert machine.status_of(1) == WorkStatus.WORKING
    assert t.record.clock_in == at(9)
    assert t.record.status == TimeRecordStatus.WORKING


@pytest.mark.parametrize(
    "path,target",
    [
        ([], WorkStatus.BREAK),
        ([], WorkStatus.OVERTIME),
        ([], WorkStatus.OFFLINE),
        ([WorkStatus.WORKING, WorkStatus.OVERTIME], WorkStatus.BREAK),
        ([WorkStatus.WORKING, WorkStatus.BREAK], WorkStatus.OVERTIME),
    ],
)
def test_illegal_moves_are_rejected(path, target):
    machine = WorkStatusMachine()
    for step in path:
        machine.transition(1, step, at(9))

    with pytest.raises(InvalidTransition):
        machine.transition(1, target, at(10))


def test_full_day_with_break_and_overtime():
    machine = WorkStatusMachine()
    machine.transition(1, WorkStatus.WORKING, at(9))
    machine.transition(1, WorkStatus.BREAK, at(12))
    machine.transition(1, WorkStatus.WORKING, at(13))

    t = machine.transition(1, WorkStatus.OFFLINE, at(19))

    assert t.record.break_minutes == 60
    assert t.record.working_hours == 9.0
    assert t.record.overtime_hours == 1.0
    assert t.record.status == TimeRecordStatus.COMPLETED
    assert machine.status_of(1) == WorkStatus.OFFLINE
    assert machine.open_record(1) is None


def test_force_clock_out_closes_running_break():
    machine = WorkStatusMachine()
    machine.transition(1, WorkStatus.WORKING, at(9))
    machine.transition(1, WorkStatus.BREAK, at(12))

    t = machine.force_clock_out(1, at(12, 30))

    assert t.record.break_minutes == 30
    assert t.record.working_hours == 3.0
    assert machine.status_of(1) == WorkStatus.OFFLINE


def test_check_overtime_only_after_threshold():
    machine = WorkStatusMachine(overtime_threshold_hours=8)
    machine.transition(1, WorkStatus.WORKING, at(9))

    assert machine.check_overtime(1, at(17)) is None
    assert machine.status_of(1) == WorkStatus.WORKING

    t = machine.check_overtime(1, at(17, 1))
    assert t is not None
    assert machine.status_of(1) == WorkStatus.OVERTIME


def test_check_overtime_ignores_employees_on_break():
    machine = WorkStatusMachine(overtime_threshold_hours=1)
    machine.transition(1, WorkStatus.WORKING, at(9))
    machine.transition(1, WorkStatus.BREAK, at(9, 30))

    assert machine.check_overtime(1, at(12)) is None
    assert machine.status_of(1) == WorkStatus.BREAK


def test_employees_are_tracked_independently():
    machine = WorkStatusMachine()
    machine.transition(1, WorkStatus.WORKING, at(9))
    machine.transition(2, WorkStatus.WORKING, at(9))
    machine.transition(2, WorkStatus.BREAK, at(10))

    assert machine.status_of(1) == WorkStatus.WORKING
    assert machine.status_of(2) == WorkStatus.BREAK
