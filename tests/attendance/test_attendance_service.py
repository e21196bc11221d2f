from datetime import datetime, timedelta

import pytest

from src.store_payroll.store_payroll.attendance.service import AttendanceService
from src.store_payroll.store_payroll.core.enums import EmployeeStatus, TimeRecordStatus, WorkStatus
from src.store_payroll.store_payroll.core.exceptions import InvalidTransition, ValidationError
from tests.fakes import InMemoryEmployees, InMemoryTimeRecords, make_employee, make_record


def build_service(records=None, employees=None):
    records = records or InMemoryTimeRecords()
    employees = employees or InMemoryEmployees([make_employee(1)])
    return AttendanceService(records, employees), records


def test_clock_in_persists_new_record(fixed_now):
    service, records = build_service()

    record = service.clock_in(1, now=fixed_now)

    assert record.record_id is not None
    assert records.get_time_record(record.record_id).clock_in == fixed_now
    assert service.current_status(1) == WorkStatus.WORKING
    assert service.open_record(1).record_id == record.record_id


def test_clock_out_completes_the_stored_record(fixed_now):
    service, records = build_service()
    record = service.clock_in(1, now=fixed_now)
    service.start_break(1, now=fixed_now + timedelta(hours=3))
    service.end_break(1, now=fixed_now + timedelta(hours=4))

    service.clock_out(1, now=fixed_now + timedelta(hours=10))

    stored = records.get_time_record(record.record_id)
    assert stored.status == TimeRecordStatus.COMPLETED
    assert stored.working_hours == 9.0
    assert stored.overtime_hours == 1.0
    assert service.current_status(1) == WorkStatus.OFFLINE


def test_clock_in_twice_is_rejected(fixed_now):
    service, _ = build_service()
    service.clock_in(1, now=fixed_now)

    with pytest.raises(InvalidTransition):
        service.clock_in(1, now=fixed_now + timedelta(minutes=5))


def test_end_break_does_not_clock_in(fixed_now):
    service, records = build_service()

    with pytest.raises(InvalidTransition):
        service.end_break(1, now=fixed_now)
    assert records.get_open_record(1) is None


def test_unknown_employee(fixed_now):
    service, _ = build_service()

    with pytest.raises(ValidationError):
        service.clock_in(99, now=fixed_now)


def test_inactive_employee_cannot_clock_in(fixed_now):
    employees = InMemoryEmployees([make_employee(1, status=EmployeeStatus.INACTIVE)])
    service, _ = build_service(employees=employees)

    with pytest.raises(ValidationError):
        service.clock_in(1, now=fixed_now)


def test_state_is_restored_from_open_record(fixed_now):
    records = InMemoryTimeRecords([make_record(1, fixed_now, None)])
    service, _ = build_service(records=records)

    assert service.current_status(1) == WorkStatus.WORKING
    record = service.clock_out(1, now=fixed_now + timedelta(hours=8))

    assert record.record_id == 1
    assert records.get_time_record(1).clock_out == fixed_now + timedelta(hours=8)


def test_force_clock_out_from_overtime(fixed_now):
    service, _ = build_service()
    service.clock_in(1, now=fixed_now)

    assert service.check_overtime(1, now=fixed_now + timedelta(hours=9)) == WorkStatus.OVERTIME

    record = service.force_clock_out(1, now=fixed_now + timedelta(hours=12))
    assert record.status == TimeRecordStatus.COMPLETED
    assert record.overtime_hours == 4.0


def test_submit_and_approve(fixed_now):
    records = InMemoryTimeRecords(
        [make_record(1, fixed_now, fixed_now + timedelta(hours=8), status=TimeRecordStatus.COMPLETED)]
    )
    service, _ = build_service(records=records)

    pending = service.submit_for_approval(1, notes="forgot to clock out on time")
    assert pending.status == TimeRecordStatus.PENDING_APPROVAL
    assert records.get_time_record(1).notes == "forgot to clock out on time"

    approved = service.approve(1, approved_by="店長")
    assert approved.status == TimeRecordStatus.COMPLETED
    assert approved.approved_by == "店長"


def test_submit_requires_completed_record_and_notes(fixed_now):
    records = InMemoryTimeRecords(
        [
            make_record(1, fixed_now, None),
            make_record(1, fixed_now - timedelta(days=1), fixed_now - timedelta(hours=16), status=TimeRecordStatus.COMPLETED),
        ]
    )
    service, _ = build_service(records=records)

    with pytest.raises(ValidationError):
        service.submit_for_approval(1, notes="open record")
    with pytest.raises(ValidationError):
        service.submit_for_approval(2, notes="  ")
    with pytest.raises(ValidationError):
        service.approve(2, approved_by="店長")


class FlakyTimeRecords(InMemoryTimeRecords):
    def __init__(self, records=()):
        super().__init__(records)
        self.fail = False

    def create_time_record(self, record):
        if self.fail:
            raise RuntimeError("db down")
        return super().create_time_record(record)

    def update_time_record(self, record):
        if self.fail:
            raise RuntimeError("db down")
        return super().update_time_record(record)


def test_failed_clock_in_leaves_employee_offline(fixed_now):
    records = FlakyTimeRecords()
    service, _ = build_service(records=records)
    records.fail = True

    with pytest.raises(RuntimeError):
        service.clock_in(1, now=fixed_now)

    assert service.current_status(1) == WorkStatus.OFFLINE
    assert service.open_record(1) is None

    records.fail = False
    record = service.clock_in(1, now=fixed_now + timedelta(minutes=1))
    assert record.record_id is not None


def test_failed_clock_out_keeps_the_open_record(fixed_now):
    records = FlakyTimeRecords()
    service, _ = build_service(records=records)
    record = service.clock_in(1, now=fixed_now)
    service.check_overtime(1, now=fixed_now + timedelta(hours=9))
    records.fail = True

    with pytest.raises(RuntimeError):
        service.clock_out(1, now=fixed_now + timedelta(hours=10))

    assert service.current_status(1) == WorkStatus.OVERTIME
    assert service.open_record(1).record_id == record.record_id

    records.fail = False
    done = service.clock_out(1, now=fixed_now + timedelta(hours=10))
    assert records.get_time_record(record.record_id).status == TimeRecordStatus.COMPLETED
    assert done.working_hours == 10.0
