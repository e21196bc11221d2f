from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import TimeRecordStatus, WorkStatus
from ..core.exceptions import InvalidTransition, ValidationError
from ..employees.repository import EmployeeRepository
from .model import TimeRecord
from .repository import TimeRecordRepository
from .status_machine import Transition, WorkStatusMachine

logger = logging.getLogger(__name__)


class AttendanceService:
    """Time clock actions: drives the status machine and persists its records."""

    def __init__(
        self,
        time_records: TimeRecordRepository,
        employees: EmployeeRepository,
        *,
        machine: WorkStatusMachine | None = None,
        timezone: str = DEFAULT_TIMEZONE,
    ):
        self._records = time_records
        self._employees = employees
        self._machine = machine or WorkStatusMachine()
        self._timezone = timezone

    def clock_in(self, employee_id: int, *, now: datetime | None = None) -> TimeRecord:
        return self._apply(employee_id, WorkStatus.WORKING, now, source=WorkStatus.OFFLINE).record

    def start_break(self, employee_id: int, *, now: datetime | None = None) -> TimeRecord:
        return self._apply(employee_id, WorkStatus.BREAK, now).record

    def end_break(self, employee_id: int, *, now: datetime | None = None) -> TimeRecord:
        return self._apply(employee_id, WorkStatus.WORKING, now, source=WorkStatus.BREAK).record

    def start_overtime(self, employee_id: int, *, now: datetime | None = None) -> TimeRecord:
        return self._apply(employee_id, WorkStatus.OVERTIME, now).record

    def clock_out(self, employee_id: int, *, now: datetime | None = None) -> TimeRecord:
        return self._apply(employee_id, WorkStatus.OFFLINE, now).record

    def force_clock_out(self, employee_id: int, *, now: datetime | None = None) -> TimeRecord:
        logger.warning("Forced clock-out for employee %s", employee_id)
        return self._apply(employee_id, WorkStatus.OFFLINE, now).record

    def check_overtime(self, employee_id: int, *, now: datetime | None = None) -> WorkStatus:
        """Externally driven WORKING -> OVERTIME move once the threshold is passed."""
        self._hydrate(employee_id)
        transition = self._machine.check_overtime(employee_id, now or now_local(self._timezone))
        if transition is not None:
            logger.info("Employee %s entered overtime", employee_id)
        return self._machine.status_of(employee_id)

    def current_status(self, employee_id: int) -> WorkStatus:
        self._hydrate(employee_id)
        return self._machine.status_of(employee_id)

    def open_record(self, employee_id: int) -> Optional[TimeRecord]:
        self._hydrate(employee_id)
        return self._machine.open_record(employee_id)

    def submit_for_approval(self, record_id: int, *, notes: str) -> TimeRecord:
        """Employee asks a manager to review a completed day (e.g. a missed punch)."""
        notes = require_non_empty(notes, "notes")
        record = self._get_record(record_id)
        if record.status != TimeRecordStatus.COMPLETED:
            raise ValidationError("Only completed records can be submitted for approval")
        updated = replace(record, status=TimeRecordStatus.PENDING_APPROVAL, notes=notes)
        self._records.update_time_record(updated)
        return updated

    def approve(self, record_id: int, *, approved_by: str) -> TimeRecord:
        approved_by = require_non_empty(approved_by, "approved_by")
        record = self._get_record(record_id)
        if record.status != TimeRecordStatus.PENDING_APPROVAL:
            raise ValidationError("Record is not waiting for approval")
        updated = replace(record, status=TimeRecordStatus.COMPLETED, approved_by=approved_by)
        self._records.update_time_record(updated)
        logger.info("Time record %s approved by %s", record_id, approved_by)
        return updated

    def _get_record(self, record_id: int) -> TimeRecord:
        record = self._records.get_time_record(record_id)
        if not record:
            raise ValidationError(f"Time record {record_id} does not exist")
        return record

    def _hydrate(self, employee_id: int) -> None:
        if self._machine.status_of(employee_id) != WorkStatus.OFFLINE:
            return
        open_record = self._records.get_open_record(employee_id)
        if open_record:
            self._machine.restore(open_record)

    def _apply(
        self,
        employee_id: int,
        target: WorkStatus,
        now: datetime | None,
        *,
        source: WorkStatus | None = None,
    ) -> Transition:
        now = now or now_local(self._timezone)

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise ValidationError(f"Employee {employee_id} does not exist")

        self._hydrate(employee_id)
        current = self._machine.status_of(employee_id)
        # WORKING is reached both by clocking in and by ending a break.
        if source is not None and current != source:
            raise InvalidTransition(f"Cannot move employee {employee_id} from {current.value} to {target.value}")
        if current == WorkStatus.OFFLINE and not employee.is_active:
            raise ValidationError(f"Employee {employee.code} is inactive")

        previous_record = self._machine.open_record(employee_id)
        transition = self._machine.transition(employee_id, target, now)

        record = transition.record
        try:
            if transition.created:
                record = replace(record, record_id=self._records.create_time_record(record))
            else:
                self._records.update_time_record(record)
        except Exception:
            # Keep the machine in step with what the store holds.
            self._machine.reset(employee_id, current, previous_record)
            logger.error("Employee %s: %s -> %s not saved", employee_id, current.value, target.value)
            raise

        if transition.created:
            self._machine.remember(record)
            transition = replace(transition, record=record)

        logger.info(
            "Employee %s: %s -> %s at %s",
            employee_id,
            transition.previous.value,
            transition.current.value,
            now.isoformat(timespec="minutes"),
        )
        return transition
