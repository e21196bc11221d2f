from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..common.time_utils import elapsed_minutes, overtime_split, working_hours
from ..core.constants import DEFAULT_OVERTIME_THRESHOLD_HOURS
from ..core.enums import TimeRecordStatus, WorkStatus
from ..core.exceptions import InvalidTransition
from .model import TimeRecord

# Legal next states. Every non-offline state may go to OFFLINE (regular or
# forced clock-out); that edge is part of the table, not a bypass.
TRANSITIONS: dict[WorkStatus, frozenset[WorkStatus]] = {
    WorkStatus.OFFLINE: frozenset({WorkStatus.WORKING}),
    WorkStatus.WORKING: frozenset({WorkStatus.BREAK, WorkStatus.OVERTIME, WorkStatus.OFFLINE}),
    WorkStatus.BREAK: frozenset({WorkStatus.WORKING, WorkStatus.OFFLINE}),
    WorkStatus.OVERTIME: frozenset({WorkStatus.OFFLINE}),
}


@dataclass(frozen=True)
class Transition:
    employee_id: int
    previous: WorkStatus
    current: WorkStatus
    record: TimeRecord
    created: bool


class WorkStatusMachine:
    """Tracks the live work state of each employee and shapes their open TimeRecord.

    One current state per employee; the latest accepted transition wins. The
    machine keeps no history: completed records are handed back to the caller
    and forgotten.
    """

    def __init__(self, *, overtime_threshold_hours: float = DEFAULT_OVERTIME_THRESHOLD_HOURS):
        self._threshold = float(overtime_threshold_hours)
        self._states: dict[int, WorkStatus] = {}
        self._records: dict[int, TimeRecord] = {}

    @staticmethod
    def can_transition(current: WorkStatus, target: WorkStatus) -> bool:
        return target in TRANSITIONS[current]

    def status_of(self, employee_id: int) -> WorkStatus:
        return self._states.get(employee_id, WorkStatus.OFFLINE)

    def open_record(self, employee_id: int) -> Optional[TimeRecord]:
        return self._records.get(employee_id)

    def restore(self, record: TimeRecord) -> None:
        """Re-hydrate state from a stored open record (e.g. after a restart)."""
        if not record.is_open:
            self._states.pop(record.employee_id, None)
            self._records.pop(record.employee_id, None)
            return
        state = WorkStatus.BREAK if record.status == TimeRecordStatus.BREAK else WorkStatus.WORKING
        self._states[record.employee_id] = state
        self._records[record.employee_id] = record

    def remember(self, record: TimeRecord) -> None:
        """Replace the tracked open record, e.g. once the store assigned an id."""
        if record.employee_id in self._records:
            self._records[record.employee_id] = record

    def reset(self, employee_id: int, status: WorkStatus, record: Optional[TimeRecord]) -> None:
        """Put an employee back to a known state, e.g. after a failed store write."""
        if status == WorkStatus.OFFLINE or record is None:
            self._states.pop(employee_id, None)
            self._records.pop(employee_id, None)
            return
        self._states[employee_id] = status
        self._records[employee_id] = record

    def transition(self, employee_id: int, target: WorkStatus, now: datetime) -> Transition:
        current = self.status_of(employee_id)
        if not self.can_transition(current, target):
            raise InvalidTransition(f"Cannot move employee {employee_id} from {current.value} to {target.value}")

        record = self._records.get(employee_id)
        created = False
        if current == WorkStatus.OFFLINE:
            record = TimeRecord(
                record_id=None,
                employee_id=employee_id,
                work_date=now.date(),
                clock_in=now,
                status=TimeRecordStatus.WORKING,
            )
            created = True
        elif target == WorkStatus.BREAK:
            record = replace(record, break_start=now, break_end=None, status=TimeRecordStatus.BREAK)
        elif target == WorkStatus.WORKING:
            record = self._close_break(record, now)
        elif target == WorkStatus.OFFLINE:
            record = self._clock_out(record, now)
        # WORKING -> OVERTIME leaves the record untouched: there is no overtime record status.

        if target == WorkStatus.OFFLINE:
            self._states.pop(employee_id, None)
            self._records.pop(employee_id, None)
        else:
            self._states[employee_id] = target
            self._records[employee_id] = record

        return Transition(employee_id=employee_id, previous=current, current=target, record=record, created=created)

    def force_clock_out(self, employee_id: int, now: datetime) -> Transition:
        return self.transition(employee_id, WorkStatus.OFFLINE, now)

    def elapsed_working_hours(self, employee_id: int, now: datetime) -> float:
        record = self._records.get(employee_id)
        if record is None or record.clock_in is None:
            return 0.0
        if record.status == TimeRecordStatus.BREAK:
            record = self._close_break(record, now)
        return working_hours(record.clock_in, now, record.break_minutes)

    def check_overtime(self, employee_id: int, now: datetime) -> Optional[Transition]:
        """Move WORKING -> OVERTIME once elapsed hours exceed the threshold."""
        if self.status_of(employee_id) != WorkStatus.WORKING:
            return None
        if self.elapsed_working_hours(employee_id, now) <= self._threshold:
            return None
        return self.transition(employee_id, WorkStatus.OVERTIME, now)

    @staticmethod
    def _close_break(record: TimeRecord, now: datetime) -> TimeRecord:
        if record.status != TimeRecordStatus.BREAK or record.break_start is None:
            return record
        minutes = max(elapsed_minutes(record.break_start, now), 0)
        return replace(
            record,
            break_end=now,
            break_minutes=record.break_minutes + minutes,
            status=TimeRecordStatus.WORKING,
        )

    def _clock_out(self, record: TimeRecord, now: datetime) -> TimeRecord:
        record = self._close_break(record, now)
        hours = working_hours(record.clock_in, now, record.break_minutes)
        split = overtime_split(hours, self._threshold)
        return replace(
            record,
            clock_out=now,
            working_hours=hours,
            overtime_hours=split.overtime,
            status=TimeRecordStatus.COMPLETED,
        )
