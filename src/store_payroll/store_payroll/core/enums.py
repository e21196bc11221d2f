from __future__ import annotations

from enum import Enum


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class WorkStatus(str, Enum):
    """Live work state of one employee (driven by the time clock)."""

    OFFLINE = "offline"
    WORKING = "working"
    BREAK = "break"
    OVERTIME = "overtime"


class TimeRecordStatus(str, Enum):
    """Lifecycle of a stored clock record."""

    WORKING = "working"
    BREAK = "break"
    COMPLETED = "completed"
    PENDING_APPROVAL = "pending_approval"


class ShiftType(str, Enum):
    REGULAR = "regular"
    OVERTIME = "overtime"
    HOLIDAY = "holiday"


class ShiftStatus(str, Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class HoursSource(str, Enum):
    """Where hours come from: clock records (actual) or shifts (estimated)."""

    ACTUAL = "actual"
    ESTIMATED = "estimated"


class AnomalyKind(str, Enum):
    MISSING_PAIR = "missing_pair"
    LATE_ARRIVAL = "late_arrival"
    EARLY_LEAVE = "early_leave"
