"""Duration math used by every calculation in the engine.

All functions are pure. Hours are fractional floats and are never rounded
here; rounding to display precision happens in presentation code only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..core.constants import DEFAULT_OVERTIME_THRESHOLD_HOURS
from ..core.exceptions import InvalidInterval


@dataclass(frozen=True)
class OvertimeSplit:
    regular: float
    overtime: float


def elapsed_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between two timestamps (seconds are truncated)."""
    return int((end - start).total_seconds() // 60)


def working_hours(clock_in: datetime, clock_out: datetime, break_minutes: float = 0) -> float:
    """(out - in) - break, not below 0, in hours."""
    if clock_out < clock_in:
        raise InvalidInterval(f"Clock-out {clock_out:%Y-%m-%d %H:%M} precedes clock-in {clock_in:%Y-%m-%d %H:%M}")
    minutes = elapsed_minutes(clock_in, clock_out) - float(break_minutes or 0)
    return max(minutes, 0) / 60


def overtime_split(total_hours: float, threshold: float = DEFAULT_OVERTIME_THRESHOLD_HOURS) -> OvertimeSplit:
    regular = min(total_hours, threshold)
    return OvertimeSplit(regular=regular, overtime=max(0.0, total_hours - threshold))


def is_night_hour(timestamp: datetime, night_start: int, night_end: int) -> bool:
    hour = timestamp.hour
    if night_start > night_end:
        # Window crosses midnight (e.g. 22 -> 5).
        return hour >= night_start or hour < night_end
    return night_start <= hour < night_end


def round_to_nearest(minutes: float, granularity: int) -> int:
    """Round to the nearest multiple of granularity, halves going up."""
    if not granularity or granularity <= 0:
        return int(minutes)
    return int(math.floor(minutes / granularity + 0.5) * granularity)


def round_punch(timestamp: datetime, granularity: int) -> datetime:
    """Round a clock punch to the granularity grid of its day.

    Seconds are dropped first; 23:53 with a 15 minute grid becomes 00:00 of the
    next day.
    """
    if not granularity or granularity <= 0:
        return timestamp
    midnight = timestamp.replace(hour=0, minute=0, second=0, microsecond=0)
    minute_of_day = timestamp.hour * 60 + timestamp.minute
    return midnight + timedelta(minutes=round_to_nearest(minute_of_day, granularity))


def format_duration(hours: float) -> str:
    """Display helper: 8.5 -> "8時間30分"."""
    total_minutes = int(round(max(hours, 0) * 60))
    h, m = divmod(total_minutes, 60)
    if h == 0:
        return f"{m}分"
    if m == 0:
        return f"{h}時間"
    return f"{h}時間{m}分"
