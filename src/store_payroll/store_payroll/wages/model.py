from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..common.validators import require_non_negative, require_weekdays
from ..core.constants import DEFAULT_NIGHT_END_HOUR, DEFAULT_NIGHT_START_HOUR, DEFAULT_ROUNDING_MINUTES
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class WageConditions:
    """Closed set of optional predicates gating a rule's premiums per day.

    - min_daily_hours: premiums apply only on days with at least this many hours.
    - weekdays: premiums apply only on these weekdays (0 = Sunday ... 6 = Saturday).

    An unset predicate always holds.
    """

    min_daily_hours: Optional[float] = None
    weekdays: Optional[frozenset[int]] = None

    def __post_init__(self):
        if self.min_daily_hours is not None:
            require_non_negative(self.min_daily_hours, "min_daily_hours")
        if self.weekdays is not None:
            object.__setattr__(self, "weekdays", require_weekdays(self.weekdays, "weekdays"))

    @property
    def is_unconditional(self) -> bool:
        return self.min_daily_hours is None and self.weekdays is None

    def matches(self, *, weekday: int, total_hours: float) -> bool:
        if self.min_daily_hours is not None and total_hours < self.min_daily_hours:
            return False
        if self.weekdays is not None and weekday not in self.weekdays:
            return False
        return True


@dataclass(frozen=True)
class WageRule:
    """Pay multipliers and thresholds. Exactly one rule may be active."""

    rule_id: Optional[int]
    name: str
    base_rate: float
    overtime_rate: float = 1.25
    night_rate: float = 1.25
    holiday_rate: float = 1.35
    night_start_hour: int = DEFAULT_NIGHT_START_HOUR
    night_end_hour: int = DEFAULT_NIGHT_END_HOUR
    rounding_minutes: int = DEFAULT_ROUNDING_MINUTES
    is_active: bool = True
    conditions: WageConditions = field(default_factory=WageConditions)

    def __post_init__(self):
        require_non_negative(self.base_rate, "base_rate")
        require_non_negative(self.rounding_minutes, "rounding_minutes")
        for name in ("overtime_rate", "night_rate", "holiday_rate"):
            if getattr(self, name) < 1:
                raise ValidationError(f"{name} must be a multiplier >= 1")
        for hour in (self.night_start_hour, self.night_end_hour):
            if not 0 <= int(hour) <= 23:
                raise ValidationError(f"Invalid night window hour: {hour}")
