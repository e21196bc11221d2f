from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import sunday_based_weekday
from ..common.time_utils import is_night_hour, overtime_split, round_punch, working_hours
from ..core.constants import DEFAULT_NIGHT_END_HOUR, DEFAULT_NIGHT_START_HOUR
from ..core.enums import AnomalyKind, HoursSource
from ..core.exceptions import MissingPair, ValidationError
from ..core.settings import PayrollSettings
from ..wages.model import WageRule
from .factory import IntervalStrategyFactory
from .model import AttendanceAnomaly, DayHours, HourBucket, WorkInterval

logger = logging.getLogger(__name__)


class HoursCalculator:
    """Turns clock records or planned shifts into an HourBucket for one employee.

    Records and shifts go through the same policy:

    - group by work date; every date with at least one valid in/out pair is a work day
    - punches are rounded to the wage rule's grid before computing hours
    - the overtime split is taken on each day's total
    - the whole day counts as night when its first (rounded) start is inside the
      night window, and as holiday on store holidays or holiday shifts
    - a dangling punch contributes zero hours and is reported as an anomaly
    """

    def __init__(
        self,
        settings: PayrollSettings | None = None,
        *,
        strategy_factory: IntervalStrategyFactory | None = None,
    ):
        self._settings = settings or PayrollSettings()
        self._factory = strategy_factory or IntervalStrategyFactory()

    def compute(
        self,
        *,
        employee_id: int,
        start: date,
        end: date,
        items: Sequence[Any],
        source: Optional[HoursSource] = None,
        rule: Optional[WageRule] = None,
    ) -> HourBucket:
        if end < start:
            raise ValidationError("Period end must not be before its start")

        strategy = self._factory.for_items(items, source=source)

        by_date: dict[date, list[Any]] = defaultdict(list)
        for item in items:
            work_date = strategy.work_date(item)
            if strategy.employee_id(item) != employee_id or not start <= work_date <= end:
                continue
            by_date[work_date].append(item)

        days: list[DayHours] = []
        anomalies: list[AttendanceAnomaly] = []
        for work_date in sorted(by_date):
            intervals: list[WorkInterval] = []
            for item in by_date[work_date]:
                try:
                    interval = strategy.to_interval(item)
                except MissingPair as e:
                    anomalies.append(AttendanceAnomaly(employee_id, work_date, AnomalyKind.MISSING_PAIR, str(e)))
                    continue
                if interval is not None:
                    intervals.append(interval)

            if not intervals:
                continue

            day = self._day_hours(work_date, intervals, rule)
            days.append(day)
            if day.is_late:
                anomalies.append(
                    AttendanceAnomaly(employee_id, work_date, AnomalyKind.LATE_ARRIVAL, f"in at {day.first_in:%H:%M}")
                )
            if day.is_early_leave:
                anomalies.append(
                    AttendanceAnomaly(employee_id, work_date, AnomalyKind.EARLY_LEAVE, f"out at {day.last_out:%H:%M}")
                )

        for anomaly in anomalies:
            if anomaly.kind == AnomalyKind.MISSING_PAIR:
                logger.warning("Employee %s: %s", employee_id, anomaly.detail)

        return HourBucket(
            employee_id=employee_id,
            start=start,
            end=end,
            source=strategy.source,
            regular_hours=sum(d.regular_hours for d in days),
            overtime_hours=sum(d.overtime_hours for d in days),
            night_hours=sum(d.night_hours for d in days),
            holiday_hours=sum(d.holiday_hours for d in days),
            work_days=len(days),
            late_days=sum(1 for d in days if d.is_late),
            early_leave_days=sum(1 for d in days if d.is_early_leave),
            days=tuple(days),
            anomalies=tuple(anomalies),
        )

    def _day_hours(self, work_date: date, intervals: list[WorkInterval], rule: Optional[WageRule]) -> DayHours:
        granularity = rule.rounding_minutes if rule else 0
        night_start = rule.night_start_hour if rule else DEFAULT_NIGHT_START_HOUR
        night_end = rule.night_end_hour if rule else DEFAULT_NIGHT_END_HOUR

        total = 0.0
        for interval in intervals:
            total += working_hours(
                round_punch(interval.start, granularity),
                round_punch(interval.end, granularity),
                interval.break_minutes,
            )

        split = overtime_split(total, self._settings.overtime_threshold_hours)
        first_in = min(i.start for i in intervals)
        last_out = max(i.end for i in intervals)
        is_holiday = self._settings.is_holiday(work_date) or any(i.is_holiday for i in intervals)

        return DayHours(
            work_date=work_date,
            weekday=sunday_based_weekday(work_date),
            total_hours=total,
            regular_hours=split.regular,
            overtime_hours=split.overtime,
            night_hours=total if is_night_hour(round_punch(first_in, granularity), night_start, night_end) else 0.0,
            holiday_hours=total if is_holiday else 0.0,
            first_in=first_in,
            last_out=last_out,
            is_late=first_in.hour > self._settings.expected_start_hour,
            # An overnight interval ends on a later date; that is not an early leave.
            is_early_leave=last_out.date() == work_date and last_out.hour < self._settings.expected_end_hour,
        )
