from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..core.enums import HoursSource
from ..core.exceptions import ValidationError
from .strategies.actual_strategy import ActualIntervalStrategy
from .strategies.base import IntervalStrategy
from .strategies.planned_strategy import PlannedIntervalStrategy


@dataclass
class IntervalStrategyFactory:
    """Factory Pattern: choose the interval strategy for actual vs estimated hours."""

    def for_source(self, source: HoursSource) -> IntervalStrategy:
        if HoursSource(source) == HoursSource.ACTUAL:
            return ActualIntervalStrategy()
        return PlannedIntervalStrategy()

    def for_items(self, items: Sequence[Any], *, source: Optional[HoursSource] = None) -> IntervalStrategy:
        """Pick (or check) the strategy for a homogeneous list of records or shifts."""
        if source is None:
            planned = self.for_source(HoursSource.ESTIMATED)
            source = HoursSource.ESTIMATED if items and planned.accepts(items[0]) else HoursSource.ACTUAL
        source = HoursSource(source)

        strategy = self.for_source(source)
        for item in items:
            if not strategy.accepts(item):
                raise ValidationError(
                    f"{source.value} hours expect {strategy.record_type.__name__} items, got {type(item).__name__}"
                )
        return strategy
