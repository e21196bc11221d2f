from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Optional

from ...core.enums import HoursSource
from ..model import WorkInterval


class IntervalStrategy(ABC):
    """Strategy Pattern: turn one stored item (record or shift) into a work interval."""

    source: HoursSource
    record_type: type

    def accepts(self, item: Any) -> bool:
        return isinstance(item, self.record_type)

    @abstractmethod
    def work_date(self, item: Any) -> date:
        raise NotImplementedError

    @abstractmethod
    def employee_id(self, item: Any) -> int:
        raise NotImplementedError

    @abstractmethod
    def to_interval(self, item: Any) -> Optional[WorkInterval]:
        """Return the interval, None when the item carries no work, or raise MissingPair."""

        raise NotImplementedError
