from __future__ import annotations

from typing import Protocol, Sequence

from .model import WageRule


class WageRuleRepository(Protocol):
    def list_rules(self) -> Sequence[WageRule]:
        raise NotImplementedError

    def list_active_rules(self) -> Sequence[WageRule]:
        raise NotImplementedError
