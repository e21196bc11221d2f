from __future__ import annotations

import logging
from typing import Sequence

from ..core.exceptions import WageRuleError
from .engine import resolve_active_rule
from .model import WageRule
from .repository import WageRuleRepository

logger = logging.getLogger(__name__)


class WageRuleService:
    def __init__(self, rules: WageRuleRepository):
        self._rules = rules

    def list_rules(self) -> Sequence[WageRule]:
        return self._rules.list_rules()

    def get_active_wage_rule(self) -> WageRule:
        try:
            return resolve_active_rule(self._rules.list_active_rules())
        except WageRuleError as e:
            logger.error("Wage rule configuration: %s", e)
            raise
