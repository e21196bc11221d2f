from __future__ import annotations

from datetime import datetime

import pytest

from src.store_payroll.store_payroll.wages.model import WageRule


@pytest.fixture
def standard_rule() -> WageRule:
    # Rounding off so that hand-computed hours stay exact.
    return WageRule(rule_id=1, name="基本賃金規則", base_rate=1000, rounding_minutes=0)


@pytest.fixture
def fixed_now() -> datetime:
    # A Wednesday.
    return datetime(2026, 3, 4, 9, 0, 0)
