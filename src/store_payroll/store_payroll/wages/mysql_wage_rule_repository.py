from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, parse_weekday_csv
from .model import WageConditions, WageRule
from .repository import WageRuleRepository

_COLUMNS = """
    rule_id, name, base_rate, overtime_rate, night_rate, holiday_rate, night_start_hour,
    night_end_hour, rounding_minutes, is_active, min_daily_hours, condition_weekdays
"""


def _to_rule(r: dict) -> WageRule:
    min_hours = r.get("min_daily_hours")
    weekdays = r.get("condition_weekdays")
    return WageRule(
        rule_id=int(r["rule_id"]),
        name=r["name"],
        base_rate=float(r["base_rate"]),
        overtime_rate=float(r["overtime_rate"]),
        night_rate=float(r["night_rate"]),
        holiday_rate=float(r["holiday_rate"]),
        night_start_hour=int(r["night_start_hour"]),
        night_end_hour=int(r["night_end_hour"]),
        rounding_minutes=int(r["rounding_minutes"]),
        is_active=bool(r["is_active"]),
        conditions=WageConditions(
            min_daily_hours=float(min_hours) if min_hours is not None else None,
            weekdays=parse_weekday_csv(weekdays) if weekdays else None,
        ),
    )


class MySQLWageRuleRepository(WageRuleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_rules(self) -> Sequence[WageRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM wage_rules ORDER BY rule_id")
            return [_to_rule(r) for r in fetchall(cur)]

    def list_active_rules(self) -> Sequence[WageRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM wage_rules WHERE is_active=1 ORDER BY rule_id")
            return [_to_rule(r) for r in fetchall(cur)]
