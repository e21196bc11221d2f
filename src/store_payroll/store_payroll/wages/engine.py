from __future__ import annotations

from typing import Iterable

from ..core.exceptions import AmbiguousWageRule, NoActiveWageRule, ValidationError
from ..employees.model import Employee
from ..hours.model import HourBucket
from ..payroll.model import PayrollRecord
from .model import WageRule


def resolve_active_rule(rules: Iterable[WageRule]) -> WageRule:
    """The single active rule; zero or several active rules is a configuration error."""
    active = [r for r in rules if r.is_active]
    if not active:
        raise NoActiveWageRule("No active wage rule is configured")
    if len(active) > 1:
        names = ", ".join(r.name for r in active)
        raise AmbiguousWageRule(f"{len(active)} wage rules are active: {names}")
    return active[0]


class WageRuleEngine:
    """Applies a wage rule to an HourBucket.

    regular  = regular_hours * wage
    overtime = overtime_hours * wage * overtime_rate
    night    = night_hours * wage * (night_rate - 1)
    holiday  = holiday_hours * wage * (holiday_rate - 1)

    Night and holiday pay are premiums only: their base pay is already part of
    regular/overtime pay.
    """

    def apply(self, bucket: HourBucket, employee: Employee, rule: WageRule) -> PayrollRecord:
        if bucket.employee_id != employee.employee_id:
            raise ValidationError(f"Bucket of employee {bucket.employee_id} applied to employee {employee.employee_id}")

        wage = employee.hourly_wage
        premium_overtime, night_hours, holiday_hours = self._premium_hours(bucket, rule)
        plain_overtime = bucket.overtime_hours - premium_overtime

        regular_pay = bucket.regular_hours * wage
        overtime_pay = premium_overtime * wage * rule.overtime_rate + plain_overtime * wage
        night_pay = night_hours * wage * (rule.night_rate - 1)
        holiday_pay = holiday_hours * wage * (rule.holiday_rate - 1)

        return PayrollRecord(
            employee_id=employee.employee_id,
            employee_code=employee.code,
            employee_name=employee.name,
            source=bucket.source,
            start=bucket.start,
            end=bucket.end,
            regular_hours=bucket.regular_hours,
            overtime_hours=bucket.overtime_hours,
            night_hours=bucket.night_hours,
            holiday_hours=bucket.holiday_hours,
            regular_pay=regular_pay,
            overtime_pay=overtime_pay,
            night_pay=night_pay,
            holiday_pay=holiday_pay,
            total_pay=regular_pay + overtime_pay + night_pay + holiday_pay,
        )

    @staticmethod
    def _premium_hours(bucket: HourBucket, rule: WageRule) -> tuple[float, float, float]:
        """(overtime, night, holiday) hours that earn the rule's premiums."""
        conditions = rule.conditions
        if conditions.is_unconditional:
            return bucket.overtime_hours, bucket.night_hours, bucket.holiday_hours

        qualifying = [d for d in bucket.days if conditions.matches(weekday=d.weekday, total_hours=d.total_hours)]
        return (
            sum(d.overtime_hours for d in qualifying),
            sum(d.night_hours for d in qualifying),
            sum(d.holiday_hours for d in qualifying),
        )
