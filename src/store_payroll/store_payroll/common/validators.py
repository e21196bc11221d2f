from __future__ import annotations

from typing import Iterable, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_non_negative(value: float, field_name: str) -> float:
    if value is None or value < 0:
        raise ValidationError(f"{field_name} must be >= 0")
    return value


def require_weekdays(values: Optional[Iterable[int]], field_name: str) -> frozenset[int]:
    """Normalize a weekday collection (0 = Sunday ... 6 = Saturday)."""
    if values is None:
        return frozenset()
    days = frozenset(int(v) for v in values)
    bad = sorted(d for d in days if not 0 <= d <= 6)
    if bad:
        raise ValidationError(f"{field_name} has invalid weekdays: {bad}")
    return days
