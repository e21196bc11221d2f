"""Helpers shared by the JSON controllers."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime, time
from enum import Enum
from functools import wraps
from typing import Any

from flask import jsonify

from ..core.exceptions import DomainError, InvalidTransition, WageRuleError

logger = logging.getLogger(__name__)


def to_json(value: Any) -> Any:
    """Dataclasses/enums/dates -> plain JSON types. Dates use ISO format."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        out = {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
        for name in ("total_hours", "payroll_difference"):
            if hasattr(type(value), name) and name not in out:
                out[name] = to_json(getattr(value, name))
        return out
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        items = sorted(value) if isinstance(value, (set, frozenset)) else value
        return [to_json(v) for v in items]
    if isinstance(value, dict):
        return {str(k): to_json(v) for k, v in value.items()}
    return value


def status_for(error: DomainError) -> int:
    if isinstance(error, InvalidTransition):
        return 409
    if isinstance(error, WageRuleError):
        return 422
    return 400


def json_endpoint(view):
    """Wrap a view returning (payload, status) or payload into a JSON response."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            result = view(*args, **kwargs)
        except DomainError as e:
            return jsonify({"success": False, "message": str(e)}), status_for(e)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return jsonify({"success": False, "message": "Internal error"}), 500

        status = 200
        if isinstance(result, tuple):
            result, status = result
        return jsonify({"success": True, "data": to_json(result)}), status

    return wrapper
