from __future__ import annotations

from flask import Flask, request

from ..common.api import json_endpoint
from ..common.datetime_utils import parse_hhmm, parse_iso_date, week_range
from ..core.constants import DEFAULT_SHIFT_BREAK_MINUTES
from ..core.enums import ShiftType
from ..core.exceptions import ValidationError
from ..container import Container
from .model import Shift


def _parse_flag(value, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"true", "1", "yes"}:
        return True
    if text in {"false", "0", "no"}:
        return False
    raise ValidationError(f"{name} must be true or false, got {value!r}")


def register(app: Flask, container: Container) -> None:
    service = container.shift_service

    @app.route("/api/shifts", methods=["POST"], endpoint="shifts_create")
    @json_endpoint
    def shifts_create():
        data = request.get_json(silent=True) or {}
        missing = [k for k in ("employee_id", "work_date", "start_time", "end_time") if not data.get(k)]
        if missing:
            raise ValidationError(f"Missing fields: {', '.join(missing)}")
        try:
            shift_type = ShiftType(data.get("type") or ShiftType.REGULAR.value)
        except ValueError:
            raise ValidationError(f"Unknown shift type: {data.get('type')!r}") from None

        shift = Shift(
            shift_id=None,
            employee_id=int(data["employee_id"]),
            work_date=parse_iso_date(data["work_date"]),
            start_time=parse_hhmm(data["start_time"]),
            end_time=parse_hhmm(data["end_time"]),
            break_minutes=int(data.get("break_minutes", DEFAULT_SHIFT_BREAK_MINUTES)),
            type=shift_type,
            notes=data.get("notes"),
        )
        return {"shift_id": service.add_shift(shift)}, 201

    @app.route("/api/shifts/generate", methods=["POST"], endpoint="shifts_generate")
    @json_endpoint
    def shifts_generate():
        data = request.get_json(silent=True) or {}
        if data.get("week"):
            # Any date inside the target Sunday..Saturday week.
            start, end = week_range(parse_iso_date(data["week"]))
        elif data.get("start") and data.get("end"):
            start, end = parse_iso_date(data["start"]), parse_iso_date(data["end"])
        else:
            raise ValidationError("start and end (or week) are required")

        employee_id = data.get("employee_id")
        count = service.auto_generate(
            start=start,
            end=end,
            employee_id=int(employee_id) if employee_id is not None else None,
            replace_existing=_parse_flag(data.get("replace_existing", True), "replace_existing"),
        )
        return {"generated": count, "start": start, "end": end}, 201

    @app.route("/api/shifts/<int:shift_id>/copy-next-week", methods=["POST"], endpoint="shifts_copy_next_week")
    @json_endpoint
    def shifts_copy_next_week(shift_id: int):
        return {"shift_id": service.copy_to_next_week(shift_id)}, 201

    @app.route("/api/shifts/<int:shift_id>/cancel", methods=["POST"], endpoint="shifts_cancel")
    @json_endpoint
    def shifts_cancel(shift_id: int):
        service.cancel(shift_id)
        return {"shift_id": shift_id}
