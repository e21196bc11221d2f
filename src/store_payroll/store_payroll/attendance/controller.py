from __future__ import annotations

from flask import Flask, request

from ..common.api import json_endpoint
from ..common.datetime_utils import parse_iso_datetime
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    actions = {
        "clock-in": service.clock_in,
        "break-start": service.start_break,
        "break-end": service.end_break,
        "overtime": service.start_overtime,
        "clock-out": service.clock_out,
        "force-clock-out": service.force_clock_out,
    }

    def _status_payload(employee_id: int) -> dict:
        return {
            "employee_id": employee_id,
            "status": service.current_status(employee_id),
            "open_record": service.open_record(employee_id),
        }

    @app.route("/api/timeclock/<int:employee_id>", methods=["GET"], endpoint="timeclock_status")
    @json_endpoint
    def timeclock_status(employee_id: int):
        service.check_overtime(employee_id)
        return _status_payload(employee_id)

    @app.route("/api/timeclock/<int:employee_id>/<action>", methods=["POST"], endpoint="timeclock_action")
    @json_endpoint
    def timeclock_action(employee_id: int, action: str):
        handler = actions.get(action)
        if handler is None:
            raise ValidationError(f"Unknown time clock action: {action}")
        data = request.get_json(silent=True) or {}
        # Kiosks that were offline replay their punches with the original timestamp.
        now = parse_iso_datetime(data["timestamp"]) if data.get("timestamp") else None
        record = handler(employee_id, now=now)
        return {**_status_payload(employee_id), "record": record}

    @app.route("/api/time-records/<int:record_id>/submit", methods=["POST"], endpoint="time_record_submit")
    @json_endpoint
    def time_record_submit(record_id: int):
        data = request.get_json(silent=True) or {}
        return service.submit_for_approval(record_id, notes=str(data.get("notes") or ""))

    @app.route("/api/time-records/<int:record_id>/approve", methods=["POST"], endpoint="time_record_approve")
    @json_endpoint
    def time_record_approve(record_id: int):
        data = request.get_json(silent=True) or {}
        return service.approve(record_id, approved_by=str(data.get("approved_by") or ""))
