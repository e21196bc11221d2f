from __future__ import annotations

from datetime import datetime

from flask import Flask, request

from ..common.api import json_endpoint
from ..common.datetime_utils import now_local, parse_iso_date
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _parse_month(value: str):
        try:
            return datetime.strptime(value, "%Y-%m").date()
        except ValueError:
            raise ValidationError(f"Invalid month: {value!r}") from None

    def _employee_filter():
        value = request.args.get("employee_id")
        if not value:
            return None
        if not value.isdigit():
            raise ValidationError(f"Invalid employee_id: {value!r}")
        return int(value)

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_report")
    @json_endpoint
    def payroll_report():
        employee_id = _employee_filter()
        service = container.payroll_report_service

        if request.args.get("start") and request.args.get("end"):
            return service.build_report(
                start=parse_iso_date(request.args["start"]),
                end=parse_iso_date(request.args["end"]),
                employee_id=employee_id,
            )

        month = request.args.get("month")
        month_date = _parse_month(month) if month else now_local(container.settings.timezone).date()
        return service.build_monthly_report(month=month_date, employee_id=employee_id)

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @json_endpoint
    def dashboard():
        today = now_local(container.settings.timezone).date()
        service = container.dashboard_service
        return {"stats": service.build_stats(today), "weekly": service.weekly_stats(today)}
