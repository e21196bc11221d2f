from __future__ import annotations

from flask import Flask

from ..common.api import json_endpoint
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.wage_rule_service

    @app.route("/api/wage-rules", methods=["GET"], endpoint="wage_rules_list")
    @json_endpoint
    def wage_rules_list():
        return service.list_rules()

    @app.route("/api/wage-rules/active", methods=["GET"], endpoint="wage_rules_active")
    @json_endpoint
    def wage_rules_active():
        return service.get_active_wage_rule()
