from __future__ import annotations

from flask import Flask, request

from ..common.api import json_endpoint
from ..container import Container


def register(app: Flask, container: Container) -> None:
    repo = container.employees_repo

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @json_endpoint
    def employees_list():
        if request.args.get("active") == "1":
            return repo.list_active()
        return repo.list_all()
