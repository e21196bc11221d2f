from datetime import date, datetime

import pytest

from src.store_payroll.store_payroll.container import wire_container
from src.store_payroll.store_payroll.core.enums import TimeRecordStatus
from src.store_payroll.store_payroll.core.settings import PayrollSettings
from src.store_payroll.store_payroll.main import create_app
from src.store_payroll.store_payroll.shifts.controller import _parse_flag
from tests.fakes import (
    InMemoryEmployees,
    InMemoryShifts,
    InMemoryTimeRecords,
    InMemoryWageRules,
    make_employee,
    make_record,
)


def build_client(monkeypatch, rules):
    monkeypatch.setenv("APP_ENV", "testing")
    records = InMemoryTimeRecords(
        [make_record(1, datetime(2026, 3, 2, 9), datetime(2026, 3, 2, 19), break_minutes=60, status=TimeRecordStatus.COMPLETED)]
    )
    container = wire_container(
        settings=PayrollSettings(),
        employees_repo=InMemoryEmployees([make_employee(1), make_employee(2)]),
        time_records_repo=records,
        shifts_repo=InMemoryShifts(),
        wage_rules_repo=InMemoryWageRules(rules),
    )
    app = create_app(container)
    return app.test_client()


@pytest.fixture
def client(monkeypatch, standard_rule):
    return build_client(monkeypatch, [standard_rule])


def test_time_clock_flow(client):
    res = client.post("/api/timeclock/2/clock-in")
    assert res.status_code == 200
    body = res.get_json()
    assert body["success"] is True
    assert body["data"]["status"] == "working"
    assert body["data"]["record"]["record_id"] is not None

    res = client.post("/api/timeclock/2/clock-in")
    assert res.status_code == 409
    assert res.get_json()["success"] is False

    res = client.post("/api/timeclock/2/break-start")
    assert res.get_json()["data"]["status"] == "break"

    res = client.get("/api/timeclock/2")
    assert res.status_code == 200
    assert res.get_json()["data"]["status"] == "break"

    res = client.post("/api/timeclock/2/force-clock-out")
    assert res.get_json()["data"]["status"] == "offline"
    assert res.get_json()["data"]["record"]["status"] == "completed"


def test_unknown_action_and_employee(client):
    assert client.post("/api/timeclock/1/teleport").status_code == 400
    assert client.post("/api/timeclock/99/clock-in").status_code == 400


def test_submit_and_approve(client):
    res = client.post("/api/time-records/1/submit", json={"notes": "left late for inventory"})
    assert res.status_code == 200
    assert res.get_json()["data"]["status"] == "pending_approval"

    res = client.post("/api/time-records/1/approve", json={"approved_by": "店長"})
    assert res.get_json()["data"]["approved_by"] == "店長"

    assert client.post("/api/time-records/1/approve", json={"approved_by": "店長"}).status_code == 400


def test_payroll_report(client):
    res = client.get("/api/payroll?start=2026-03-01&end=2026-03-31&employee_id=1")

    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["start"] == "2026-03-01"
    assert data["actual"][0]["total_pay"] == 9250
    assert data["actual"][0]["total_hours"] == 9.0
    assert data["summary"]["payroll_difference"] == 9250


def test_payroll_monthly_report(client):
    data = client.get("/api/payroll?month=2026-02").get_json()["data"]

    assert (data["start"], data["end"]) == ("2026-02-01", "2026-02-28")


def test_payroll_input_errors(client):
    assert client.get("/api/payroll?start=2026-03-31&end=2026-03-01").status_code == 400
    assert client.get("/api/payroll?start=yesterday&end=2026-03-01").status_code == 400
    assert client.get("/api/payroll?month=March").status_code == 400
    assert client.get("/api/payroll?month=2026-03&employee_id=abc").status_code == 400


def test_payroll_without_active_rule(monkeypatch):
    client = build_client(monkeypatch, [])

    res = client.get("/api/payroll?month=2026-03")

    assert res.status_code == 422
    assert res.get_json()["success"] is False


def test_generate_shifts(client):
    res = client.post("/api/shifts/generate", json={"start": "2026-03-01", "end": "2026-03-07"})

    assert res.status_code == 201
    assert res.get_json()["data"]["generated"] == 10

    assert client.post("/api/shifts/generate", json={"start": "2026-03-01"}).status_code == 400


def test_dashboard(client):
    res = client.get("/api/dashboard")

    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["stats"]["total_employees"] == 2
    assert len(data["weekly"]) == 7
    assert date.fromisoformat(data["weekly"][0]["work_date"])


def test_punch_with_kiosk_timestamp(client):
    client.post("/api/timeclock/2/clock-in", json={"timestamp": "2026-03-04T09:00:00"})
    res = client.post("/api/timeclock/2/clock-out", json={"timestamp": "2026-03-04T19:00:00+09:00"})

    record = res.get_json()["data"]["record"]
    assert record["clock_in"] == "2026-03-04T09:00:00"
    assert record["working_hours"] == 10.0
    assert record["overtime_hours"] == 2.0

    assert client.post("/api/timeclock/2/clock-in", json={"timestamp": "soon"}).status_code == 400


def test_plan_single_shift_and_generate_by_week(client):
    res = client.post(
        "/api/shifts",
        json={"employee_id": 1, "work_date": "2026-03-07", "start_time": "22:00", "end_time": "06:00", "type": "holiday"},
    )
    assert res.status_code == 201
    assert res.get_json()["data"]["shift_id"] == 1

    assert client.post("/api/shifts", json={"employee_id": 99, "work_date": "2026-03-07",
                                            "start_time": "09:00", "end_time": "18:00"}).status_code == 400
    assert client.post("/api/shifts", json={"employee_id": 1}).status_code == 400

    res = client.post("/api/shifts/generate", json={"week": "2026-03-04", "replace_existing": False})
    data = res.get_json()["data"]
    assert (data["start"], data["end"], data["generated"]) == ("2026-03-01", "2026-03-07", 10)


def test_wage_rules_and_employees(client):
    rules = client.get("/api/wage-rules").get_json()["data"]
    assert [r["name"] for r in rules] == ["基本賃金規則"]
    assert rules[0]["conditions"] == {"min_daily_hours": None, "weekdays": None}

    active = client.get("/api/wage-rules/active").get_json()["data"]
    assert active["overtime_rate"] == 1.25

    employees = client.get("/api/employees").get_json()["data"]
    assert [e["code"] for e in employees] == ["EMP001", "EMP002"]
    assert employees[0]["fixed_work_days"] == [1, 2, 3, 4, 5]

@pytest.mark.parametrize("value,expected", [(False, False), ("false", False), ("0", False), (True, True), ("true", True)])
def test_replace_existing_flag_parsing(value, expected):
    assert _parse_flag(value, "replace_existing") is expected


def test_generate_rejects_unreadable_replace_existing(client):
    week = {"start": "2026-03-01", "end": "2026-03-07"}

    assert client.post("/api/shifts/generate", json={**week, "replace_existing": "false"}).status_code == 201
    assert client.post("/api/shifts/generate", json={**week, "replace_existing": "maybe"}).status_code == 400
