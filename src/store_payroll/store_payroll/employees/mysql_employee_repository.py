from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, parse_weekday_csv
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, code, name, email, role, department, hourly_wage, hire_date, status,
    fixed_work_days, fixed_days_off, work_start_time, work_end_time
"""


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        code=r["code"],
        name=r["name"],
        email=r.get("email"),
        role=r["role"],
        department=r["department"],
        hourly_wage=float(r["hourly_wage"]),
        hire_date=r["hire_date"],
        status=EmployeeStatus(r["status"]),
        fixed_work_days=parse_weekday_csv(r.get("fixed_work_days")),
        fixed_days_off=parse_weekday_csv(r.get("fixed_days_off")),
        work_start_time=normalize_mysql_time(r.get("work_start_time")),
        work_end_time=normalize_mysql_time(r.get("work_end_time")),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY code")
            return [_to_employee(r) for r in fetchall(cur)]

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE status=%s ORDER BY code",
                (EmployeeStatus.ACTIVE.value,),
            )
            return [_to_employee(r) for r in fetchall(cur)]
