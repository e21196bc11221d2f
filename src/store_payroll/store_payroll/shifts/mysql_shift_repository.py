from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import ShiftStatus, ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Shift
from .repository import ShiftRepository

_COLUMNS = "shift_id, employee_id, work_date, start_time, end_time, break_minutes, type, status, notes"


def _to_shift(r: dict) -> Shift:
    return Shift(
        shift_id=int(r["shift_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        break_minutes=int(r.get("break_minutes") or 0),
        type=ShiftType(r["type"]),
        status=ShiftStatus(r["status"]),
        notes=r.get("notes"),
    )


def _range_where(start_date: date, end_date: date, employee_id: Optional[int]) -> tuple[str, tuple]:
    clauses = ["work_date BETWEEN %s AND %s"]
    params: list[object] = [start_date, end_date]
    if employee_id is not None:
        clauses.append("employee_id=%s")
        params.append(int(employee_id))
    return " AND ".join(clauses), tuple(params)


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_shifts(
        self,
        employee_id: Optional[int] = None,
        *,
        start_date: date,
        end_date: date,
    ) -> Sequence[Shift]:
        where, params = _range_where(start_date, end_date, employee_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shifts
                WHERE {where}
                ORDER BY work_date ASC, start_time ASC
                """,
                params,
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def create_shift(self, shift: Shift) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(employee_id, work_date, start_time, end_time, break_minutes, type, status, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(shift.employee_id),
                    shift.work_date,
                    shift.start_time,
                    shift.end_time,
                    int(shift.break_minutes),
                    shift.type.value,
                    shift.status.value,
                    shift.notes,
                ),
            )
            return int(cur.lastrowid)

    def update_status(self, shift_id: int, status: ShiftStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE shifts SET status=%s WHERE shift_id=%s", (status.value, int(shift_id)))
            return cur.rowcount > 0

    def delete_range(self, *, start_date: date, end_date: date, employee_id: Optional[int] = None) -> int:
        where, params = _range_where(start_date, end_date, employee_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM shifts WHERE {where}", params)
            return int(cur.rowcount)
