from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import TimeRecordStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TimeRecord
from .repository import TimeRecordRepository

_COLUMNS = """
    record_id, employee_id, work_date, clock_in, clock_out, break_start, break_end,
    break_minutes, working_hours, overtime_hours, status, notes, approved_by
"""


def _to_record(r: dict) -> TimeRecord:
    return TimeRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        clock_in=r.get("clock_in"),
        clock_out=r.get("clock_out"),
        break_start=r.get("break_start"),
        break_end=r.get("break_end"),
        break_minutes=float(r.get("break_minutes") or 0),
        working_hours=float(r.get("working_hours") or 0),
        overtime_hours=float(r.get("overtime_hours") or 0),
        status=TimeRecordStatus(r["status"]),
        notes=r.get("notes"),
        approved_by=r.get("approved_by"),
    )


def _values(record: TimeRecord) -> tuple:
    return (
        record.clock_in,
        record.clock_out,
        record.break_start,
        record.break_end,
        record.break_minutes,
        record.working_hours,
        record.overtime_hours,
        record.status.value,
        record.notes,
        record.approved_by,
    )


class MySQLTimeRecordRepository(TimeRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_time_records(
        self,
        employee_id: Optional[int] = None,
        *,
        start_date: date,
        end_date: date,
    ) -> Sequence[TimeRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_records
                WHERE {where}
                ORDER BY work_date DESC, clock_in DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_time_record(self, record_id: int) -> Optional[TimeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_open_record(self, employee_id: int) -> Optional[TimeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_records
                WHERE employee_id=%s AND clock_in IS NOT NULL AND clock_out IS NULL
                ORDER BY clock_in DESC
                LIMIT 1
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_time_record(self, record: TimeRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_records(
                    employee_id, work_date, clock_in, clock_out, break_start, break_end,
                    break_minutes, working_hours, overtime_hours, status, notes, approved_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(record.employee_id), record.work_date, *_values(record)),
            )
            return int(cur.lastrowid)

    def update_time_record(self, record: TimeRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_records
                SET clock_in=%s, clock_out=%s, break_start=%s, break_end=%s, break_minutes=%s,
                    working_hours=%s, overtime_hours=%s, status=%s, notes=%s, approved_by=%s
                WHERE record_id=%s
                """,
                (*_values(record), int(record.record_id)),
            )
            return cur.rowcount > 0
