"""Cursor handling and column conversions shared by the MySQL repositories."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, time, timedelta
from typing import Any, Optional

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (connection, cursor); commit on success, roll back on any error."""
    cnx = conn_factory.connect()
    cur = cnx.cursor(dictionary=dictionary)
    try:
        yield cnx, cur
        cnx.commit()
    except Exception:
        logger.debug("Rolling back transaction on %s", conn_factory.config.database)
        cnx.rollback()
        raise
    finally:
        cur.close()
        cnx.close()


def fetchone(cur) -> Optional[dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> list[dict[str, Any]]:
    return list(cur.fetchall() or ())


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns come back as time, timedelta or 'HH:MM[:SS]' depending on the connector."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        # TIME may exceed 24h; only the time of day matters for shifts.
        return (datetime.min + timedelta(seconds=int(value.total_seconds()) % 86400)).time()
    if isinstance(value, str):
        hh, mm, *rest = value.strip().split(":") + [""]
        if not hh or not mm:
            raise ValueError(f"Invalid time string: {value!r}")
        return time(int(hh), int(mm), int(rest[0]) if rest and rest[0] else 0)
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def parse_weekday_csv(value: Optional[str]) -> frozenset[int]:
    """'1,2,3' -> {1, 2, 3}; weekday sets are stored as plain CSV columns."""
    if not value:
        return frozenset()
    return frozenset(int(part) for part in str(value).split(",") if part.strip())
