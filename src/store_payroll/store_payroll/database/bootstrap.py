"""Schema and seed loading for a fresh store database."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Iterator

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

SQL_DIR = Path(__file__).resolve().parents[4] / "database"
SCHEMA_PATH = SQL_DIR / "schema.sql"
SEED_PATH = SQL_DIR / "seed.sql"


def _strip_database_statements(sql: str) -> str:
    # The target database comes from DB_CONFIG, not from the file.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    return re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)


def _strip_comment_lines(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a script on ';' outside of quoted strings."""
    buf: list[str] = []
    quote = ""
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(conn: DatabaseConnection, statements: Iterable[str]) -> int:
    count = 0
    cnx = conn.connect()
    try:
        cur = cnx.cursor()
        for stmt in statements:
            cur.execute(stmt)
            count += 1
        cnx.commit()
    finally:
        cnx.close()
    return count


def _load(path: str | Path) -> list[str]:
    sql = Path(path).read_text(encoding="utf-8")
    return list(iter_sql_statements(_strip_comment_lines(_strip_database_statements(sql))))


def ensure_database_exists(db_config: dict) -> None:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    cnx = conn.connect(with_database=False)
    try:
        cur = cnx.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        cnx.commit()
    finally:
        cnx.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    count = _run_script(DatabaseConnection(DBConfig.from_dict(db_config)), _load(schema_path))
    logger.info("Applied %s (%s statements)", Path(schema_path).name, count)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path = SEED_PATH) -> None:
    count = _run_script(DatabaseConnection(DBConfig.from_dict(db_config)), _load(seed_path))
    logger.info("Applied %s (%s statements)", Path(seed_path).name, count)


def list_tables(db_config: dict) -> list[str]:
    cnx = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = cnx.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        cnx.close()
