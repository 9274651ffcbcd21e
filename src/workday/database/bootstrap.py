from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from .connection import DatabaseConnection
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a SQL script on ';' outside of quotes; '--' comment lines are dropped."""
    buf: list[str] = []
    quote = None

    for line in sql.splitlines(keepends=True):
        if quote is None and line.lstrip().startswith("--"):
            continue
        for ch in line:
            if quote:
                buf.append(ch)
                if ch == quote:
                    quote = None
                continue
            if ch in ("'", '"'):
                quote = ch
                buf.append(ch)
                continue
            if ch == ";":
                stmt = "".join(buf).strip()
                buf.clear()
                if stmt:
                    yield stmt
                continue
            buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    name = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> int:
    """Apply schema.sql (CREATE ... IF NOT EXISTS, so re-running is safe)."""
    ensure_database_exists(conn_factory)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    count = 0
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
    logger.info("Schema applied from %s (%d statements)", schema_path, count)
    return count
