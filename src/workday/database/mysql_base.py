from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from datetime import datetime, time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, roll back and raise StoreError on failure."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _quietly(conn.rollback, "rollback")
        raise StoreError(str(exc)) from exc
    except Exception:
        _quietly(conn.rollback, "rollback")
        raise
    finally:
        _quietly(conn.close, "close")


def _quietly(action, name: str) -> None:
    # A lost connection also fails rollback/close; the server drops the open transaction itself.
    try:
        action()
    except mysql.connector.Error:
        logger.warning("Connection %s failed", name, exc_info=True)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[str]:
    """Normalize MySQL TIME values to an HH:MM string.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value.strftime("%H:%M")

    if isinstance(value, timedelta):
        total_minutes = (int(value.total_seconds()) % 86400) // 60
        return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        return f"{int(parts[0]):02d}:{int(parts[1]):02d}"

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def load_id_list(value: Any) -> tuple[str, ...]:
    """Decode a JSON column holding a list of ids (connector may return str or bytes)."""
    if value is None:
        return ()
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value) if value.strip() else []
    return tuple(str(v) for v in value)


def dump_id_list(ids) -> str:
    return json.dumps(list(ids))


def as_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))
