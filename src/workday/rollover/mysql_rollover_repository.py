from __future__ import annotations

from datetime import date
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import RolloverTrackingRepository


class MySQLRolloverTrackingRepository(RolloverTrackingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_last_rollover(self, user_id: str) -> Optional[date]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT last_rollover_date FROM user_rollover WHERE user_id=%s", (user_id,))
            r = fetchone(cur)
            return r["last_rollover_date"] if r else None

    def set_last_rollover(self, user_id: str, last_date: date) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO user_rollover(user_id, last_rollover_date)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE last_rollover_date=VALUES(last_rollover_date)
                """,
                (user_id, last_date),
            )
