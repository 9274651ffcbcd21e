from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_datetime, db_cursor, fetchall, fetchone
from .model import TaskCompletionRecord
from .repository import CompletionRepository


class MySQLCompletionRepository(CompletionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, record: TaskCompletionRecord) -> TaskCompletionRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO task_completions(id, task_id, user_id, completed_at, notes)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (record.record_id, record.task_id, record.user_id, record.completed_at, record.notes),
            )
        return record

    def delete_latest(self, task_id: str, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id FROM task_completions
                WHERE task_id=%s AND user_id=%s
                ORDER BY completed_at DESC
                LIMIT 1
                """,
                (task_id, user_id),
            )
            r = fetchone(cur)
            if not r:
                return False
            cur.execute("DELETE FROM task_completions WHERE id=%s", (r["id"],))
            return cur.rowcount > 0

    def list_for_task(self, task_id: str) -> Sequence[TaskCompletionRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, task_id, user_id, completed_at, notes
                FROM task_completions
                WHERE task_id=%s
                ORDER BY completed_at ASC
                """,
                (task_id,),
            )
            return [
                TaskCompletionRecord(
                    record_id=str(r["id"]),
                    task_id=str(r["task_id"]),
                    user_id=str(r["user_id"]),
                    completed_at=as_datetime(r["completed_at"]),
                    notes=r.get("notes"),
                )
                for r in fetchall(cur)
            ]
