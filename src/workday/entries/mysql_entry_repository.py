from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import now_local
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    as_datetime,
    db_cursor,
    dump_id_list,
    fetchall,
    fetchone,
    load_id_list,
    normalize_mysql_time,
)
from .model import EntryFilter, WorkEntry
from .repository import WorkEntryRepository

_COLUMNS = """
    e.id, e.user_id, e.work_date, e.assigned_tasks, e.completed_tasks,
    e.check_in_time, e.check_out_time, e.is_absent, e.created_at, e.updated_at
"""


def _row_to_entry(r: Dict[str, Any]) -> WorkEntry:
    return WorkEntry(
        entry_id=str(r["id"]),
        user_id=str(r["user_id"]),
        work_date=r["work_date"],
        assigned_task_ids=load_id_list(r.get("assigned_tasks")),
        completed_task_ids=load_id_list(r.get("completed_tasks")),
        check_in_time=normalize_mysql_time(r.get("check_in_time")),
        check_out_time=normalize_mysql_time(r.get("check_out_time")),
        is_absent=bool(r.get("is_absent")),
        created_at=as_datetime(r.get("created_at")),
        updated_at=as_datetime(r.get("updated_at")),
    )


class MySQLWorkEntryRepository(WorkEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: str, work_date: date) -> Optional[WorkEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_work_entries e
                WHERE e.user_id=%s AND e.work_date=%s
                """,
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def get_or_create(self, user_id: str, work_date: date) -> WorkEntry:
        now = now_local()
        empty = WorkEntry.empty(user_id, work_date)
        with db_cursor(self._conn_factory) as (_, cur):
            # INSERT IGNORE keeps the existing row when another writer got there first.
            cur.execute(
                """
                INSERT IGNORE INTO daily_work_entries(
                    id, user_id, work_date, assigned_tasks, completed_tasks,
                    check_in_time, check_out_time, is_absent, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,NULL,NULL,0,%s,%s)
                """,
                (empty.entry_id, user_id, work_date, "[]", "[]", now, now),
            )
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_work_entries e
                WHERE e.user_id=%s AND e.work_date=%s
                """,
                (user_id, work_date),
            )
            return _row_to_entry(fetchone(cur))

    def save(self, entry: WorkEntry) -> WorkEntry:
        now = now_local()
        created_at = entry.created_at or now
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO daily_work_entries(
                    id, user_id, work_date, assigned_tasks, completed_tasks,
                    check_in_time, check_out_time, is_absent, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    assigned_tasks=VALUES(assigned_tasks),
                    completed_tasks=VALUES(completed_tasks),
                    check_in_time=VALUES(check_in_time),
                    check_out_time=VALUES(check_out_time),
                    is_absent=VALUES(is_absent),
                    updated_at=VALUES(updated_at)
                """,
                (
                    entry.entry_id,
                    entry.user_id,
                    entry.work_date,
                    dump_id_list(entry.assigned_task_ids),
                    dump_id_list(entry.completed_task_ids),
                    entry.check_in_time,
                    entry.check_out_time,
                    1 if entry.is_absent else 0,
                    created_at,
                    now,
                ),
            )
        return replace(entry, created_at=created_at, updated_at=now)

    def list(self, entry_filter: EntryFilter) -> Sequence[WorkEntry]:
        clauses = ["1=1"]
        params: list[object] = []
        join = ""

        if entry_filter.user_id is not None:
            clauses.append("e.user_id=%s")
            params.append(entry_filter.user_id)
        if entry_filter.date_from is not None:
            clauses.append("e.work_date >= %s")
            params.append(entry_filter.date_from)
        if entry_filter.date_to is not None:
            clauses.append("e.work_date <= %s")
            params.append(entry_filter.date_to)
        if entry_filter.team is not None:
            join = "JOIN users u ON u.user_id = e.user_id"
            clauses.append("u.team=%s")
            params.append(entry_filter.team)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_work_entries e
                {join}
                WHERE {where}
                ORDER BY e.work_date ASC, e.user_id ASC
                """,
                tuple(params),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]
