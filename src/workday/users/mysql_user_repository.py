from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserDirectory


def _row_to_user(r: Dict[str, Any]) -> User:
    return User(
        user_id=str(r["user_id"]),
        full_name=r["full_name"],
        team=r.get("team"),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLUserRepository(UserDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, full_name, team, is_active FROM users WHERE user_id=%s",
                (user_id,),
            )
            r = fetchone(cur)
            return _row_to_user(r) if r else None

    def list_active(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, team, is_active
                FROM users
                WHERE is_active=1
                ORDER BY full_name ASC
                """
            )
            return [_row_to_user(r) for r in fetchall(cur)]

    def list_team_members(self, team_id: str) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, team, is_active
                FROM users
                WHERE team=%s
                ORDER BY full_name ASC
                """,
                (team_id,),
            )
            return [_row_to_user(r) for r in fetchall(cur)]
