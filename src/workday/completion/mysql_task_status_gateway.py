from __future__ import annotations

import logging

from ..core.enums import TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .gateway import TaskStatusGateway

logger = logging.getLogger(__name__)


class MySQLTaskStatusGateway(TaskStatusGateway):
    """Writes the status column of the task collaborator's ``tasks`` table."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def set_status(self, task_id: str, status: TaskStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE tasks SET status=%s WHERE task_id=%s", (status.value, task_id))
            if cur.rowcount == 0:
                logger.debug("Task %s not found while setting status %s", task_id, status.value)
