from __future__ import annotations

from typing import Protocol

from ..core.enums import TaskStatus


class TaskStatusGateway(Protocol):
    """Hook into the task collaborator, which owns the task's own status field."""

    def set_status(self, task_id: str, status: TaskStatus) -> None:
        raise NotImplementedError
