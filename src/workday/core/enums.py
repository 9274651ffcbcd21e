from __future__ import annotations

from enum import Enum


class TaskStatus(str, Enum):
    """Task status pushed to the task collaborator when completion changes."""

    COMPLETED = "completed"
    IN_PROGRESS = "in_progress"
