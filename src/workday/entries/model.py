from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional


def entry_id_for(user_id: str, work_date: date) -> str:
    """Deterministic id: the same (user, day) always maps to the same entry id."""
    return str(uuid.uuid5(uuid.NAMESPACE_DNS, f"{user_id}-{work_date.isoformat()}"))


def add_ids(ids: Iterable[str], extra: Iterable[str]) -> tuple[str, ...]:
    """Append ids not already present, keeping the existing order."""
    out = list(ids)
    for task_id in extra:
        if task_id not in out:
            out.append(task_id)
    return tuple(out)


def remove_ids(ids: Iterable[str], drop: Iterable[str]) -> tuple[str, ...]:
    drop = set(drop)
    return tuple(task_id for task_id in ids if task_id not in drop)


@dataclass(frozen=True)
class WorkEntry:
    """Per-user, per-day record of pending/finished tasks and attendance times.

    ``completed_task_ids`` is not disjoint from ``assigned_task_ids``: a task
    finished on this day may stay listed as assigned as a historical record.
    """

    entry_id: str
    user_id: str
    work_date: date
    assigned_task_ids: tuple[str, ...] = ()
    completed_task_ids: tuple[str, ...] = ()
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    is_absent: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def empty(cls, user_id: str, work_date: date) -> "WorkEntry":
        return cls(entry_id=entry_id_for(user_id, work_date), user_id=user_id, work_date=work_date)

    @property
    def unfinished_task_ids(self) -> tuple[str, ...]:
        return remove_ids(self.assigned_task_ids, self.completed_task_ids)

    def is_assigned(self, task_id: str) -> bool:
        return task_id in self.assigned_task_ids

    def is_completed(self, task_id: str) -> bool:
        return task_id in self.completed_task_ids


@dataclass(frozen=True)
class TaskCompletionRecord:
    """Append-only completion fact; survives deletion of the task itself."""

    record_id: str
    task_id: str
    user_id: str
    completed_at: datetime
    notes: Optional[str] = None


@dataclass(frozen=True)
class EntryFilter:
    user_id: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    team: Optional[str] = None
