from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import EntryFilter, TaskCompletionRecord, WorkEntry


class WorkEntryRepository(Protocol):
    def get(self, user_id: str, work_date: date) -> Optional[WorkEntry]:
        raise NotImplementedError

    def get_or_create(self, user_id: str, work_date: date) -> WorkEntry:
        """Return the entry, inserting an empty one first if none exists."""

        raise NotImplementedError

    def save(self, entry: WorkEntry) -> WorkEntry:
        """Upsert by (user_id, work_date); refreshes updated_at."""

        raise NotImplementedError

    def list(self, entry_filter: EntryFilter) -> Sequence[WorkEntry]:
        """Entries matching the filter, ordered by work_date ascending."""

        raise NotImplementedError


class CompletionRepository(Protocol):
    def append(self, record: TaskCompletionRecord) -> TaskCompletionRecord:
        raise NotImplementedError

    def delete_latest(self, task_id: str, user_id: str) -> bool:
        """Remove the most recent record for (task, user); False when there is none."""

        raise NotImplementedError

    def list_for_task(self, task_id: str) -> Sequence[TaskCompletionRecord]:
        raise NotImplementedError
