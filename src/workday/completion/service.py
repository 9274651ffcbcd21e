from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.locks import UserLocks
from ..common.validators import require_non_empty
from ..core.enums import TaskStatus
from ..entries.model import TaskCompletionRecord, WorkEntry, add_ids, remove_ids
from ..entries.repository import CompletionRepository, WorkEntryRepository
from .gateway import TaskStatusGateway

logger = logging.getLogger(__name__)


class CompletionTracker:
    """Moves a task between a day's assigned and completed lists.

    Only the given day is touched; spreading the change to other days is the
    propagator's job.
    """

    def __init__(
        self,
        entries: WorkEntryRepository,
        completions: CompletionRepository,
        *,
        task_status: TaskStatusGateway | None = None,
        locks: UserLocks | None = None,
    ):
        self._entries = entries
        self._completions = completions
        self._task_status = task_status
        self._locks = locks or UserLocks()

    def mark_completed(
        self,
        user_id: str,
        work_date: date,
        task_id: str,
        notes: Optional[str] = None,
        *,
        now: datetime | None = None,
    ) -> WorkEntry:
        task_id = require_non_empty(task_id, "task_id")
        with self._locks.hold(user_id):
            entry = self._entries.get_or_create(user_id, work_date)
            was_completed = entry.is_completed(task_id)

            if not was_completed:
                self._completions.append(
                    TaskCompletionRecord(
                        record_id=str(uuid.uuid4()),
                        task_id=task_id,
                        user_id=user_id,
                        completed_at=now or now_local(),
                        notes=(notes or "").strip() or None,
                    )
                )

            updated = replace(
                entry,
                assigned_task_ids=remove_ids(entry.assigned_task_ids, [task_id]),
                completed_task_ids=add_ids(entry.completed_task_ids, [task_id]),
            )
            if updated != entry:
                entry = self._entries.save(updated)
                logger.info("Task %s completed by %s on %s", task_id, user_id, work_date)
            else:
                logger.debug("Task %s already completed by %s on %s", task_id, user_id, work_date)

        if not was_completed and self._task_status:
            self._task_status.set_status(task_id, TaskStatus.COMPLETED)
        return entry

    def mark_uncompleted(self, user_id: str, work_date: date, task_id: str) -> WorkEntry:
        task_id = require_non_empty(task_id, "task_id")
        with self._locks.hold(user_id):
            entry = self._entries.get_or_create(user_id, work_date)
            was_completed = entry.is_completed(task_id)
            # Records of completions on other days stay untouched.
            if was_completed and not self._completions.delete_latest(task_id, user_id):
                logger.debug("No completion record to remove for task %s / user %s", task_id, user_id)

            updated = replace(
                entry,
                completed_task_ids=remove_ids(entry.completed_task_ids, [task_id]),
                assigned_task_ids=add_ids(entry.assigned_task_ids, [task_id]),
            )
            if updated != entry:
                entry = self._entries.save(updated)
                logger.info("Task %s reopened for %s on %s", task_id, user_id, work_date)

        if was_completed and self._task_status:
            self._task_status.set_status(task_id, TaskStatus.IN_PROGRESS)
        return entry
