from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import Optional

from ..common.datetime_utils import iter_days
from ..common.locks import UserLocks
from ..completion.service import CompletionTracker
from ..core.constants import REOPEN_CREATE_DAYS, REOPEN_SCAN_DAYS
from ..entries.model import EntryFilter, add_ids, remove_ids
from ..entries.repository import WorkEntryRepository
from .model import PropagationResult

logger = logging.getLogger(__name__)


class CompletionPropagator:
    """Keeps a task's presence in other days' pending lists in step with its completion.

    Completing removes the task from every later entry that lists it. Reopening
    scans from the due date to REOPEN_SCAN_DAYS after the reopen day, adding the
    task to existing entries, but it only creates missing entries up to
    REOPEN_CREATE_DAYS after the reopen day. Days 8..14 without an entry are
    left alone, so the task does not appear there.
    """

    def __init__(
        self,
        entries: WorkEntryRepository,
        tracker: CompletionTracker,
        *,
        locks: UserLocks | None = None,
    ):
        self._entries = entries
        self._tracker = tracker
        self._locks = locks or UserLocks()

    def propagate_completion(
        self,
        user_id: str,
        completion_date: date,
        task_id: str,
        task_due_date: date,
        notes: Optional[str] = None,
    ) -> PropagationResult:
        with self._locks.hold(user_id):
            self._tracker.mark_completed(user_id, completion_date, task_id, notes)

            later = self._entries.list(EntryFilter(user_id=user_id, date_from=completion_date + timedelta(days=1)))
            updated: list[date] = []
            for entry in later:
                if entry.work_date <= completion_date or not entry.is_assigned(task_id):
                    continue
                self._entries.save(replace(entry, assigned_task_ids=remove_ids(entry.assigned_task_ids, [task_id])))
                updated.append(entry.work_date)

        logger.info(
            "Task %s (due %s) completed by %s on %s; removed from %d later days",
            task_id,
            task_due_date,
            user_id,
            completion_date,
            len(updated),
        )
        return PropagationResult(task_id=task_id, updated=tuple(updated))

    def propagate_reopen(self, user_id: str, reopen_date: date, task_id: str, task_due_date: date) -> PropagationResult:
        with self._locks.hold(user_id):
            self._tracker.mark_uncompleted(user_id, reopen_date, task_id)

            range_start = min(task_due_date, reopen_date)
            range_end = reopen_date + timedelta(days=REOPEN_SCAN_DAYS)
            existing = {
                e.work_date: e
                for e in self._entries.list(EntryFilter(user_id=user_id, date_from=range_start, date_to=range_end))
            }

            updated: list[date] = []
            created: list[date] = []
            for day in iter_days(range_start, range_end):
                if day < task_due_date:
                    continue

                entry = existing.get(day)
                if entry is not None:
                    if entry.is_assigned(task_id) or entry.is_completed(task_id):
                        continue
                    self._entries.save(replace(entry, assigned_task_ids=add_ids(entry.assigned_task_ids, [task_id])))
                    updated.append(day)
                elif (day - reopen_date).days <= REOPEN_CREATE_DAYS:
                    entry = self._entries.get_or_create(user_id, day)
                    self._entries.save(replace(entry, assigned_task_ids=add_ids(entry.assigned_task_ids, [task_id])))
                    created.append(day)

        logger.info(
            "Task %s reopened by %s on %s; added to %d existing and %d new days",
            task_id,
            user_id,
            reopen_date,
            len(updated),
            len(created),
        )
        return PropagationResult(task_id=task_id, updated=tuple(updated), created=tuple(created))
