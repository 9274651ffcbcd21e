from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional, Sequence

from ..attendance.calculator import AttendanceCalculator
from ..attendance.model import DayStatus
from ..common.datetime_utils import now_local, require_range
from ..common.locks import UserLocks
from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from .model import EntryFilter, WorkEntry, add_ids, remove_ids
from .repository import WorkEntryRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyReport:
    entry: WorkEntry
    status: DayStatus


class WorkEntryService:
    def __init__(
        self,
        entries: WorkEntryRepository,
        *,
        locks: UserLocks | None = None,
        calculator: AttendanceCalculator | None = None,
    ):
        self._entries = entries
        self._locks = locks or UserLocks()
        self._calculator = calculator or AttendanceCalculator()

    def get_entry(self, user_id: str, work_date: date) -> WorkEntry:
        """Stored entry, or an unsaved empty one. Reading never creates rows."""
        return self._entries.get(user_id, work_date) or WorkEntry.empty(user_id, work_date)

    def require_entry(self, user_id: str, work_date: date) -> WorkEntry:
        entry = self._entries.get(user_id, work_date)
        if not entry:
            raise NotFoundError(f"No work entry for user {user_id} on {work_date}")
        return entry

    def get_or_create(self, user_id: str, work_date: date) -> WorkEntry:
        return self._entries.get_or_create(require_non_empty(user_id, "user_id"), work_date)

    def list_entries(self, user_id: str, date_from: date, date_to: date) -> Sequence[WorkEntry]:
        require_range(date_from, date_to)
        return self._entries.list(EntryFilter(user_id=user_id, date_from=date_from, date_to=date_to))

    def daily_report(self, user_id: str, work_date: date) -> DailyReport:
        entry = self.get_entry(user_id, work_date)
        return DailyReport(entry=entry, status=self._calculator.day_status(entry))

    def assign_task(self, user_id: str, work_date: date, task_id: str) -> WorkEntry:
        """Put a task on a day's pending list unless it is already assigned or completed there."""
        task_id = require_non_empty(task_id, "task_id")
        with self._locks.hold(user_id):
            entry = self.get_or_create(user_id, work_date)
            if entry.is_assigned(task_id):
                logger.debug("Task %s already assigned to %s on %s", task_id, user_id, work_date)
                return entry
            if entry.is_completed(task_id):
                logger.debug("Task %s already completed by %s on %s", task_id, user_id, work_date)
                return entry

            saved = self._entries.save(replace(entry, assigned_task_ids=add_ids(entry.assigned_task_ids, [task_id])))
            logger.info("Assigned task %s to %s on %s", task_id, user_id, work_date)
            return saved

    def forget_task(self, task_id: str, *, since: Optional[date] = None) -> list[WorkEntry]:
        """Strip a deleted task from pending lists dated on or after ``since`` (default today).

        Completed lists and completion records are history and stay untouched.
        """
        since = since or now_local().date()
        candidates = [e for e in self._entries.list(EntryFilter(date_from=since)) if e.is_assigned(task_id)]

        updated: list[WorkEntry] = []
        for candidate in candidates:
            with self._locks.hold(candidate.user_id):
                entry = self._entries.get(candidate.user_id, candidate.work_date)
                if not entry or not entry.is_assigned(task_id):
                    continue
                updated.append(
                    self._entries.save(replace(entry, assigned_task_ids=remove_ids(entry.assigned_task_ids, [task_id])))
                )

        logger.info("Removed deleted task %s from %d entries dated >= %s", task_id, len(updated), since)
        return updated
