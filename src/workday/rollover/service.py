from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import Iterable

from ..common.datetime_utils import iter_days, parse_iso_date, week_days
from ..common.locks import UserLocks
from ..common.results import BatchResult, ItemError
from ..core.constants import CATCH_UP_MAX_DAYS, DAYS_IN_WEEK, ROLLOVER_EPOCH
from ..core.exceptions import DomainError, RangeError, ValidationError
from ..entries.model import add_ids, remove_ids
from ..entries.repository import WorkEntryRepository
from ..users.repository import UserDirectory
from .model import RolloverResult
from .repository import RolloverTrackingRepository

logger = logging.getLogger(__name__)


class RolloverEngine:
    """Carries unfinished tasks forward one day at a time.

    Nothing here runs on a timer: rollover happens only when a caller asks.
    """

    def __init__(
        self,
        entries: WorkEntryRepository,
        tracking: RolloverTrackingRepository | None = None,
        *,
        directory: UserDirectory | None = None,
        locks: UserLocks | None = None,
    ):
        self._entries = entries
        self._tracking = tracking
        self._directory = directory
        self._locks = locks or UserLocks()

    def rollover_day(self, user_id: str, from_date: date, to_date: date) -> RolloverResult:
        """Move (assigned - completed) of ``from_date`` onto ``to_date``.

        Not idempotent across different destinations: callers must roll a
        given source day over at most once. Repeating the same call is a no-op
        because the source no longer has unfinished tasks.
        """
        if to_date <= from_date:
            raise RangeError(f"Rollover target {to_date} must be after {from_date}")

        with self._locks.hold(user_id):
            source = self._entries.get(user_id, from_date)
            unfinished = source.unfinished_task_ids if source else ()
            if not unfinished:
                logger.debug("Nothing to roll over for %s from %s", user_id, from_date)
                return RolloverResult(from_date=from_date, to_date=to_date)

            target = self._entries.get_or_create(user_id, to_date)
            self._entries.save(replace(target, assigned_task_ids=add_ids(target.assigned_task_ids, unfinished)))
            # Only completed-task records remain on the source day.
            self._entries.save(replace(source, assigned_task_ids=remove_ids(source.assigned_task_ids, unfinished)))

        logger.info("Rolled over %d tasks for %s: %s -> %s", len(unfinished), user_id, from_date, to_date)
        return RolloverResult(from_date=from_date, to_date=to_date, moved=unfinished)

    def rollover_week(self, user_id: str, week_start: date) -> BatchResult:
        """Chain day 1 -> 2 -> ... -> 7 of the week, skipping days with nothing unfinished."""
        days = week_days(week_start, length=DAYS_IN_WEEK)
        with self._locks.hold(user_id):
            return self._roll_pairs(user_id, zip(days, days[1:]))

    def catch_up(self, user_id: str, target_date: date) -> BatchResult:
        """Roll every day pair from the last processed day up to ``target_date``.

        Walks back at most CATCH_UP_MAX_DAYS. The tracking marker only advances
        when every day succeeded, so a failed run can simply be repeated.
        """
        if self._tracking is None:
            raise ValidationError("Catch-up rollover needs a rollover tracking store")

        with self._locks.hold(user_id):
            last = self._tracking.get_last_rollover(user_id) or parse_iso_date(ROLLOVER_EPOCH)
            if last >= target_date:
                logger.debug("Rollover for %s already processed up to %s", user_id, last)
                return BatchResult()

            start = max(last, target_date - timedelta(days=CATCH_UP_MAX_DAYS))
            pairs = ((day - timedelta(days=1), day) for day in iter_days(start + timedelta(days=1), target_date))
            result = self._roll_pairs(user_id, pairs)

            if result.ok:
                self._tracking.set_last_rollover(user_id, target_date)
            else:
                logger.warning("Catch-up for %s stopped short of %s: %d failed days", user_id, target_date, len(result.errors))
        return result

    def catch_up_all(self, target_date: date) -> BatchResult:
        if self._directory is None:
            raise ValidationError("Catch-up for all users needs a user directory")

        result = BatchResult()
        for user in self._directory.list_active():
            try:
                per_user = self.catch_up(user.user_id, target_date)
            except DomainError as exc:
                logger.warning("Catch-up failed for %s", user.user_id, exc_info=True)
                result.errors.append(ItemError(user.user_id, str(exc)))
                continue

            if per_user.ok:
                result.processed.append(user.user_id)
            else:
                result.errors.append(ItemError(user.user_id, "; ".join(f"{e.key}: {e.message}" for e in per_user.errors)))

        logger.info(
            "Catch-up to %s finished: %d ok, %d failed", target_date, len(result.processed), len(result.errors)
        )
        return result

    def _roll_pairs(self, user_id: str, pairs: Iterable[tuple[date, date]]) -> BatchResult:
        result = BatchResult()
        for from_date, to_date in pairs:
            key = f"{from_date.isoformat()}->{to_date.isoformat()}"
            try:
                source = self._entries.get(user_id, from_date)
                if not source or not source.unfinished_task_ids:
                    result.skipped.append(key)
                    continue
                self.rollover_day(user_id, from_date, to_date)
                result.processed.append(key)
            except DomainError as exc:
                logger.warning("Rollover %s failed for %s", key, user_id, exc_info=True)
                result.errors.append(ItemError(key, str(exc)))
        return result
