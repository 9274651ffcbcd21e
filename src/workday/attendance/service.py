from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import format_hhmm, now_local, require_range
from ..common.locks import UserLocks
from ..common.validators import normalize_hhmm
from ..core.exceptions import ValidationError
from ..entries.model import EntryFilter, WorkEntry
from ..entries.repository import WorkEntryRepository
from .calculator import AttendanceCalculator
from .model import AttendanceOverview, AttendanceSnapshot, AttendanceStats, EmployeeStats

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        entries: WorkEntryRepository,
        *,
        calculator: AttendanceCalculator | None = None,
        locks: UserLocks | None = None,
    ):
        self._entries = entries
        self._calculator = calculator or AttendanceCalculator()
        self._locks = locks or UserLocks()

    def update_check_in_out(
        self,
        user_id: str,
        work_date: date,
        check_in: Optional[str] = None,
        check_out: Optional[str] = None,
    ) -> WorkEntry:
        """Set check-in and/or check-out; ``None`` keeps the recorded value."""
        check_in = normalize_hhmm(check_in, "check_in")
        check_out = normalize_hhmm(check_out, "check_out")

        with self._locks.hold(user_id):
            entry = self._entries.get_or_create(user_id, work_date)
            if check_in is None and check_out is None:
                return entry

            new_in = check_in if check_in is not None else entry.check_in_time
            new_out = check_out if check_out is not None else entry.check_out_time
            if check_out is not None and not new_in:
                raise ValidationError("Cannot check out before checking in")

            updated = replace(
                entry,
                check_in_time=new_in,
                check_out_time=new_out,
                # A recorded check-in means the user is present that day.
                is_absent=False if check_in is not None else entry.is_absent,
            )
            saved = self._entries.save(updated)
        logger.info("Attendance for %s on %s: in=%s out=%s", user_id, work_date, new_in, new_out)
        return saved

    def check_in(self, user_id: str, *, now: datetime | None = None) -> WorkEntry:
        """Record the first check-in of the day; later calls leave it untouched."""
        now = now or now_local()
        today = now.date()
        with self._locks.hold(user_id):
            existing = self._entries.get(user_id, today)
            if existing and existing.check_in_time:
                logger.debug("%s already checked in on %s at %s", user_id, today, existing.check_in_time)
                return existing
            return self.update_check_in_out(user_id, today, check_in=format_hhmm(now))

    def check_out(self, user_id: str, *, now: datetime | None = None, check_out_time: Optional[str] = None) -> WorkEntry:
        now = now or now_local()
        return self.update_check_in_out(user_id, now.date(), check_out=check_out_time or format_hhmm(now))

    def mark_absent(self, user_id: str, work_date: date, is_absent: bool = True) -> WorkEntry:
        with self._locks.hold(user_id):
            entry = self._entries.get_or_create(user_id, work_date)
            updated = replace(
                entry,
                is_absent=bool(is_absent),
                check_in_time=None if is_absent else entry.check_in_time,
                check_out_time=None if is_absent else entry.check_out_time,
            )
            saved = self._entries.save(updated)
        logger.info("%s marked %s on %s", user_id, "absent" if is_absent else "not absent", work_date)
        return saved

    def clear_attendance(self, user_id: str, work_date: date) -> WorkEntry:
        with self._locks.hold(user_id):
            entry = self._entries.get_or_create(user_id, work_date)
            return self._entries.save(replace(entry, check_in_time=None, check_out_time=None))

    def status(self, user_id: str, work_date: date) -> AttendanceSnapshot:
        entry = self._entries.get(user_id, work_date)
        if not entry:
            return AttendanceSnapshot(
                user_id=user_id,
                work_date=work_date,
                check_in_time=None,
                check_out_time=None,
                is_absent=False,
            )
        return AttendanceSnapshot(
            user_id=user_id,
            work_date=work_date,
            check_in_time=entry.check_in_time,
            check_out_time=entry.check_out_time,
            is_absent=entry.is_absent,
            total_hours=self._calculator.hours_for(entry),
        )

    def overview(self, user_ids: Sequence[str], work_date: date) -> AttendanceOverview:
        present = absent = late = checked_out = 0
        for user_id in user_ids:
            status = self._calculator.day_status(self._entries.get(user_id, work_date))
            if status.absent:
                absent += 1
                continue
            present += 1
            late += int(status.late)
            checked_out += int(status.checked_out)

        return AttendanceOverview(
            work_date=work_date,
            present=present,
            absent=absent,
            late=late,
            checked_out=checked_out,
            total_employees=len(user_ids),
        )

    def stats(self, user_ids: Sequence[str], date_from: date, date_to: date) -> AttendanceStats:
        require_range(date_from, date_to)

        employee_stats: list[EmployeeStats] = []
        for user_id in user_ids:
            entries = self._entries.list(EntryFilter(user_id=user_id, date_from=date_from, date_to=date_to))
            present_days = 0
            total_hours = 0.0
            for entry in entries:
                status = self._calculator.day_status(entry)
                if status.present:
                    present_days += 1
                    total_hours += status.hours or 0.0

            employee_stats.append(
                EmployeeStats(
                    user_id=user_id,
                    present_days=present_days,
                    absent_days=len(entries) - present_days,
                    total_hours=round(total_hours, 2),
                    average_hours=round(total_hours / present_days, 2) if present_days else 0.0,
                )
            )

        total_present = sum(s.present_days for s in employee_stats)
        total_absent = sum(s.absent_days for s in employee_stats)
        total_hours = sum(s.total_hours for s in employee_stats)
        return AttendanceStats(
            total_working_days=total_present + total_absent,
            total_present_days=total_present,
            total_absent_days=total_absent,
            average_hours=round(total_hours / total_present, 2) if total_present else 0.0,
            employee_stats=employee_stats,
        )
