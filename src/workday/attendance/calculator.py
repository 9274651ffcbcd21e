from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import minutes_between, minutes_since_midnight
from ..common.validators import normalize_hhmm
from ..core.constants import DEFAULT_LATE_THRESHOLD
from ..entries.model import WorkEntry
from .model import DayStatus


def compute_hours(check_in: str, check_out: str) -> float:
    """Hours worked between two HH:MM times, rounded to 2 decimals.

    A check-out earlier than the check-in is an overnight shift ending the next day.
    """
    return round(minutes_between(check_in, check_out) / 60, 2)


class AttendanceCalculator:
    """Pure hour/lateness/presence rules; the late threshold is configurable."""

    def __init__(self, late_threshold: str = DEFAULT_LATE_THRESHOLD):
        self._late_threshold = normalize_hhmm(late_threshold, "late_threshold")
        self._late_after_minutes = minutes_since_midnight(self._late_threshold)

    @property
    def late_threshold(self) -> str:
        return self._late_threshold

    def compute_hours(self, check_in: str, check_out: str) -> float:
        return compute_hours(check_in, check_out)

    def is_late(self, check_in: str) -> bool:
        return minutes_since_midnight(check_in) >= self._late_after_minutes

    def hours_for(self, entry: Optional[WorkEntry]) -> Optional[float]:
        if not entry or entry.is_absent or not entry.check_in_time or not entry.check_out_time:
            return None
        return compute_hours(entry.check_in_time, entry.check_out_time)

    def day_status(self, entry: Optional[WorkEntry]) -> DayStatus:
        if not entry or entry.is_absent or not entry.check_in_time:
            return DayStatus(present=False, absent=True)

        return DayStatus(
            present=True,
            absent=False,
            late=self.is_late(entry.check_in_time),
            checked_out=bool(entry.check_out_time),
            hours=self.hours_for(entry),
        )
