from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

from ..attendance.calculator import AttendanceCalculator
from ..common.datetime_utils import iter_days, require_range
from ..common.results import ItemError
from ..core.constants import DAYS_IN_WEEK
from ..core.exceptions import DomainError
from ..entries.model import EntryFilter
from ..entries.repository import WorkEntryRepository
from ..users.model import User
from ..users.repository import UserDirectory
from .model import DaySummary, TeamAnalytics, WeeklyAnalytics

logger = logging.getLogger(__name__)


def completion_rate(completed: int, assigned: int) -> float:
    return completed / assigned if assigned else 0.0


class AnalyticsService:
    """Read-only rollups of work entries; never writes."""

    def __init__(
        self,
        entries: WorkEntryRepository,
        directory: UserDirectory | None = None,
        *,
        calculator: AttendanceCalculator | None = None,
    ):
        self._entries = entries
        self._directory = directory
        self._calculator = calculator or AttendanceCalculator()

    def weekly_analytics(self, user_id: str, week_start: date) -> WeeklyAnalytics:
        user = self._directory.get_by_id(user_id) if self._directory else None
        week_end = week_start + timedelta(days=DAYS_IN_WEEK - 1)
        return self._summarize(user_id, user, week_start, week_end)

    def team_analytics(self, team_id: str, date_from: date, date_to: date) -> TeamAnalytics:
        require_range(date_from, date_to)
        members = list(self._directory.list_team_members(team_id)) if self._directory else []
        active = [m for m in members if m.is_active]

        member_analytics: list[WeeklyAnalytics] = []
        errors: list[ItemError] = []
        # Sequential on purpose: one member's failure must not hide the others.
        for member in active:
            try:
                member_analytics.append(self._summarize(member.user_id, member, date_from, date_to))
            except DomainError as exc:
                logger.warning("Team %s analytics failed for %s", team_id, member.user_id, exc_info=True)
                errors.append(ItemError(member.user_id, str(exc)))

        assigned = sum(m.total_tasks_assigned for m in member_analytics)
        completed = sum(m.total_tasks_completed for m in member_analytics)
        present = sum(m.present_days for m in member_analytics)
        total_hours = round(sum(m.total_hours for m in member_analytics), 2)
        hour_days = sum(1 for m in member_analytics for d in m.daily if d.hours is not None)

        return TeamAnalytics(
            team_id=team_id,
            period_start=date_from,
            period_end=date_to,
            total_members=len(members),
            active_members=len(active),
            total_tasks_assigned=assigned,
            total_tasks_completed=completed,
            team_completion_rate=completion_rate(completed, assigned),
            present_days=present,
            absent_days=sum(m.absent_days for m in member_analytics),
            total_hours=total_hours,
            average_hours=round(total_hours / hour_days, 2) if hour_days else 0.0,
            late_count=sum(m.late_days for m in member_analytics),
            checked_out_count=sum(m.checked_out_days for m in member_analytics),
            member_analytics=member_analytics,
            errors=errors,
        )

    def _summarize(self, user_id: str, user: Optional[User], start: date, end: date) -> WeeklyAnalytics:
        by_date = {
            e.work_date: e
            for e in self._entries.list(EntryFilter(user_id=user_id, date_from=start, date_to=end))
        }

        daily: list[DaySummary] = []
        for day in iter_days(start, end):
            entry = by_date.get(day)
            status = self._calculator.day_status(entry)
            daily.append(
                DaySummary(
                    work_date=day,
                    assigned=len(entry.assigned_task_ids) if entry else 0,
                    completed=len(entry.completed_task_ids) if entry else 0,
                    present=status.present,
                    late=status.late,
                    checked_out=status.checked_out,
                    hours=status.hours,
                )
            )

        assigned = sum(d.assigned for d in daily)
        completed = sum(d.completed for d in daily)
        present = sum(1 for d in daily if d.present)
        hours = [d.hours for d in daily if d.hours is not None]
        total_hours = round(sum(hours), 2)

        return WeeklyAnalytics(
            user_id=user_id,
            user_name=user.full_name if user else "Unknown",
            team=user.team if user else None,
            week_start=start,
            week_end=end,
            total_days=len(daily),
            present_days=present,
            absent_days=len(daily) - present,
            late_days=sum(1 for d in daily if d.late),
            checked_out_days=sum(1 for d in daily if d.checked_out),
            total_tasks_assigned=assigned,
            total_tasks_completed=completed,
            completion_rate=completion_rate(completed, assigned),
            total_hours=total_hours,
            average_hours_per_day=round(total_hours / len(hours), 2) if hours else 0.0,
            daily=daily,
        )
