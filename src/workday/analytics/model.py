from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.results import ItemError


@dataclass(frozen=True)
class DaySummary:
    work_date: date
    assigned: int
    completed: int
    present: bool
    late: bool
    checked_out: bool
    hours: Optional[float] = None


@dataclass(frozen=True)
class WeeklyAnalytics:
    """Per-user rollup over a period (a week, or any range for team reports)."""

    user_id: str
    user_name: str
    team: Optional[str]
    week_start: date
    week_end: date
    total_days: int
    present_days: int
    absent_days: int
    late_days: int
    checked_out_days: int
    total_tasks_assigned: int
    total_tasks_completed: int
    completion_rate: float
    total_hours: float
    average_hours_per_day: float
    daily: list[DaySummary] = field(default_factory=list)


@dataclass(frozen=True)
class TeamAnalytics:
    team_id: str
    period_start: date
    period_end: date
    total_members: int
    active_members: int
    total_tasks_assigned: int
    total_tasks_completed: int
    team_completion_rate: float
    present_days: int
    absent_days: int
    total_hours: float
    average_hours: float
    late_count: int
    checked_out_count: int
    member_analytics: list[WeeklyAnalytics] = field(default_factory=list)
    errors: list[ItemError] = field(default_factory=list)
