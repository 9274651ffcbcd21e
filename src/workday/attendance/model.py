from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class DayStatus:
    present: bool
    absent: bool
    late: bool = False
    checked_out: bool = False
    hours: Optional[float] = None


@dataclass(frozen=True)
class AttendanceSnapshot:
    """Read-model of one user's attendance for one day (defaults when no entry)."""

    user_id: str
    work_date: date
    check_in_time: Optional[str]
    check_out_time: Optional[str]
    is_absent: bool
    total_hours: Optional[float] = None


@dataclass(frozen=True)
class AttendanceOverview:
    work_date: date
    present: int
    absent: int
    late: int
    checked_out: int
    total_employees: int


@dataclass(frozen=True)
class EmployeeStats:
    user_id: str
    present_days: int
    absent_days: int
    total_hours: float
    average_hours: float


@dataclass(frozen=True)
class AttendanceStats:
    total_working_days: int
    total_present_days: int
    total_absent_days: int
    average_hours: float
    employee_stats: list[EmployeeStats] = field(default_factory=list)
