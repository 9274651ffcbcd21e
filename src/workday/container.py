from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .analytics.service import AnalyticsService
from .attendance.calculator import AttendanceCalculator
from .attendance.service import AttendanceService
from .common.locks import UserLocks
from .completion.gateway import TaskStatusGateway
from .completion.mysql_task_status_gateway import MySQLTaskStatusGateway
from .completion.service import CompletionTracker
from .core.constants import DEFAULT_LATE_THRESHOLD
from .database.connection import DBConfig, DatabaseConnection
from .entries.mysql_completion_repository import MySQLCompletionRepository
from .entries.mysql_entry_repository import MySQLWorkEntryRepository
from .entries.repository import CompletionRepository, WorkEntryRepository
from .entries.service import WorkEntryService
from .propagation.service import CompletionPropagator
from .rollover.mysql_rollover_repository import MySQLRolloverTrackingRepository
from .rollover.repository import RolloverTrackingRepository
from .rollover.service import RolloverEngine
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserDirectory


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    entries_repo: WorkEntryRepository
    completions_repo: CompletionRepository
    rollover_repo: RolloverTrackingRepository
    users_repo: UserDirectory

    locks: UserLocks
    calculator: AttendanceCalculator

    entry_service: WorkEntryService
    completion_tracker: CompletionTracker
    rollover_engine: RolloverEngine
    propagator: CompletionPropagator
    attendance_service: AttendanceService
    analytics_service: AnalyticsService


def wire_services(
    *,
    entries_repo: WorkEntryRepository,
    completions_repo: CompletionRepository,
    rollover_repo: RolloverTrackingRepository,
    users_repo: UserDirectory,
    task_status: TaskStatusGateway | None = None,
    late_threshold: str = DEFAULT_LATE_THRESHOLD,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    # One lock registry for every writer, so all writes for a user are serialized.
    locks = UserLocks()
    calculator = AttendanceCalculator(late_threshold)

    completion_tracker = CompletionTracker(entries_repo, completions_repo, task_status=task_status, locks=locks)

    return Container(
        conn=conn,
        entries_repo=entries_repo,
        completions_repo=completions_repo,
        rollover_repo=rollover_repo,
        users_repo=users_repo,
        locks=locks,
        calculator=calculator,
        entry_service=WorkEntryService(entries_repo, locks=locks, calculator=calculator),
        completion_tracker=completion_tracker,
        rollover_engine=RolloverEngine(entries_repo, rollover_repo, directory=users_repo, locks=locks),
        propagator=CompletionPropagator(entries_repo, completion_tracker, locks=locks),
        attendance_service=AttendanceService(entries_repo, calculator=calculator, locks=locks),
        analytics_service=AnalyticsService(entries_repo, users_repo, calculator=calculator),
    )


def build_container(*, db_config: dict, late_threshold: str = DEFAULT_LATE_THRESHOLD) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        entries_repo=MySQLWorkEntryRepository(conn),
        completions_repo=MySQLCompletionRepository(conn),
        rollover_repo=MySQLRolloverTrackingRepository(conn),
        users_repo=MySQLUserRepository(conn),
        task_status=MySQLTaskStatusGateway(conn),
        late_threshold=late_threshold,
        conn=conn,
    )
