from __future__ import annotations

import os

import pytest

from workday.container import wire_services

from fakes import InMemoryCompletions, InMemoryRolloverTracking, InMemoryUsers, InMemoryWorkEntries, RecordingTaskStatus

os.environ.setdefault("APP_ENV", "testing")


@pytest.fixture()
def entries() -> InMemoryWorkEntries:
    return InMemoryWorkEntries()


@pytest.fixture()
def completions() -> InMemoryCompletions:
    return InMemoryCompletions()


@pytest.fixture()
def tracking() -> InMemoryRolloverTracking:
    return InMemoryRolloverTracking()


@pytest.fixture()
def users() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture()
def task_status() -> RecordingTaskStatus:
    return RecordingTaskStatus()


@pytest.fixture()
def container(entries, completions, tracking, users, task_status):
    return wire_services(
        entries_repo=entries,
        completions_repo=completions,
        rollover_repo=tracking,
        users_repo=users,
        task_status=task_status,
    )
