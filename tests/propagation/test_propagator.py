from __future__ import annotations

from datetime import date

import pytest

from workday.core.constants import REOPEN_CREATE_DAYS
from workday.core.enums import TaskStatus


def test_completion_removes_task_from_later_days(container, entries):
    entries.seed("U", date(2024, 1, 3), assigned=["T"])
    entries.seed("U", date(2024, 1, 5), assigned=["T", "T2"])
    entries.seed("U", date(2024, 1, 10), assigned=["T"])
    entries.seed("U", date(2024, 1, 11), assigned=["T2"])

    result = container.propagator.propagate_completion("U", date(2024, 1, 5), "T", date(2024, 1, 1))

    assert result.updated == (date(2024, 1, 10),)
    assert entries.assigned("U", date(2024, 1, 10)) == ()
    assert entries.assigned("U", date(2024, 1, 11)) == ("T2",)
    assert entries.assigned("U", date(2024, 1, 3)) == ("T",)
    assert entries.completed("U", date(2024, 1, 5)) == ("T",)
    assert entries.assigned("U", date(2024, 1, 5)) == ("T2",)


def test_completion_leaves_other_users_alone(container, entries):
    entries.seed("U", date(2024, 1, 5), assigned=["T"])
    entries.seed("V", date(2024, 1, 9), assigned=["T"])

    container.propagator.propagate_completion("U", date(2024, 1, 5), "T", date(2024, 1, 5))

    assert entries.assigned("V", date(2024, 1, 9)) == ("T",)


def test_reopen_never_creates_entries_past_create_window(container, entries):
    reopen = date(2024, 1, 10)
    entries.seed("U", reopen, completed=["T"])
    entries.seed("U", date(2024, 1, 12), completed=["T"])
    entries.seed("U", date(2024, 1, 20), assigned=["X"])

    result = container.propagator.propagate_reopen("U", reopen, "T", date(2024, 1, 8))

    assert all((day - reopen).days <= REOPEN_CREATE_DAYS for day in result.created)
    assert date(2024, 1, 12) not in result.created + result.updated
    assert result.updated == (date(2024, 1, 20),)
    assert entries.assigned("U", date(2024, 1, 20)) == ("X", "T")
    assert max(d for d in entries.dates_for("U") if d != date(2024, 1, 20)) == date(2024, 1, 17)
    assert entries.get("U", date(2024, 1, 18)) is None
    assert entries.get("U", date(2024, 1, 24)) is None


def test_reopen_spans_from_due_date(container, entries):
    reopen = date(2024, 1, 10)
    entries.seed("U", reopen, completed=["T"])

    result = container.propagator.propagate_reopen("U", reopen, "T", date(2024, 1, 8))

    assert result.created[:2] == (date(2024, 1, 8), date(2024, 1, 9))
    assert date(2024, 1, 7) not in entries.dates_for("U")
    assert entries.assigned("U", reopen) == ("T",)
    assert entries.completed("U", reopen) == ()


def test_reopen_skips_days_before_due_date(container, entries):
    reopen = date(2024, 1, 10)
    entries.seed("U", date(2024, 1, 11), assigned=["A"])

    result = container.propagator.propagate_reopen("U", reopen, "T", date(2024, 1, 12))

    assert date(2024, 1, 11) not in result.updated
    assert entries.assigned("U", date(2024, 1, 11)) == ("A",)
    assert result.created[0] == date(2024, 1, 12)


def test_reopen_reports_status_in_progress(container, entries, task_status):
    entries.seed("U", date(2024, 1, 10), completed=["T"])
    container.propagator.propagate_reopen("U", date(2024, 1, 10), "T", date(2024, 1, 10))
    assert task_status.calls[-1] == ("T", TaskStatus.IN_PROGRESS)


@pytest.mark.parametrize("due", [date(2024, 1, 1), date(2024, 1, 10)])
def test_reopen_then_complete_clears_future_days(container, entries, due):
    reopen = date(2024, 1, 10)
    entries.seed("U", reopen, completed=["T"])
    container.propagator.propagate_reopen("U", reopen, "T", due)

    container.propagator.propagate_completion("U", reopen, "T", due)

    for day in entries.dates_for("U"):
        if day > reopen:
            assert "T" not in entries.assigned("U", day)
