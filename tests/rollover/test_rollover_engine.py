from __future__ import annotations

from datetime import date, timedelta

import pytest

from workday.core.exceptions import RangeError, StoreError, ValidationError
from workday.rollover.service import RolloverEngine

from fakes import FailingWorkEntries, InMemoryRolloverTracking, InMemoryUsers

D = date(2024, 1, 1)


def _next(day: date, n: int = 1) -> date:
    return day + timedelta(days=n)


@pytest.fixture()
def engine(entries, tracking, users):
    return RolloverEngine(entries, tracking, directory=users)


def test_rollover_moves_unfinished_tasks(engine, entries):
    entries.seed("U", D, assigned=["T1", "T2"], completed=["T1"])

    result = engine.rollover_day("U", D, _next(D))

    assert result.moved == ("T2",)
    assert entries.assigned("U", D) == ("T1",)
    assert "T2" in entries.assigned("U", _next(D))


def test_rollover_conserves_task_ids(engine, entries):
    entries.seed("U", D, assigned=["A", "B", "C", "D"], completed=["B"])
    entries.seed("U", _next(D), assigned=["C", "X"])

    engine.rollover_day("U", D, _next(D))

    assert entries.assigned("U", D) == ("B",)
    target = entries.assigned("U", _next(D))
    assert sorted(target) == ["A", "C", "D", "X"]
    assert len(target) == len(set(target))


def test_rollover_twice_is_same_as_once(engine, entries):
    entries.seed("U", D, assigned=["T1", "T2"], completed=["T1"])

    engine.rollover_day("U", D, _next(D))
    first = (entries.get("U", D), entries.get("U", _next(D)))
    second_result = engine.rollover_day("U", D, _next(D))

    assert second_result.changed is False
    assert entries.get("U", D).assigned_task_ids == first[0].assigned_task_ids
    assert entries.get("U", _next(D)).assigned_task_ids == first[1].assigned_task_ids


def test_nothing_to_roll_creates_nothing(engine, entries):
    entries.seed("U", D, assigned=["T1"], completed=["T1"])

    result = engine.rollover_day("U", D, _next(D))

    assert result.changed is False
    assert entries.get("U", _next(D)) is None


def test_rollover_needs_later_target(engine):
    with pytest.raises(RangeError):
        engine.rollover_day("U", D, D)


def test_failed_write_leaves_source_intact():
    entries = FailingWorkEntries(fail_save_on=[_next(D)])
    entries.seed("U", D, assigned=["T1"])
    engine = RolloverEngine(entries)

    with pytest.raises(StoreError):
        engine.rollover_day("U", D, _next(D))

    assert entries.assigned("U", D) == ("T1",)


def test_week_chains_days_and_skips_empty(engine, entries):
    entries.seed("U", D, assigned=["T1", "T2"], completed=["T1"])

    result = engine.rollover_week("U", D)

    assert result.ok
    assert len(result.processed) == 6
    assert result.skipped == []
    assert entries.assigned("U", _next(D, 6)) == ("T2",)
    for n in range(1, 6):
        assert entries.assigned("U", _next(D, n)) == ()
    assert entries.assigned("U", D) == ("T1",)


def test_week_skips_days_without_unfinished_work(engine, entries):
    entries.seed("U", _next(D, 3), assigned=["T5"])

    result = engine.rollover_week("U", D)

    assert result.processed == ["2024-01-04->2024-01-05", "2024-01-05->2024-01-06", "2024-01-06->2024-01-07"]
    assert result.skipped == ["2024-01-01->2024-01-02", "2024-01-02->2024-01-03", "2024-01-03->2024-01-04"]


def test_week_reports_per_day_failures_and_continues():
    entries = FailingWorkEntries(fail_get_on=[_next(D, 2)])
    entries.seed("U", D, assigned=["T1"])
    entries.seed("U", _next(D, 4), assigned=["T4"])
    engine = RolloverEngine(entries)

    result = engine.rollover_week("U", D)

    assert not result.ok
    assert [e.key for e in result.errors] == ["2024-01-02->2024-01-03", "2024-01-03->2024-01-04"]
    assert "2024-01-01->2024-01-02" in result.processed
    assert entries.assigned("U", _next(D, 6)) == ("T4",)


def test_catch_up_from_tracking_marker(engine, entries, tracking):
    tracking.last["U"] = D
    entries.seed("U", D, assigned=["T1"])

    result = engine.catch_up("U", _next(D, 3))

    assert result.ok
    assert len(result.processed) == 3
    assert entries.assigned("U", _next(D, 3)) == ("T1",)
    assert tracking.last["U"] == _next(D, 3)


def test_catch_up_already_processed_is_noop(engine, tracking):
    tracking.last["U"] = _next(D, 5)
    result = engine.catch_up("U", _next(D, 2))
    assert result.processed == [] and result.skipped == []
    assert tracking.last["U"] == _next(D, 5)


def test_catch_up_walks_back_at_most_thirty_days(engine, entries, tracking):
    target = date(2024, 6, 30)

    result = engine.catch_up("U", target)

    assert len(result.skipped) == 30
    assert result.skipped[0] == "2024-05-31->2024-06-01"
    assert tracking.last["U"] == target


def test_catch_up_keeps_marker_on_failure():
    entries = FailingWorkEntries(fail_get_on=[_next(D, 1)])
    tracking = InMemoryRolloverTracking({"U": D})
    engine = RolloverEngine(entries, tracking)

    result = engine.catch_up("U", _next(D, 3))

    assert not result.ok
    assert tracking.last["U"] == D


def test_catch_up_needs_tracking(entries):
    with pytest.raises(ValidationError):
        RolloverEngine(entries).catch_up("U", D)


def test_catch_up_all_collects_per_user_errors():
    users = InMemoryUsers()
    users.add("ok", "Ok User")
    users.add("bad", "Bad User")
    users.add("gone", "Gone User", is_active=False)

    class PerUserFailing(FailingWorkEntries):
        def get(self, user_id, work_date):
            if user_id == "bad":
                raise StoreError("store down")
            return super().get(user_id, work_date)

    entries = PerUserFailing()
    entries.seed("ok", D, assigned=["T1"])
    tracking = InMemoryRolloverTracking({"ok": D, "bad": D, "gone": D})
    engine = RolloverEngine(entries, tracking, directory=users)

    result = engine.catch_up_all(_next(D, 1))

    assert result.processed == ["ok"]
    assert [e.key for e in result.errors] == ["bad"]
    assert tracking.last["gone"] == D
    assert entries.assigned("ok", _next(D)) == ("T1",)
