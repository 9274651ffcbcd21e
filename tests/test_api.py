from __future__ import annotations

from datetime import date

import pytest

from workday.container import wire_services
from workday.main import create_app

from fakes import FailingWorkEntries, InMemoryCompletions, InMemoryRolloverTracking


@pytest.fixture()
def client(container):
    app = create_app(container=container)
    app.config["TESTING"] = True
    return app.test_client()


def test_entry_report_for_unknown_day(client):
    resp = client.get("/api/entries/u1/2024-01-01")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["entry"]["assigned_task_ids"] == []
    assert data["status"]["absent"] is True


def test_assign_and_roll_over(client, entries):
    client.post("/api/entries/u1/2024-01-01/tasks", json={"task_id": "T1"})

    resp = client.post("/api/rollover/u1/day", json={"from_date": "2024-01-01", "to_date": "2024-01-02"})

    assert resp.status_code == 200
    assert resp.get_json()["moved"] == ["T1"]
    assert entries.assigned("u1", date(2024, 1, 2)) == ("T1",)


def test_rollover_to_same_day_is_bad_request(client):
    resp = client.post("/api/rollover/u1/day", json={"from_date": "2024-01-02", "to_date": "2024-01-02"})
    assert resp.status_code == 400
    assert resp.get_json()["type"] == "RangeError"


def test_week_rollover_returns_batch(client, entries):
    entries.seed("u1", date(2024, 1, 1), assigned=["T1"])
    resp = client.post("/api/rollover/u1/week", json={"week_start": "2024-01-01"})
    body = resp.get_json()
    assert len(body["processed"]) == 6
    assert body["errors"] == []


def test_complete_and_reopen(client, entries):
    entries.seed("u1", date(2024, 1, 5), assigned=["T"])
    entries.seed("u1", date(2024, 1, 10), assigned=["T"])

    resp = client.post("/api/tasks/T/complete", json={"user_id": "u1", "date": "2024-01-05", "due_date": "2024-01-01"})
    assert resp.get_json()["updated"] == ["2024-01-10"]

    resp = client.post("/api/tasks/T/reopen", json={"user_id": "u1", "date": "2024-01-05", "due_date": "2024-01-05"})
    assert resp.status_code == 200
    assert "2024-01-10" in resp.get_json()["updated"]


def test_complete_requires_user(client):
    resp = client.post("/api/tasks/T/complete", json={"date": "2024-01-05"})
    assert resp.status_code == 400


def test_attendance_flow(client):
    client.post("/api/attendance/u1/check-in", json={"date": "2024-01-01", "time": "22:00"})
    client.post("/api/attendance/u1/check-out", json={"date": "2024-01-01", "time": "06:00"})

    resp = client.get("/api/attendance/u1?date=2024-01-01")
    assert resp.get_json()["total_hours"] == 8.0

    client.post("/api/attendance/u1/absent", json={"date": "2024-01-01"})
    data = client.get("/api/attendance/u1?date=2024-01-01").get_json()
    assert data["check_in_time"] is None
    assert data["is_absent"] is True


def test_bad_date_is_bad_request(client):
    resp = client.get("/api/attendance/u1?date=01-01-2024")
    assert resp.status_code == 400
    assert resp.get_json()["type"] == "ValidationError"


def test_deleting_task_strips_pending_days(client, entries):
    entries.seed("u1", date(2024, 1, 3), assigned=["T"])
    resp = client.delete("/api/tasks/T?since=2024-01-01")
    assert resp.get_json() == {"task_id": "T", "updated": 1}


def test_team_analytics(client, users, entries):
    users.add("u1", "Uma", team="core")
    entries.seed("u1", date(2024, 1, 1), assigned=["T1"], completed=["T1"])

    resp = client.get("/api/analytics/team/core?from=2024-01-01&to=2024-01-07")

    body = resp.get_json()
    assert body["team_completion_rate"] == 1.0
    assert body["member_analytics"][0]["user_name"] == "Uma"


def test_weekly_analytics(client, users):
    users.add("u1", "Uma", team="core")
    resp = client.get("/api/analytics/weekly/u1/2024-01-01")
    assert resp.get_json()["total_days"] == 7


def test_store_failure_maps_to_503(users):
    entries = FailingWorkEntries(fail_get_on=[date(2024, 1, 1)])
    container = wire_services(
        entries_repo=entries,
        completions_repo=InMemoryCompletions(),
        rollover_repo=InMemoryRolloverTracking(),
        users_repo=users,
    )
    client = create_app(container=container).test_client()

    resp = client.get("/api/entries/u1/2024-01-01")

    assert resp.status_code == 503
    assert resp.get_json()["type"] == "StoreError"


def test_cli_rollover_week(container, entries):
    entries.seed("u1", date(2024, 1, 1), assigned=["T1"])
    runner = create_app(container=container).test_cli_runner()

    result = runner.invoke(args=["rollover-week", "u1", "2024-01-01"])

    assert result.exit_code == 0
    assert "processed=6" in result.output
