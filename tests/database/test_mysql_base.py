from __future__ import annotations

from datetime import time, timedelta

import mysql.connector
import pytest

from workday.core.exceptions import StoreError
from workday.database.bootstrap import _strip_create_db_and_use, iter_sql_statements
from workday.database.mysql_base import db_cursor, dump_id_list, load_id_list, normalize_mysql_time
from workday.main import SCHEMA_PATH


class FakeCursor:
    def __init__(self):
        self.closed = False
        self.executed: list[str] = []

    def execute(self, sql, params=None):
        self.executed.append(sql)

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self):
        self.cur = FakeCursor()
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self.cur

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self):
        self.last = None

    def connect(self, *, with_database=True):
        self.last = FakeConnection()
        return self.last


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, None),
        (time(8, 5), "08:05"),
        (timedelta(hours=17, minutes=30), "17:30"),
        ("9:00:00", "09:00"),
    ],
)
def test_normalize_mysql_time(value, expected):
    assert normalize_mysql_time(value) == expected


def test_id_list_column_decoding():
    assert load_id_list(None) == ()
    assert load_id_list('["a", "b"]') == ("a", "b")
    assert load_id_list(b'["x"]') == ("x",)
    assert load_id_list("") == ()
    assert load_id_list(["1", 2]) == ("1", "2")
    assert dump_id_list(("a", "b")) == '["a", "b"]'


def test_db_cursor_commits_on_success():
    factory = FakeConnFactory()
    with db_cursor(factory) as (_, cur):
        cur.execute("SELECT 1")

    assert factory.last.committed is True
    assert factory.last.cur.closed is True
    assert factory.last.closed is True


def test_db_cursor_wraps_driver_errors():
    factory = FakeConnFactory()
    with pytest.raises(StoreError) as info:
        with db_cursor(factory):
            raise mysql.connector.Error("connection lost")

    assert isinstance(info.value.__cause__, mysql.connector.Error)
    assert factory.last.rolled_back is True
    assert factory.last.committed is False
    assert factory.last.closed is True


def test_db_cursor_rolls_back_other_errors():
    factory = FakeConnFactory()
    with pytest.raises(KeyError):
        with db_cursor(factory):
            raise KeyError("x")
    assert factory.last.rolled_back is True


def test_schema_script_splitting():
    sql = """
    CREATE DATABASE IF NOT EXISTS workday_db;
    USE workday_db;
    -- users
    CREATE TABLE a (id INT, note VARCHAR(10) DEFAULT 'x;y');
    CREATE TABLE b (id INT);
    """
    statements = list(iter_sql_statements(_strip_create_db_and_use(sql)))

    assert len(statements) == 2
    assert statements[0].startswith("CREATE TABLE a")
    assert "'x;y'" in statements[0]


class LostConnection(FakeConnection):
    def __init__(self):
        super().__init__()
        self.cur.execute = self._lost

    def _lost(self, sql, params=None):
        raise mysql.connector.errors.OperationalError("Lost connection to MySQL server during query")

    def rollback(self):
        raise mysql.connector.errors.OperationalError("MySQL Connection not available.")

    def close(self):
        raise mysql.connector.errors.OperationalError("MySQL Connection not available.")


class LostConnFactory(FakeConnFactory):
    def connect(self, *, with_database=True):
        self.last = LostConnection()
        return self.last


def test_db_cursor_reports_store_error_when_rollback_also_fails():
    factory = LostConnFactory()
    with pytest.raises(StoreError) as info:
        with db_cursor(factory) as (_, cur):
            cur.execute("UPDATE daily_work_entries SET is_absent = 1")

    assert "Lost connection" in str(info.value)
    assert isinstance(info.value.__cause__, mysql.connector.errors.OperationalError)
    assert factory.last.cur.closed is True


def test_bundled_schema_sits_inside_the_package():
    assert SCHEMA_PATH.is_file()
    assert SCHEMA_PATH.parent.name == "database"
    assert SCHEMA_PATH.parent.parent.name == "workday"

    statements = list(iter_sql_statements(_strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))))

    created = " ".join(statements)
    for table in ("daily_work_entries", "task_completions", "user_rollover"):
        assert f"CREATE TABLE IF NOT EXISTS {table}" in created
    assert not any(s.upper().startswith(("CREATE DATABASE", "USE ")) for s in statements)
