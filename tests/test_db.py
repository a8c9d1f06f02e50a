"""Tests for schema migrations and date-time storage."""

from datetime import datetime

from appointment_booking_api.app.core import db
from appointment_booking_api.app.core.config import settings


def test_init_db_is_idempotent(tmp_path):
    path = str(tmp_path / "fresh.db")

    assert db.init_db(path) == len(db.MIGRATIONS)
    assert db.init_db(path) == len(db.MIGRATIONS)

    with db.get_cursor(path) as cursor:
        tables = {
            row["name"]
            for row in cursor.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
        versions = [row["version"] for row in cursor.execute("SELECT version FROM migrations")]
    assert {"services", "appointments", "migrations"} <= tables
    assert versions == [1, 2]


def test_foreign_keys_enabled():
    conn = db.get_connection(":memory:")
    try:
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
    finally:
        conn.close()


def test_stored_times_sort_chronologically():
    values = [
        datetime(2030, 1, 1, 10, 0, 0, 500000),
        datetime(2030, 1, 1, 10, 0),
        datetime(2030, 1, 1, 9, 59, 59),
    ]
    stored = [db.to_db_datetime(v) for v in values]

    assert sorted(stored) == [db.to_db_datetime(v) for v in sorted(values)]
    assert [db.from_db_datetime(s) for s in stored] == values


def test_relative_database_path_is_resolved(monkeypatch):
    monkeypatch.setattr(settings, "database_url", "data/booking.db")
    path = db.get_database_path()
    assert path.endswith("data/booking.db") or path.endswith("data\\booking.db")
    assert path != "data/booking.db"
