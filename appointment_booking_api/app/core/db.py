"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), applying migrations before the application
serves traffic (``init_db``) and converting date-time values to and
from their stored text form.  It uses SQLite as a lightweight embedded
database; to switch to another DBMS you would replace connection logic
and adapt SQL syntax accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

from .config import settings


logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value; binding anything outside this
# range raises OverflowError inside sqlite3.
SQLITE_MIN_INTEGER = -(2**63)
SQLITE_MAX_INTEGER = 2**63 - 1


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS services (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            description TEXT NOT NULL,
            default_duration_in_minutes INTEGER NOT NULL,
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP NOT NULL
        );

        -- service_id has no ON DELETE action: a service cannot be removed
        -- while appointments still reference it.
        CREATE TABLE IF NOT EXISTS appointments (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            client_name TEXT NOT NULL,
            client_email TEXT NOT NULL,
            appointment_time TIMESTAMP NOT NULL,
            service_id INTEGER NOT NULL,
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP NOT NULL,
            FOREIGN KEY(service_id) REFERENCES services(id)
        );
        """,
    ),
    # Migration 2: Indices for conflict lookups
    (
        2,
        """
        -- Two appointments of one service can never share a start time, so
        -- the unique index backs up the application-level conflict check
        -- when two writers race on the same slot.
        CREATE UNIQUE INDEX IF NOT EXISTS idx_appointments_service_time
            ON appointments(service_id, appointment_time);
        CREATE INDEX IF NOT EXISTS idx_appointments_service_id ON appointments(service_id);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name and
    has foreign key enforcement switched on; SQLite disables it by
    default and it must be enabled per connection.
    """
    conn = sqlite3.connect(db_path or get_database_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor(db_path: Optional[str] = None) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def to_db_datetime(value: datetime) -> str:
    """Serialise a naive date-time to fixed-width ISO text.

    Microseconds are always written so that lexicographic order of the
    stored strings matches chronological order, which the range queries
    in the repositories rely on.
    """
    return value.isoformat(sep=" ", timespec="microseconds")


def from_db_datetime(value: str) -> datetime:
    return datetime.fromisoformat(value)


def utc_now() -> datetime:
    """Current UTC time as a naive date-time, used for record timestamps."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def init_db(db_path: Optional[str] = None) -> int:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  Returns the schema version after migrating.  This
    is an explicit setup step; call it once before serving traffic.
    """
    with get_cursor(db_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying database migration %s", version)
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
    return current_version
