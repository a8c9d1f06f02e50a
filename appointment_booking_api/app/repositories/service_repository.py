"""SQLite storage for services."""

import sqlite3
from typing import List, Optional

from ..core.db import from_db_datetime, get_connection, to_db_datetime, utc_now
from ..core.exceptions import HasDependentsError
from ..domain.models import Service
from ..schemas.service import ServiceCreate, ServiceUpdate


_COLUMNS = "id, name, description, default_duration_in_minutes, created_at, updated_at"


def _row_to_service(row: sqlite3.Row) -> Service:
    return Service(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        default_duration_in_minutes=row["default_duration_in_minutes"],
        created_at=from_db_datetime(row["created_at"]),
        updated_at=from_db_datetime(row["updated_at"]),
    )


class ServiceRepository:
    """Reads and writes rows of the ``services`` table.

    Each call opens its own connection, so a repository instance can be
    shared between requests.  ``db_path`` overrides the configured
    database, which is mainly useful in tests.
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path

    def list(self) -> List[Service]:
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM services ORDER BY id").fetchall()
            return [_row_to_service(row) for row in rows]
        finally:
            conn.close()

    def get_by_id(self, service_id: int) -> Optional[Service]:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM services WHERE id = ?",
                (service_id,),
            ).fetchone()
            return _row_to_service(row) if row else None
        finally:
            conn.close()

    def exists(self, service_id: int) -> bool:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(
                "SELECT 1 FROM services WHERE id = ?",
                (service_id,),
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    def create(self, data: ServiceCreate) -> Service:
        now = utc_now()
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                """
                INSERT INTO services (name, description, default_duration_in_minutes, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    data.name,
                    data.description,
                    data.default_duration_in_minutes,
                    to_db_datetime(now),
                    to_db_datetime(now),
                ),
            )
            conn.commit()
            return Service(
                id=cursor.lastrowid,
                name=data.name,
                description=data.description,
                default_duration_in_minutes=data.default_duration_in_minutes,
                created_at=now,
                updated_at=now,
            )
        finally:
            conn.close()

    def update(self, service_id: int, data: ServiceUpdate) -> Optional[Service]:
        """Replace every field of a service.  Returns ``None`` if it does not exist."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                """
                UPDATE services
                SET name = ?, description = ?, default_duration_in_minutes = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    data.name,
                    data.description,
                    data.default_duration_in_minutes,
                    to_db_datetime(utc_now()),
                    service_id,
                ),
            )
            conn.commit()
            if cursor.rowcount == 0:
                return None
        finally:
            conn.close()
        return self.get_by_id(service_id)

    def delete(self, service_id: int) -> bool:
        """Delete a service.  Returns ``False`` if it does not exist.

        The foreign key on ``appointments.service_id`` refuses the delete
        while appointments still reference the service; that case is
        reported as ``HasDependentsError``.
        """
        conn = get_connection(self.db_path)
        try:
            try:
                cursor = conn.execute("DELETE FROM services WHERE id = ?", (service_id,))
            except sqlite3.IntegrityError as e:
                count = conn.execute(
                    "SELECT COUNT(*) AS total FROM appointments WHERE service_id = ?",
                    (service_id,),
                ).fetchone()["total"]
                raise HasDependentsError(service_id, count) from e
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()
