"""SQLite storage for appointments."""

import sqlite3
from datetime import datetime
from typing import List, Optional

from ..core.db import from_db_datetime, get_connection, to_db_datetime, utc_now
from ..core.exceptions import DoubleBookingError, ServiceNotFoundError
from ..domain.models import Appointment
from ..schemas.appointment import AppointmentCreate, AppointmentUpdate


SLOT_TAKEN_MESSAGE = "The requested time slot conflicts with an existing appointment"

_COLUMNS = "id, client_name, client_email, appointment_time, service_id, created_at, updated_at"


def _row_to_appointment(row: sqlite3.Row) -> Appointment:
    return Appointment(
        id=row["id"],
        client_name=row["client_name"],
        client_email=row["client_email"],
        appointment_time=from_db_datetime(row["appointment_time"]),
        service_id=row["service_id"],
        created_at=from_db_datetime(row["created_at"]),
        updated_at=from_db_datetime(row["updated_at"]),
    )


def _translate_integrity_error(error: sqlite3.IntegrityError, service_id: int) -> Exception:
    """Map a constraint violation on write to a business error.

    The unique ``(service_id, appointment_time)`` index fires when a
    concurrent request booked the same start time between our conflict
    check and the write.  The foreign key fires when the service was
    deleted in the meantime.
    """
    detail = str(error)
    if "UNIQUE" in detail:
        return DoubleBookingError(SLOT_TAKEN_MESSAGE)
    if "FOREIGN KEY" in detail:
        return ServiceNotFoundError(service_id)
    return error


class AppointmentRepository:
    """Reads and writes rows of the ``appointments`` table."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path

    def list(self) -> List[Appointment]:
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM appointments ORDER BY appointment_time, id"
            ).fetchall()
            return [_row_to_appointment(row) for row in rows]
        finally:
            conn.close()

    def get_by_id(self, appointment_id: int) -> Optional[Appointment]:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM appointments WHERE id = ?",
                (appointment_id,),
            ).fetchone()
            return _row_to_appointment(row) if row else None
        finally:
            conn.close()

    def list_by_service(self, service_id: int) -> List[Appointment]:
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM appointments WHERE service_id = ? ORDER BY appointment_time",
                (service_id,),
            ).fetchall()
            return [_row_to_appointment(row) for row in rows]
        finally:
            conn.close()

    def count_by_service(self, service_id: int) -> int:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(
                "SELECT COUNT(*) AS total FROM appointments WHERE service_id = ?",
                (service_id,),
            ).fetchone()
            return row["total"]
        finally:
            conn.close()

    def find_by_service_in_range(
        self,
        service_id: int,
        start: datetime,
        end: datetime,
        exclude_id: Optional[int] = None,
    ) -> List[Appointment]:
        """Appointments of a service starting within ``[start, end)``.

        ``exclude_id`` removes one appointment from the result, which is
        how an update avoids matching its own slot.
        """
        query = (
            f"SELECT {_COLUMNS} FROM appointments "
            "WHERE service_id = ? AND appointment_time >= ? AND appointment_time < ?"
        )
        params: list = [service_id, to_db_datetime(start), to_db_datetime(end)]
        if exclude_id is not None:
            query += " AND id != ?"
            params.append(exclude_id)
        query += " ORDER BY appointment_time"
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(query, tuple(params)).fetchall()
            return [_row_to_appointment(row) for row in rows]
        finally:
            conn.close()

    def create(self, data: AppointmentCreate) -> Appointment:
        now = utc_now()
        conn = get_connection(self.db_path)
        try:
            try:
                cursor = conn.execute(
                    """
                    INSERT INTO appointments
                        (client_name, client_email, appointment_time, service_id, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        data.client_name,
                        data.client_email,
                        to_db_datetime(data.appointment_time),
                        data.service_id,
                        to_db_datetime(now),
                        to_db_datetime(now),
                    ),
                )
            except sqlite3.IntegrityError as e:
                raise _translate_integrity_error(e, data.service_id) from e
            conn.commit()
            return Appointment(
                id=cursor.lastrowid,
                client_name=data.client_name,
                client_email=data.client_email,
                appointment_time=data.appointment_time,
                service_id=data.service_id,
                created_at=now,
                updated_at=now,
            )
        finally:
            conn.close()

    def update(self, appointment_id: int, data: AppointmentUpdate) -> Optional[Appointment]:
        """Replace every field of an appointment.  Returns ``None`` if it does not exist."""
        conn = get_connection(self.db_path)
        try:
            try:
                cursor = conn.execute(
                    """
                    UPDATE appointments
                    SET client_name = ?, client_email = ?, appointment_time = ?, service_id = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        data.client_name,
                        data.client_email,
                        to_db_datetime(data.appointment_time),
                        data.service_id,
                        to_db_datetime(utc_now()),
                        appointment_id,
                    ),
                )
            except sqlite3.IntegrityError as e:
                raise _translate_integrity_error(e, data.service_id) from e
            conn.commit()
            if cursor.rowcount == 0:
                return None
        finally:
            conn.close()
        return self.get_by_id(appointment_id)

    def delete(self, appointment_id: int) -> bool:
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute("DELETE FROM appointments WHERE id = ?", (appointment_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()
