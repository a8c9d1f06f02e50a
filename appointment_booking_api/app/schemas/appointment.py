"""
Pydantic models for appointments.

Appointment times are naive.  A client may still send an offset (for
example ``2030-01-01T10:00:00Z``); such values are converted to the zone
the booking clock uses (UTC unless ``CLOCK_UTC`` is off, in which case
the server's local zone) and stripped of their timezone so that every
comparison happens between naive values of the same zone.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..core.config import settings
from ..core.db import SQLITE_MAX_INTEGER, SQLITE_MIN_INTEGER


class AppointmentBase(BaseModel):
    client_name: str = Field(..., examples=["Jane Doe"])
    client_email: str = Field(..., examples=["jane@example.com"])
    appointment_time: datetime = Field(..., examples=["2030-01-15T10:00:00"])
    service_id: int = Field(..., ge=SQLITE_MIN_INTEGER, le=SQLITE_MAX_INTEGER, examples=[1])

    @field_validator("appointment_time")
    @classmethod
    def _naive_time(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value
        try:
            if settings.clock_utc:
                return value.astimezone(timezone.utc).replace(tzinfo=None)
            return value.astimezone().replace(tzinfo=None)
        except OverflowError as e:
            raise ValueError("appointment time is out of range") from e


class AppointmentCreate(AppointmentBase):
    """Schema for booking an appointment."""
    pass


class AppointmentUpdate(AppointmentBase):
    """Schema for updating an appointment.

    Updates replace every field and go through the same validation and
    conflict checks as a new booking.
    """
    pass


class AppointmentRead(AppointmentBase):
    """An appointment joined with the display data of its service."""

    id: int
    end_time: datetime
    service_name: str
    duration_in_minutes: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }
