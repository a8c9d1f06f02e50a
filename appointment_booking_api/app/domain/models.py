"""Records returned by the repositories."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .interval import TimeInterval


@dataclass
class Service:
    id: int
    name: str
    description: str
    default_duration_in_minutes: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Appointment:
    id: int
    client_name: str
    client_email: str
    appointment_time: datetime
    service_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def interval(self, duration_minutes: int) -> TimeInterval:
        """Occupied range given the duration of the referenced service."""
        return TimeInterval.from_duration(self.appointment_time, duration_minutes)
