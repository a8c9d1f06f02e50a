"""
Business rule errors raised by the booking workflow.

Each error carries the HTTP status code it maps to so that endpoints
can translate it into an ``HTTPException`` without inspecting the
message text.  None of them are transient; retrying a request with the
same input reproduces the same error.
"""

from typing import Optional, Sequence


class BookingError(Exception):
    """Base class for all business rule rejections."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    """A request field failed validation."""

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"Invalid {field}")
        self.field = field


class InvalidTimeError(BookingError):
    """The appointment time is not in the future."""


class ServiceNotFoundError(BookingError):
    status_code = 404

    def __init__(self, service_id: int):
        super().__init__(f"Service with ID {service_id} not found")
        self.service_id = service_id


class AppointmentNotFoundError(BookingError):
    status_code = 404

    def __init__(self, appointment_id: int):
        super().__init__(f"Appointment with ID {appointment_id} not found")
        self.appointment_id = appointment_id


class DoubleBookingError(BookingError):
    """The requested slot overlaps an existing appointment of the same service."""

    status_code = 409

    def __init__(self, message: str, conflicts: Sequence = ()):
        super().__init__(message)
        self.conflicts = list(conflicts)


class HasDependentsError(BookingError):
    """A service cannot be deleted while appointments reference it."""

    status_code = 409

    def __init__(self, service_id: int, count: int):
        super().__init__(
            f"Cannot delete service {service_id}: {count} appointment(s) still reference it"
        )
        self.service_id = service_id
        self.count = count
