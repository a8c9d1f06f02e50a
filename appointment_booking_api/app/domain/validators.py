"""
Business validation for service and appointment requests.

Pydantic only checks the shape of a payload; the rules below decide
whether its content is acceptable.  Checks run in a fixed order and the
first violated rule raises, so a request with several problems always
reports the same one.
"""

from datetime import datetime
from typing import Callable

from ..core.exceptions import InvalidTimeError, ServiceNotFoundError, ValidationError


MAX_SERVICE_DURATION_MINUTES = 24 * 60


def validate_service_request(request) -> None:
    """Check a service create/update payload.

    Raises ``ValidationError`` naming the offending field.
    """
    if not request.name.strip():
        raise ValidationError("name", "Service name cannot be blank")
    if not request.description.strip():
        raise ValidationError("description", "Service description cannot be blank")
    if request.default_duration_in_minutes <= 0:
        raise ValidationError(
            "default_duration_in_minutes", "Service duration must be positive"
        )
    if request.default_duration_in_minutes > MAX_SERVICE_DURATION_MINUTES:
        raise ValidationError(
            "default_duration_in_minutes",
            f"Service duration cannot exceed 24 hours ({MAX_SERVICE_DURATION_MINUTES} minutes)",
        )


def validate_appointment_request(
    request,
    now: datetime,
    service_exists: Callable[[int], bool],
) -> None:
    """Check an appointment create/update payload.

    Parameters
    ----------
    request
        Object with ``client_name``, ``client_email``,
        ``appointment_time`` and ``service_id`` attributes.
    now : datetime
        Current naive time; the appointment must start strictly after it.
    service_exists : callable
        Lookup used to confirm that the referenced service exists.

    Raises
    ------
    ValidationError
        Blank client name, blank email or an email without ``@``.
    InvalidTimeError
        The appointment time is not in the future.
    ServiceNotFoundError
        The referenced service does not exist.
    """
    if not request.client_name.strip():
        raise ValidationError("client_name", "Client name cannot be blank")
    if not request.client_email.strip():
        raise ValidationError("client_email", "Client email cannot be blank")
    # Deliberately permissive: only the presence of "@" is required.
    if "@" not in request.client_email:
        raise ValidationError("client_email", "Invalid email format")
    if request.appointment_time <= now:
        raise InvalidTimeError("Appointment time must be in the future")
    if not service_exists(request.service_id):
        raise ServiceNotFoundError(request.service_id)
