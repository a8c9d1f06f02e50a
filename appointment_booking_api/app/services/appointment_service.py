"""
Business logic for appointments.

``AppointmentService`` runs every booking write through the same
sequence: validate the request, resolve the referenced service, compute
the end of the requested slot, check the service's existing
appointments for overlaps and only then write.  A failure at any step
raises the matching ``BookingError`` and nothing is persisted.  Reads
skip validation and conflict checks.

The check and the write are not wrapped in one transaction.  Two
concurrent requests for exactly the same start time are caught by the
unique index on ``(service_id, appointment_time)``; partially
overlapping concurrent requests are not serialised.
"""

import logging
from typing import List, Optional

from ..core.clock import SystemClock
from ..core.exceptions import (
    AppointmentNotFoundError,
    DoubleBookingError,
    InvalidTimeError,
    ServiceNotFoundError,
)
from ..domain.conflicts import find_conflicts
from ..domain.interval import TimeInterval
from ..domain.models import Appointment, Service
from ..domain.validators import validate_appointment_request
from ..repositories import AppointmentRepository, ServiceRepository
from ..repositories.appointment_repository import SLOT_TAKEN_MESSAGE
from ..schemas.appointment import AppointmentCreate, AppointmentRead, AppointmentUpdate


logger = logging.getLogger(__name__)

END_OUT_OF_RANGE_MESSAGE = "Appointment would end after the latest supported date"


class AppointmentService:
    """Service for booking, rescheduling and cancelling appointments."""

    def __init__(
        self,
        appointments: Optional[AppointmentRepository] = None,
        services: Optional[ServiceRepository] = None,
        clock=None,
    ):
        self.appointments = appointments or AppointmentRepository()
        self.services = services or ServiceRepository()
        self.clock = clock or SystemClock()

    def list_appointments(self) -> List[AppointmentRead]:
        services: dict[int, Service] = {}
        result: List[AppointmentRead] = []
        for appointment in self.appointments.list():
            if appointment.service_id not in services:
                services[appointment.service_id] = self._require_service(appointment.service_id)
            result.append(self._to_read(appointment, services[appointment.service_id]))
        return result

    def get_appointment(self, appointment_id: int) -> AppointmentRead:
        appointment = self.appointments.get_by_id(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError(appointment_id)
        return self._to_read(appointment, self._require_service(appointment.service_id))

    def create_appointment(self, data: AppointmentCreate) -> AppointmentRead:
        """Book a new appointment.

        Raises
        ------
        ValidationError, InvalidTimeError, ServiceNotFoundError
            The request failed validation.
        DoubleBookingError
            The slot overlaps an existing appointment of the service.
        """
        service = self._check_slot(data)
        appointment = self.appointments.create(data)
        logger.info(
            "Booked appointment %s for service %s at %s",
            appointment.id,
            service.id,
            appointment.appointment_time.isoformat(),
        )
        return self._to_read(appointment, service)

    def update_appointment(self, appointment_id: int, data: AppointmentUpdate) -> AppointmentRead:
        """Replace an appointment, keeping its own slot out of the conflict check.

        Raises the same errors as ``create_appointment`` plus
        ``AppointmentNotFoundError`` when the appointment does not exist.
        """
        service = self._check_slot(data, exclude_id=appointment_id)
        appointment = self.appointments.update(appointment_id, data)
        if appointment is None:
            raise AppointmentNotFoundError(appointment_id)
        logger.info("Updated appointment %s", appointment_id)
        return self._to_read(appointment, service)

    def delete_appointment(self, appointment_id: int) -> None:
        if not self.appointments.delete(appointment_id):
            raise AppointmentNotFoundError(appointment_id)
        logger.info("Deleted appointment %s", appointment_id)

    def _check_slot(self, data: AppointmentCreate, exclude_id: Optional[int] = None) -> Service:
        """Validate ``data`` and make sure its slot is free.  Returns the service."""
        validate_appointment_request(data, self.clock.now(), self.services.exists)
        # The service existed a moment ago; if it vanished since, report it
        # the same way as a missing service.
        service = self._require_service(data.service_id)
        try:
            slot = TimeInterval.from_duration(
                data.appointment_time, service.default_duration_in_minutes
            )
        except OverflowError as e:
            raise InvalidTimeError(END_OUT_OF_RANGE_MESSAGE) from e
        conflicts = find_conflicts(
            self.appointments, service, slot.start, slot.end, exclude_id=exclude_id
        )
        if conflicts:
            logger.warning(
                "Rejected booking for service %s at %s: conflicts with %s",
                service.id,
                slot.start.isoformat(),
                [c.id for c in conflicts],
            )
            raise DoubleBookingError(SLOT_TAKEN_MESSAGE, conflicts=conflicts)
        return service

    def _require_service(self, service_id: int) -> Service:
        service = self.services.get_by_id(service_id)
        if service is None:
            raise ServiceNotFoundError(service_id)
        return service

    @staticmethod
    def _to_read(appointment: Appointment, service: Service) -> AppointmentRead:
        duration = service.default_duration_in_minutes
        return AppointmentRead(
            id=appointment.id,
            client_name=appointment.client_name,
            client_email=appointment.client_email,
            appointment_time=appointment.appointment_time,
            service_id=appointment.service_id,
            end_time=appointment.interval(duration).end,
            service_name=service.name,
            duration_in_minutes=duration,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )
