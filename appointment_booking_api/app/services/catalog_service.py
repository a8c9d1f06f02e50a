"""
Business logic for the service catalog.

``CatalogService`` validates service payloads before writing them and
guards the two rules that tie services to appointments: a service
cannot be deleted while appointments reference it, and its duration
cannot be changed to a value that would make existing appointments
overlap.
"""

import logging
from typing import List, Optional

from ..core.exceptions import (
    DoubleBookingError,
    HasDependentsError,
    ServiceNotFoundError,
    ValidationError,
)
from ..domain.conflicts import first_overlap
from ..domain.validators import validate_service_request
from ..repositories import AppointmentRepository, ServiceRepository
from ..schemas.service import ServiceCreate, ServiceRead, ServiceUpdate


logger = logging.getLogger(__name__)


class CatalogService:
    """Service for managing bookable services."""

    def __init__(
        self,
        services: Optional[ServiceRepository] = None,
        appointments: Optional[AppointmentRepository] = None,
    ):
        self.services = services or ServiceRepository()
        self.appointments = appointments or AppointmentRepository()

    def list_services(self) -> List[ServiceRead]:
        return [ServiceRead.model_validate(s) for s in self.services.list()]

    def get_service(self, service_id: int) -> ServiceRead:
        service = self.services.get_by_id(service_id)
        if service is None:
            raise ServiceNotFoundError(service_id)
        return ServiceRead.model_validate(service)

    def create_service(self, data: ServiceCreate) -> ServiceRead:
        validate_service_request(data)
        service = self.services.create(data)
        logger.info("Created service %s '%s'", service.id, service.name)
        return ServiceRead.model_validate(service)

    def update_service(self, service_id: int, data: ServiceUpdate) -> ServiceRead:
        """Replace a service.

        Appointment end times are derived from the service duration, so a
        longer duration is refused when it would make two of the
        service's existing appointments overlap.
        """
        validate_service_request(data)
        current = self.services.get_by_id(service_id)
        if current is None:
            raise ServiceNotFoundError(service_id)
        if data.default_duration_in_minutes > current.default_duration_in_minutes:
            existing = self.appointments.list_by_service(service_id)
            if existing:
                latest = max(existing, key=lambda a: a.appointment_time)
                try:
                    latest.interval(data.default_duration_in_minutes)
                except OverflowError as e:
                    raise ValidationError(
                        "default_duration_in_minutes",
                        f"Appointment {latest.id} would end after the latest supported date",
                    ) from e
            clash = first_overlap(existing, data.default_duration_in_minutes)
            if clash is not None:
                earlier, later = clash
                logger.warning(
                    "Refusing duration change of service %s: appointments %s and %s would overlap",
                    service_id,
                    earlier.id,
                    later.id,
                )
                raise DoubleBookingError(
                    f"Changing the duration to {data.default_duration_in_minutes} minutes "
                    f"would make appointments {earlier.id} and {later.id} overlap",
                    conflicts=[earlier, later],
                )
        service = self.services.update(service_id, data)
        if service is None:
            raise ServiceNotFoundError(service_id)
        logger.info("Updated service %s", service_id)
        return ServiceRead.model_validate(service)

    def delete_service(self, service_id: int) -> None:
        """Delete a service that no appointment references."""
        if not self.services.exists(service_id):
            raise ServiceNotFoundError(service_id)
        dependents = self.appointments.count_by_service(service_id)
        if dependents:
            raise HasDependentsError(service_id, dependents)
        if not self.services.delete(service_id):
            raise ServiceNotFoundError(service_id)
        logger.info("Deleted service %s", service_id)
