"""
FastAPI dependencies providing the service layer to endpoints.

Endpoints receive their services through ``Depends`` so tests can swap
in services backed by another database or a fixed clock via
``app.dependency_overrides``.
"""

from ..services.appointment_service import AppointmentService
from ..services.catalog_service import CatalogService


def get_catalog_service() -> CatalogService:
    return CatalogService()


def get_appointment_service() -> AppointmentService:
    return AppointmentService()
