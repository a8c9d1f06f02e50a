"""
Persistence layer.

Repositories hide the SQL behind plain method calls and return the
records defined in ``domain.models``.  The service layer depends only
on these methods, so a different store can be substituted without
touching business logic.
"""

from .appointment_repository import AppointmentRepository
from .service_repository import ServiceRepository

__all__ = ["AppointmentRepository", "ServiceRepository"]
