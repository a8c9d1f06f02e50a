"""Shared fixtures: a fresh SQLite database per test and a fixed clock."""

from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from appointment_booking_api.app.api.deps import get_appointment_service
from appointment_booking_api.app.core.config import settings
from appointment_booking_api.app.core.db import init_db
from appointment_booking_api.app.main import app
from appointment_booking_api.app.repositories import AppointmentRepository, ServiceRepository
from appointment_booking_api.app.schemas.appointment import AppointmentCreate
from appointment_booking_api.app.schemas.service import ServiceCreate
from appointment_booking_api.app.services.appointment_service import AppointmentService
from appointment_booking_api.app.services.catalog_service import CatalogService

NOW = datetime(2030, 1, 1, 8, 0)


class FixedClock:
    def __init__(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current


@pytest.fixture()
def db_path(tmp_path, monkeypatch) -> str:
    path = str(tmp_path / "booking.db")
    monkeypatch.setattr(settings, "database_url", path)
    init_db()
    return path


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture()
def service_repo(db_path) -> ServiceRepository:
    return ServiceRepository(db_path)


@pytest.fixture()
def appointment_repo(db_path) -> AppointmentRepository:
    return AppointmentRepository(db_path)


@pytest.fixture()
def catalog(service_repo, appointment_repo) -> CatalogService:
    return CatalogService(service_repo, appointment_repo)


@pytest.fixture()
def booking(appointment_repo, service_repo, clock) -> AppointmentService:
    return AppointmentService(appointment_repo, service_repo, clock)


@pytest.fixture()
def haircut(catalog):
    """A 60 minute service."""
    return catalog.create_service(
        ServiceCreate(name="Haircut", description="Wash and cut", default_duration_in_minutes=60)
    )


@pytest.fixture()
def client(db_path, clock):
    app.dependency_overrides[get_appointment_service] = lambda: AppointmentService(clock=clock)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _make_request(service_id: int, at: datetime, **overrides) -> AppointmentCreate:
    fields = dict(
        client_name="Jane Doe",
        client_email="jane@example.com",
        appointment_time=at,
        service_id=service_id,
    )
    fields.update(overrides)
    return AppointmentCreate(**fields)


@pytest.fixture()
def make_request():
    """Build an appointment payload; keyword arguments override fields."""
    return _make_request
