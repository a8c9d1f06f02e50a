"""Tests for service and appointment request validation."""

from datetime import datetime, timedelta

import pytest

from appointment_booking_api.app.core.exceptions import (
    InvalidTimeError,
    ServiceNotFoundError,
    ValidationError,
)
from appointment_booking_api.app.domain.validators import (
    validate_appointment_request,
    validate_service_request,
)
from appointment_booking_api.app.schemas.service import ServiceCreate

NOW = datetime(2030, 1, 1, 9, 0)
LATER = NOW + timedelta(hours=1)


def _service(**overrides) -> ServiceCreate:
    fields = dict(name="Haircut", description="Wash and cut", default_duration_in_minutes=60)
    fields.update(overrides)
    return ServiceCreate(**fields)


def _known(service_id: int) -> bool:
    return service_id == 1


def _validate(make_request, **overrides):
    at = overrides.pop("at", LATER)
    service_id = overrides.pop("service_id", 1)
    validate_appointment_request(make_request(service_id, at, **overrides), NOW, _known)


# ── services ──────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"name": "   "}, "name"),
        ({"description": ""}, "description"),
        ({"default_duration_in_minutes": 0}, "default_duration_in_minutes"),
        ({"default_duration_in_minutes": -15}, "default_duration_in_minutes"),
        ({"default_duration_in_minutes": 1441}, "default_duration_in_minutes"),
    ],
)
def test_invalid_service_requests(overrides, field):
    with pytest.raises(ValidationError) as excinfo:
        validate_service_request(_service(**overrides))
    assert excinfo.value.field == field


def test_full_day_duration_is_accepted():
    validate_service_request(_service(default_duration_in_minutes=1440))


def test_blank_name_reported_before_bad_duration():
    with pytest.raises(ValidationError) as excinfo:
        validate_service_request(_service(name="", default_duration_in_minutes=0))
    assert excinfo.value.field == "name"


# ── appointments ──────────────────────────────────────────────────────


def test_valid_appointment_passes(make_request):
    _validate(make_request)


def test_blank_client_name(make_request):
    with pytest.raises(ValidationError) as excinfo:
        _validate(make_request, client_name="  ", client_email="invalid")
    assert excinfo.value.field == "client_name"


def test_blank_client_email(make_request):
    with pytest.raises(ValidationError) as excinfo:
        _validate(make_request, client_email=" ")
    assert excinfo.value.field == "client_email"
    assert "blank" in excinfo.value.message


def test_email_without_at_sign(make_request):
    with pytest.raises(ValidationError) as excinfo:
        _validate(make_request, client_email="invalid-email")
    assert excinfo.value.message == "Invalid email format"


def test_email_rule_is_permissive(make_request):
    _validate(make_request, client_email="a@b")


def test_time_equal_to_now_is_rejected(make_request):
    with pytest.raises(InvalidTimeError):
        _validate(make_request, at=NOW)


def test_past_time_reported_before_missing_service(make_request):
    with pytest.raises(InvalidTimeError):
        _validate(make_request, at=NOW - timedelta(days=1), service_id=99)


def test_unknown_service(make_request):
    with pytest.raises(ServiceNotFoundError) as excinfo:
        _validate(make_request, service_id=99)
    assert excinfo.value.service_id == 99
