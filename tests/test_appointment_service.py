"""Tests for the booking workflow against a temporary SQLite database."""

from __future__ import annotations

from datetime import datetime, timedelta
from itertools import combinations

import pytest

from appointment_booking_api.app.core.exceptions import (
    AppointmentNotFoundError,
    DoubleBookingError,
    InvalidTimeError,
    ServiceNotFoundError,
    ValidationError,
)
from appointment_booking_api.app.schemas.service import ServiceCreate

TEN = datetime(2030, 1, 1, 10, 0)


def test_create_returns_appointment_with_service_data(booking, haircut, make_request):
    created = booking.create_appointment(make_request(haircut.id, TEN))

    assert created.id is not None
    assert created.service_name == "Haircut"
    assert created.duration_in_minutes == 60
    assert created.end_time == TEN + timedelta(minutes=60)
    assert booking.get_appointment(created.id) == created


def test_back_to_back_booking_is_accepted(booking, haircut, make_request):
    booking.create_appointment(make_request(haircut.id, TEN))
    second = booking.create_appointment(make_request(haircut.id, TEN + timedelta(hours=1)))
    earlier = booking.create_appointment(make_request(haircut.id, TEN - timedelta(hours=1)))

    assert second.appointment_time == datetime(2030, 1, 1, 11, 0)
    assert earlier.end_time == TEN


def test_same_start_is_double_booking(booking, haircut, make_request, appointment_repo):
    first = booking.create_appointment(make_request(haircut.id, TEN))

    with pytest.raises(DoubleBookingError) as excinfo:
        booking.create_appointment(make_request(haircut.id, TEN, client_name="Bob"))

    assert [c.id for c in excinfo.value.conflicts] == [first.id]
    assert appointment_repo.count_by_service(haircut.id) == 1


@pytest.mark.parametrize("offset_minutes", [30, -30, 59, -59])
def test_partial_overlap_is_double_booking(booking, haircut, make_request, offset_minutes):
    booking.create_appointment(make_request(haircut.id, TEN))
    with pytest.raises(DoubleBookingError):
        booking.create_appointment(
            make_request(haircut.id, TEN + timedelta(minutes=offset_minutes))
        )


def test_other_services_do_not_conflict(booking, catalog, haircut, make_request):
    massage = catalog.create_service(
        ServiceCreate(name="Massage", description="Back massage", default_duration_in_minutes=30)
    )
    booking.create_appointment(make_request(haircut.id, TEN))
    other = booking.create_appointment(make_request(massage.id, TEN))
    assert other.service_name == "Massage"


def test_validation_failures_propagate(booking, haircut, make_request, clock):
    with pytest.raises(ValidationError):
        booking.create_appointment(make_request(haircut.id, TEN, client_email="invalid-email"))
    with pytest.raises(InvalidTimeError):
        booking.create_appointment(make_request(haircut.id, clock.now()))
    with pytest.raises(ServiceNotFoundError):
        booking.create_appointment(make_request(999, TEN))
    assert booking.list_appointments() == []


def test_update_keeping_same_slot(booking, haircut, make_request):
    created = booking.create_appointment(make_request(haircut.id, TEN))

    updated = booking.update_appointment(
        created.id, make_request(haircut.id, TEN, client_name="Janet Doe")
    )

    assert updated.id == created.id
    assert updated.client_name == "Janet Doe"
    assert updated.appointment_time == TEN


def test_update_shifting_within_own_slot(booking, haircut, make_request):
    created = booking.create_appointment(make_request(haircut.id, TEN))
    updated = booking.update_appointment(
        created.id, make_request(haircut.id, TEN + timedelta(minutes=15))
    )
    assert updated.end_time == TEN + timedelta(minutes=75)


def test_update_into_another_slot_is_double_booking(booking, haircut, make_request):
    booking.create_appointment(make_request(haircut.id, TEN))
    second = booking.create_appointment(make_request(haircut.id, TEN + timedelta(hours=2)))

    with pytest.raises(DoubleBookingError):
        booking.update_appointment(
            second.id, make_request(haircut.id, TEN + timedelta(minutes=30))
        )
    assert booking.get_appointment(second.id).appointment_time == TEN + timedelta(hours=2)


def test_update_missing_appointment(booking, haircut, make_request):
    with pytest.raises(AppointmentNotFoundError):
        booking.update_appointment(42, make_request(haircut.id, TEN))


def test_update_runs_validation(booking, haircut, make_request):
    created = booking.create_appointment(make_request(haircut.id, TEN))
    with pytest.raises(ValidationError):
        booking.update_appointment(created.id, make_request(haircut.id, TEN, client_name=""))


def test_delete_appointment(booking, haircut, make_request):
    created = booking.create_appointment(make_request(haircut.id, TEN))

    booking.delete_appointment(created.id)

    with pytest.raises(AppointmentNotFoundError):
        booking.get_appointment(created.id)
    with pytest.raises(AppointmentNotFoundError):
        booking.delete_appointment(created.id)


def test_list_is_ordered_by_start(booking, haircut, make_request):
    later = booking.create_appointment(make_request(haircut.id, TEN + timedelta(hours=3)))
    sooner = booking.create_appointment(make_request(haircut.id, TEN))
    assert [a.id for a in booking.list_appointments()] == [sooner.id, later.id]


def test_accepted_appointments_never_overlap(booking, haircut, make_request):
    # Requests every 20 minutes for a 60 minute service: only some fit.
    for step in range(12):
        try:
            booking.create_appointment(
                make_request(haircut.id, TEN + timedelta(minutes=20 * step))
            )
        except DoubleBookingError:
            pass

    accepted = booking.list_appointments()
    assert len(accepted) == 4
    for a, b in combinations(accepted, 2):
        assert a.end_time <= b.appointment_time or b.end_time <= a.appointment_time


def test_unique_index_backs_up_conflict_check(appointment_repo, haircut, make_request):
    appointment_repo.create(make_request(haircut.id, TEN))
    with pytest.raises(DoubleBookingError):
        appointment_repo.create(make_request(haircut.id, TEN, client_name="Racer"))


def test_foreign_key_reports_missing_service(appointment_repo, make_request):
    with pytest.raises(ServiceNotFoundError):
        appointment_repo.create(make_request(12345, TEN))


def test_slot_ending_past_the_calendar_is_invalid_time(booking, haircut, make_request):
    with pytest.raises(InvalidTimeError):
        booking.create_appointment(make_request(haircut.id, datetime(9999, 12, 31, 23, 30)))
    assert booking.list_appointments() == []
