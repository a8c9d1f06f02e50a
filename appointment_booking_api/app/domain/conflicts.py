"""Detection of double bookings for a single service."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional

from .interval import TimeInterval
from .models import Appointment, Service


def overlapping(
    candidate: TimeInterval,
    existing: Iterable[Appointment],
    duration_minutes: int,
    exclude_id: Optional[int] = None,
) -> list[Appointment]:
    """Return the appointments whose occupied range overlaps ``candidate``.

    Every appointment in ``existing`` is assumed to belong to the same
    service and therefore to last ``duration_minutes``.  The appointment
    with id ``exclude_id`` is skipped so that an update never conflicts
    with the slot it already holds.
    """
    return [
        appointment
        for appointment in existing
        if appointment.id != exclude_id
        and appointment.interval(duration_minutes).overlaps(candidate)
    ]


def find_conflicts(
    appointments,
    service: Service,
    start: datetime,
    end: datetime,
    exclude_id: Optional[int] = None,
) -> list[Appointment]:
    """Return the appointments of ``service`` that overlap ``[start, end)``.

    ``appointments`` is the appointment repository.  Only appointments
    starting less than one service duration before ``start`` can reach
    into the candidate range, so the repository is asked for that window
    and the exact predicate is applied here.  An empty result means the
    slot is free.
    """
    candidate = TimeInterval(start, end)
    duration = service.default_duration_in_minutes
    window_start = start - timedelta(minutes=duration)
    existing = appointments.find_by_service_in_range(
        service.id, window_start, end, exclude_id=exclude_id
    )
    return overlapping(candidate, existing, duration, exclude_id=exclude_id)


def first_overlap(
    appointments: Iterable[Appointment], duration_minutes: int
) -> Optional[tuple[Appointment, Appointment]]:
    """Return the first pair of overlapping appointments, if any.

    Used when a service's duration changes: all of its appointments are
    re-checked against each other with the new duration.  Sorting by
    start time means only neighbours need comparing.
    """
    ordered = sorted(appointments, key=lambda a: a.appointment_time)
    for previous, current in zip(ordered, ordered[1:]):
        if previous.interval(duration_minutes).overlaps(current.interval(duration_minutes)):
            return previous, current
    return None
