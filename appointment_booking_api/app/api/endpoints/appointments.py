"""
Appointment endpoints.

These routes book, reschedule, list and cancel appointments.  They rely
on ``AppointmentService`` for validation and double-booking checks and
map its errors to 400 (validation, past time), 404 (unknown
appointment or service) and 409 (slot already taken).
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from ...core.db import SQLITE_MAX_INTEGER, SQLITE_MIN_INTEGER
from ...core.exceptions import BookingError
from ...schemas.appointment import AppointmentCreate, AppointmentRead, AppointmentUpdate
from ...schemas.common import ApiResponse
from ...services.appointment_service import AppointmentService
from ..deps import get_appointment_service


router = APIRouter()


@router.get("", response_model=ApiResponse[List[AppointmentRead]])
def list_appointments(
    booking: AppointmentService = Depends(get_appointment_service),
) -> ApiResponse[List[AppointmentRead]]:
    """List all appointments ordered by start time."""
    try:
        appointments = booking.list_appointments()
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return ApiResponse(
        success=True,
        message="Appointments retrieved successfully",
        data=appointments,
    )


@router.get("/{appointment_id}", response_model=ApiResponse[AppointmentRead])
def get_appointment(
    appointment_id: int = Path(
        ..., ge=SQLITE_MIN_INTEGER, le=SQLITE_MAX_INTEGER, description="ID of the appointment"
    ),
    booking: AppointmentService = Depends(get_appointment_service),
) -> ApiResponse[AppointmentRead]:
    """Retrieve a single appointment together with its service's name and duration."""
    try:
        appointment = booking.get_appointment(appointment_id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return ApiResponse(success=True, message="Appointment retrieved successfully", data=appointment)


@router.post(
    "",
    response_model=ApiResponse[AppointmentRead],
    status_code=status.HTTP_201_CREATED,
)
def create_appointment(
    body: AppointmentCreate,
    booking: AppointmentService = Depends(get_appointment_service),
) -> ApiResponse[AppointmentRead]:
    """Book an appointment.

    The slot runs from ``appointment_time`` for the service's default
    duration.  A slot that overlaps another appointment of the same
    service is rejected with 409; a slot starting exactly when another
    one ends is accepted.
    """
    try:
        appointment = booking.create_appointment(body)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return ApiResponse(success=True, message="Appointment created successfully", data=appointment)


@router.put("/{appointment_id}", response_model=ApiResponse[AppointmentRead])
def update_appointment(
    body: AppointmentUpdate,
    appointment_id: int = Path(
        ..., ge=SQLITE_MIN_INTEGER, le=SQLITE_MAX_INTEGER, description="ID of the appointment"
    ),
    booking: AppointmentService = Depends(get_appointment_service),
) -> ApiResponse[AppointmentRead]:
    """Replace an appointment.

    Keeping the same slot never conflicts with the appointment itself.
    """
    try:
        appointment = booking.update_appointment(appointment_id, body)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return ApiResponse(success=True, message="Appointment updated successfully", data=appointment)


@router.delete("/{appointment_id}", response_model=ApiResponse[str])
def delete_appointment(
    appointment_id: int = Path(
        ..., ge=SQLITE_MIN_INTEGER, le=SQLITE_MAX_INTEGER, description="ID of the appointment"
    ),
    booking: AppointmentService = Depends(get_appointment_service),
) -> ApiResponse[str]:
    """Cancel an appointment.  Returns 404 if it does not exist."""
    try:
        booking.delete_appointment(appointment_id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return ApiResponse(
        success=True,
        message="Appointment deleted successfully",
        data="Appointment deleted",
    )
