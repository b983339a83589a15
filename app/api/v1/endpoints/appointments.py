"""Appointment endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from app.dependencies import CurrentDoctor, CurrentPatient, DatabaseSession
from app.schemas.appointments import (
    AppointmentBook,
    AppointmentResponse,
    AppointmentStatusUpdate,
)
from app.services.appointment_service import AppointmentService

router = APIRouter()


@router.post(
    "/book",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book an appointment",
)
async def book_appointment(
    data: AppointmentBook,
    current_patient: CurrentPatient,
    db: DatabaseSession,
) -> AppointmentResponse:
    """
    Book an appointment with a doctor for the authenticated patient.

    Args:
        data: Doctor, date, time slot and reason
        current_patient: Authenticated patient
        db: Database session

    Returns:
        Created appointment in Waiting status
    """
    service = AppointmentService(db)
    return await service.book(current_patient, data)


@router.get(
    "/doctor",
    response_model=list[AppointmentResponse],
    status_code=status.HTTP_200_OK,
    summary="List the doctor's appointments",
)
async def list_doctor_appointments(
    current_doctor: CurrentDoctor,
    db: DatabaseSession,
) -> list[AppointmentResponse]:
    """List every appointment of the authenticated doctor."""
    service = AppointmentService(db)
    return await service.list_for_doctor(current_doctor)


@router.patch(
    "/{appointment_id}/status",
    response_model=AppointmentResponse,
    status_code=status.HTTP_200_OK,
    summary="Update appointment status",
)
async def update_appointment_status(
    appointment_id: UUID,
    data: AppointmentStatusUpdate,
    current_doctor: CurrentDoctor,
    db: DatabaseSession,
) -> AppointmentResponse:
    """
    Confirm, cancel or complete one of the doctor's appointments.

    Args:
        appointment_id: Appointment ID
        data: Target status
        current_doctor: Authenticated doctor
        db: Database session

    Returns:
        Updated appointment
    """
    service = AppointmentService(db)
    return await service.set_status(appointment_id, current_doctor, data.status)
