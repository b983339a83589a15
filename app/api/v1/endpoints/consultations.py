"""Consultation endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from app.dependencies import CurrentDoctor, CurrentUser, DatabaseSession
from app.schemas.consultations import ConsultationCreate, ConsultationResponse
from app.services.consultation_service import ConsultationService

router = APIRouter()


@router.post(
    "/appointments/{appointment_id}",
    response_model=ConsultationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record consultation",
)
async def create_consultation(
    appointment_id: UUID,
    data: ConsultationCreate,
    current_doctor: CurrentDoctor,
    db: DatabaseSession,
) -> ConsultationResponse:
    """
    Record the consultation for a Booked appointment.

    The appointment becomes Completed and the patient is notified.

    Args:
        appointment_id: Appointment ID
        data: Clinical fields
        current_doctor: Authenticated doctor
        db: Database session

    Returns:
        Created consultation
    """
    service = ConsultationService(db)
    return await service.create(appointment_id, current_doctor, data)


@router.get(
    "/appointments/{appointment_id}",
    response_model=ConsultationResponse,
    status_code=status.HTTP_200_OK,
    summary="Get consultation for appointment",
)
async def get_consultation(
    appointment_id: UUID,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> ConsultationResponse:
    """Get the consultation of an appointment as its patient or doctor."""
    service = ConsultationService(db)
    return await service.get_for_appointment(appointment_id, current_user["id"])
