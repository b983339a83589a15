"""Patient self-service endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from app.dependencies import CurrentPatient, DatabaseSession
from app.schemas.appointments import AppointmentReasonUpdate, AppointmentResponse
from app.schemas.consultations import ConsultationResponse
from app.schemas.patients import PatientProfile, PatientProfileUpdate
from app.services.appointment_service import AppointmentService
from app.services.consultation_service import ConsultationService
from app.services.patient_service import PatientService

router = APIRouter()


@router.get(
    "/patients/me",
    response_model=PatientProfile,
    status_code=status.HTTP_200_OK,
    summary="Get my patient profile",
)
async def get_my_profile(current_patient: CurrentPatient) -> PatientProfile:
    """Return the authenticated patient's profile."""
    return current_patient


@router.put(
    "/patients/me",
    response_model=PatientProfile,
    status_code=status.HTTP_200_OK,
    summary="Update my patient profile",
)
async def update_my_profile(
    data: PatientProfileUpdate,
    current_patient: CurrentPatient,
    db: DatabaseSession,
) -> PatientProfile:
    """Update name, age, blood group, phone or address."""
    service = PatientService(db)
    return await service.update_profile(current_patient, data)


@router.get(
    "/patient/appointments/upcoming",
    response_model=list[AppointmentResponse],
    status_code=status.HTTP_200_OK,
    summary="List upcoming appointments",
)
async def list_upcoming_appointments(
    current_patient: CurrentPatient,
    db: DatabaseSession,
) -> list[AppointmentResponse]:
    """List appointments from today onwards, soonest first."""
    service = AppointmentService(db)
    return await service.list_upcoming_for_patient(current_patient)


@router.get(
    "/patient/appointments/history",
    response_model=list[AppointmentResponse],
    status_code=status.HTTP_200_OK,
    summary="List past appointments",
)
async def list_appointment_history(
    current_patient: CurrentPatient,
    db: DatabaseSession,
) -> list[AppointmentResponse]:
    """List appointments before today, most recent first."""
    service = AppointmentService(db)
    return await service.list_history_for_patient(current_patient)


@router.patch(
    "/patient/appointments/{appointment_id}",
    response_model=AppointmentResponse,
    status_code=status.HTTP_200_OK,
    summary="Update appointment reason",
)
async def update_appointment_reason(
    appointment_id: UUID,
    data: AppointmentReasonUpdate,
    current_patient: CurrentPatient,
    db: DatabaseSession,
) -> AppointmentResponse:
    """
    Edit the reason of a Waiting or Booked appointment.

    Args:
        appointment_id: Appointment ID
        data: New reason
        current_patient: Authenticated patient
        db: Database session

    Returns:
        Updated appointment
    """
    service = AppointmentService(db)
    return await service.update_reason(appointment_id, current_patient, data.reason)


@router.patch(
    "/patient/appointments/{appointment_id}/cancel",
    response_model=AppointmentResponse,
    status_code=status.HTTP_200_OK,
    summary="Cancel appointment",
)
async def cancel_appointment(
    appointment_id: UUID,
    current_patient: CurrentPatient,
    db: DatabaseSession,
) -> AppointmentResponse:
    """Cancel a Waiting or Booked appointment."""
    service = AppointmentService(db)
    return await service.cancel_by_patient(appointment_id, current_patient)


@router.get(
    "/patient/consultations",
    response_model=list[ConsultationResponse],
    status_code=status.HTTP_200_OK,
    summary="List my consultations",
)
async def list_my_consultations(
    current_patient: CurrentPatient,
    db: DatabaseSession,
) -> list[ConsultationResponse]:
    """List the authenticated patient's consultations, newest first."""
    service = ConsultationService(db)
    return await service.list_for_patient(current_patient)
