"""Doctor panel endpoints: the doctor's patients and their history."""

from uuid import UUID

from fastapi import APIRouter, status

from app.dependencies import CurrentDoctor, DatabaseSession
from app.schemas.patients import PatientForDoctor, PatientHistory
from app.services.doctor_patient_service import DoctorPatientService

router = APIRouter()


@router.get(
    "/patients",
    response_model=list[PatientForDoctor],
    status_code=status.HTTP_200_OK,
    summary="List my patients",
)
async def list_my_patients(
    current_doctor: CurrentDoctor,
    db: DatabaseSession,
) -> list[PatientForDoctor]:
    """List patients who had at least one appointment with the doctor."""
    service = DoctorPatientService(db)
    return await service.list_associated_patients(current_doctor)


@router.get(
    "/patients/{patient_id}/history",
    response_model=PatientHistory,
    status_code=status.HTTP_200_OK,
    summary="Get patient history",
)
async def get_patient_history(
    patient_id: UUID,
    current_doctor: CurrentDoctor,
    db: DatabaseSession,
) -> PatientHistory:
    """
    Get a patient's profile, shared appointments and consultations.

    Args:
        patient_id: Patient profile ID
        current_doctor: Authenticated doctor
        db: Database session

    Returns:
        Patient history
    """
    service = DoctorPatientService(db)
    return await service.get_history(current_doctor, patient_id)
