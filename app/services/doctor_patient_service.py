"""Patient history views for treating doctors."""

from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ForbiddenException
from app.models.appointments import appointments
from app.models.patients import patients
from app.schemas.appointments import AppointmentResponse
from app.schemas.doctors import DoctorProfile
from app.schemas.patients import PatientForDoctor, PatientHistory
from app.services.appointment_service import appointment_query
from app.services.consultation_service import list_patient_consultations
from app.services.identity_service import IdentityDirectory

logger = structlog.get_logger(__name__)


class DoctorPatientService:
    """Read-only composition of a patient's appointments and consultations."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db
        self.directory = IdentityDirectory(db)

    async def list_associated_patients(self, doctor: DoctorProfile) -> list[PatientForDoctor]:
        """List the distinct patients who ever had an appointment with the doctor."""
        seen_by_doctor = select(appointments.c.patient_id).where(
            appointments.c.doctor_id == doctor.id
        )
        result = await self.db.execute(
            select(patients).where(patients.c.id.in_(seen_by_doctor)).order_by(patients.c.name)
        )
        return [PatientForDoctor.model_validate(dict(row)) for row in result.mappings()]

    async def get_history(self, doctor: DoctorProfile, patient_id: UUID) -> PatientHistory:
        """
        Get a patient's profile, shared appointments and consultations.

        Access is granted by the existence of at least one appointment between
        the doctor and the patient. Once granted, consultations recorded by
        every doctor are included.

        Args:
            doctor: Requesting doctor
            patient_id: Patient profile ID

        Returns:
            Patient history

        Raises:
            NotFoundException: If patient not found
            ForbiddenException: If the doctor never had an appointment with the patient
        """
        patient = await self.directory.get_patient(patient_id)

        result = await self.db.execute(
            appointment_query()
            .where(
                appointments.c.doctor_id == doctor.id,
                appointments.c.patient_id == patient.id,
            )
            .order_by(appointments.c.date.desc(), appointments.c.time_slot.desc())
        )
        shared = [AppointmentResponse.model_validate(dict(row)) for row in result.mappings()]

        if not shared:
            logger.warning(
                "patient_history_denied",
                doctor_id=str(doctor.id),
                patient_id=str(patient.id),
            )
            raise ForbiddenException("You do not have permission to view this patient's history.")

        return PatientHistory(
            patient=patient,
            appointments=shared,
            consultations=await list_patient_consultations(self.db, patient.id),
        )
