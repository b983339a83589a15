"""Consultation service: clinical records that finalize appointments."""

from uuid import UUID

import structlog
from sqlalchemy import desc, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import utc_now, utc_today
from app.core.exceptions import ConflictException, ForbiddenException, NotFoundException
from app.models.appointments import appointments
from app.models.consultations import consultations
from app.schemas.appointments import AppointmentStatus
from app.schemas.consultations import ConsultationCreate, ConsultationResponse
from app.schemas.doctors import DoctorProfile
from app.schemas.patients import PatientProfile
from app.services.appointment_service import appointment_query, transition_status
from app.services.notification_service import NotificationService, NotificationSink

logger = structlog.get_logger(__name__)


class ConsultationService:
    """Service for recording and reading consultations."""

    def __init__(self, db: AsyncSession, notifier: NotificationSink | None = None):
        """Initialize service with database session and notification sink."""
        self.db = db
        self.notifier = notifier or NotificationService(db)

    async def _load_appointment(self, appointment_id: UUID) -> dict:
        result = await self.db.execute(
            appointment_query().where(appointments.c.id == appointment_id)
        )
        row = result.mappings().first()
        if not row:
            raise NotFoundException(f"Appointment not found with ID: {appointment_id}")
        return dict(row)

    async def create(
        self,
        appointment_id: UUID,
        doctor: DoctorProfile,
        data: ConsultationCreate,
    ) -> ConsultationResponse:
        """
        Record the consultation for a Booked appointment and complete it.

        The consultation insert and the Booked -> Completed transition are
        committed together; the patient is notified afterwards.

        Args:
            appointment_id: Appointment being finalized
            doctor: Treating doctor
            data: Clinical fields

        Returns:
            Created consultation

        Raises:
            NotFoundException: If appointment not found
            ForbiddenException: If the appointment belongs to another doctor
            ConflictException: If the appointment is not Booked or already has a consultation
        """
        appointment = await self._load_appointment(appointment_id)

        if appointment["doctor_user_id"] != doctor.user_id:
            raise ForbiddenException(
                "You do not have permission to create a consultation for this appointment."
            )

        if appointment["status"] != AppointmentStatus.BOOKED.value:
            raise ConflictException("Consultation can only be created for Booked appointments.")

        try:
            result = await self.db.execute(
                insert(consultations)
                .values(
                    appointment_id=appointment_id,
                    doctor_id=appointment["doctor_id"],
                    patient_id=appointment["patient_id"],
                    date=utc_today(),
                    symptoms=data.symptoms,
                    blood_pressure=data.blood_pressure,
                    height=data.height,
                    weight=data.weight,
                    description=data.description,
                    notes=data.notes,
                    status=data.status.value,
                    created_at=utc_now(),
                )
                .returning(consultations)
            )
            consultation = ConsultationResponse.model_validate(dict(result.mappings().one()))

            await transition_status(
                self.db,
                appointment_id,
                AppointmentStatus.BOOKED,
                AppointmentStatus.COMPLETED,
            )
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictException("A consultation already exists for this appointment.") from e
        except ConflictException:
            await self.db.rollback()
            raise

        logger.info(
            "consultation_created",
            consultation_id=str(consultation.id),
            appointment_id=str(appointment_id),
        )

        await self.notifier.notify(
            appointment["patient_user_id"],
            f"Your consultation notes from Dr. {appointment['doctor_name']} for your "
            f"appointment on {appointment['date'].isoformat()} are now available.",
        )

        return consultation

    async def get_for_appointment(
        self,
        appointment_id: UUID,
        user_id: UUID,
    ) -> ConsultationResponse:
        """
        Get the consultation of an appointment for its patient or doctor.

        Raises:
            NotFoundException: If appointment or consultation not found
            ForbiddenException: If the caller is neither the patient nor the doctor
        """
        appointment = await self._load_appointment(appointment_id)

        result = await self.db.execute(
            select(consultations).where(consultations.c.appointment_id == appointment_id)
        )
        row = result.mappings().first()
        if not row:
            raise NotFoundException("Consultation not found for this appointment.")

        if user_id not in (appointment["patient_user_id"], appointment["doctor_user_id"]):
            raise ForbiddenException("You do not have permission to view this consultation.")

        return ConsultationResponse.model_validate(dict(row))

    async def list_for_patient(self, patient: PatientProfile) -> list[ConsultationResponse]:
        """List all consultations of a patient, newest first."""
        return await list_patient_consultations(self.db, patient.id)


async def list_patient_consultations(
    db: AsyncSession,
    patient_id: UUID,
) -> list[ConsultationResponse]:
    """Consultations of a patient across every doctor, newest first."""
    result = await db.execute(
        select(consultations)
        .where(consultations.c.patient_id == patient_id)
        .order_by(desc(consultations.c.date), desc(consultations.c.created_at))
    )
    return [ConsultationResponse.model_validate(dict(row)) for row in result.mappings()]
