"""Appointment service for the booking lifecycle."""

from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import Select, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import utc_now, utc_today
from app.core.exceptions import ConflictException, ForbiddenException, NotFoundException
from app.models.appointments import appointments
from app.models.doctors import doctors
from app.models.patients import patients
from app.schemas.appointments import (
    AppointmentBook,
    AppointmentResponse,
    AppointmentStatus,
)
from app.schemas.doctors import DoctorProfile
from app.schemas.patients import PatientProfile
from app.services.identity_service import IdentityDirectory
from app.services.notification_service import NotificationService, NotificationSink

logger = structlog.get_logger(__name__)

ALLOWED_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.WAITING: frozenset({AppointmentStatus.BOOKED, AppointmentStatus.CANCELLED}),
    AppointmentStatus.BOOKED: frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}


def ensure_transition(current: AppointmentStatus, new: AppointmentStatus) -> None:
    """
    Check that ``current -> new`` is an edge of the lifecycle graph.

    Raises:
        ConflictException: If the transition is not allowed
    """
    if new in ALLOWED_TRANSITIONS[current]:
        return
    if current.is_terminal:
        raise ConflictException(f"Cannot update an appointment that is already {current.value}")
    raise ConflictException(
        f"Cannot change appointment status from {current.value} to {new.value}"
    )


async def transition_status(
    db: AsyncSession,
    appointment_id: UUID,
    current: AppointmentStatus,
    new: AppointmentStatus,
) -> None:
    """
    Move an appointment from ``current`` to ``new`` without committing.

    The update only matches while the stored status is still ``current``, so a
    concurrent transition that got there first turns this one into a conflict.

    Raises:
        ConflictException: If the transition is not allowed or lost a race
    """
    ensure_transition(current, new)

    result = await db.execute(
        update(appointments)
        .where(
            appointments.c.id == appointment_id,
            appointments.c.status == current.value,
        )
        .values(status=new.value, updated_at=utc_now())
    )
    if result.rowcount != 1:
        raise ConflictException("Appointment was modified by another request")


def appointment_query() -> Select[Any]:
    """Select appointments with doctor/patient names and owning user IDs."""
    return select(
        appointments,
        doctors.c.name.label("doctor_name"),
        doctors.c.user_id.label("doctor_user_id"),
        patients.c.name.label("patient_name"),
        patients.c.user_id.label("patient_user_id"),
    ).select_from(
        appointments.join(doctors, appointments.c.doctor_id == doctors.c.id).join(
            patients, appointments.c.patient_id == patients.c.id
        )
    )


class AppointmentService:
    """Service for managing the appointment lifecycle."""

    def __init__(self, db: AsyncSession, notifier: NotificationSink | None = None):
        """Initialize service with database session and notification sink."""
        self.db = db
        self.directory = IdentityDirectory(db)
        self.notifier = notifier or NotificationService(db)

    async def _load(self, appointment_id: UUID) -> dict[str, Any]:
        """
        Load an appointment row with names and owning user IDs.

        Raises:
            NotFoundException: If appointment not found
        """
        result = await self.db.execute(
            appointment_query().where(appointments.c.id == appointment_id)
        )
        row = result.mappings().first()
        if not row:
            raise NotFoundException("Appointment not found.")
        return dict(row)

    async def _list(self, query: Select[Any]) -> list[AppointmentResponse]:
        result = await self.db.execute(query)
        return [AppointmentResponse.model_validate(dict(row)) for row in result.mappings()]

    async def _load_for_patient(
        self,
        appointment_id: UUID,
        patient: PatientProfile,
    ) -> dict[str, Any]:
        """
        Load an appointment owned by the patient.

        Raises:
            NotFoundException: If appointment not found
            ForbiddenException: If the patient does not own it
        """
        row = await self._load(appointment_id)
        if row["patient_id"] != patient.id:
            raise ForbiddenException("You do not have permission to modify this appointment.")
        return row

    async def book(self, patient: PatientProfile, data: AppointmentBook) -> AppointmentResponse:
        """
        Book an appointment in Waiting status and notify the doctor.

        No double-booking check is made against other appointments or the
        doctor's availability slots.

        Args:
            patient: Booking patient
            data: Doctor, date, time slot and reason

        Returns:
            Created appointment

        Raises:
            NotFoundException: If the doctor does not exist
        """
        doctor = await self.directory.get_doctor(data.doctor_id)

        result = await self.db.execute(
            insert(appointments)
            .values(
                doctor_id=doctor.id,
                patient_id=patient.id,
                date=data.date,
                time_slot=data.time_slot,
                reason=data.reason,
                specialty=doctor.specialization,
                status=AppointmentStatus.WAITING.value,
            )
            .returning(appointments.c.id)
        )
        appointment_id = result.scalar_one()
        await self.db.commit()

        logger.info(
            "appointment_booked",
            appointment_id=str(appointment_id),
            doctor_id=str(doctor.id),
            patient_id=str(patient.id),
        )

        await self.notifier.notify(
            doctor.user_id,
            f"You have a new appointment request from {patient.name} "
            f"for {data.date.isoformat()}",
        )

        return AppointmentResponse.model_validate(await self._load(appointment_id))

    async def list_for_doctor(self, doctor: DoctorProfile) -> list[AppointmentResponse]:
        """List all appointments of a doctor."""
        return await self._list(
            appointment_query()
            .where(appointments.c.doctor_id == doctor.id)
            .order_by(appointments.c.date, appointments.c.time_slot)
        )

    async def set_status(
        self,
        appointment_id: UUID,
        doctor: DoctorProfile,
        new_status: AppointmentStatus,
    ) -> AppointmentResponse:
        """
        Change the status of one of the doctor's appointments.

        Args:
            appointment_id: Appointment ID
            doctor: Treating doctor
            new_status: Target status

        Returns:
            Updated appointment

        Raises:
            NotFoundException: If appointment not found
            ForbiddenException: If the appointment belongs to another doctor
            ConflictException: If the transition is not allowed
        """
        row = await self._load(appointment_id)
        if row["doctor_id"] != doctor.id:
            raise ForbiddenException("You do not have permission to modify this appointment.")

        current = AppointmentStatus(row["status"])
        try:
            await transition_status(self.db, appointment_id, current, new_status)
        except ConflictException:
            await self.db.rollback()
            raise
        await self.db.commit()

        logger.info(
            "appointment_status_changed",
            appointment_id=str(appointment_id),
            old_status=current.value,
            new_status=new_status.value,
        )

        day = row["date"].isoformat()
        if new_status == AppointmentStatus.BOOKED:
            message = f"Dr. {doctor.name} has confirmed your appointment for {day}"
        else:
            message = (
                f"Dr. {doctor.name} has changed the status of your appointment "
                f"for {day} to {new_status.value}"
            )
        await self.notifier.notify(row["patient_user_id"], message)

        return AppointmentResponse.model_validate(await self._load(appointment_id))

    async def list_upcoming_for_patient(self, patient: PatientProfile) -> list[AppointmentResponse]:
        """List the patient's appointments from today onwards, soonest first."""
        return await self._list(
            appointment_query()
            .where(
                appointments.c.patient_id == patient.id,
                appointments.c.date >= utc_today(),
            )
            .order_by(appointments.c.date.asc(), appointments.c.time_slot.asc())
        )

    async def list_history_for_patient(self, patient: PatientProfile) -> list[AppointmentResponse]:
        """List the patient's appointments before today, most recent first."""
        return await self._list(
            appointment_query()
            .where(
                appointments.c.patient_id == patient.id,
                appointments.c.date < utc_today(),
            )
            .order_by(appointments.c.date.desc(), appointments.c.time_slot.desc())
        )

    async def update_reason(
        self,
        appointment_id: UUID,
        patient: PatientProfile,
        reason: str,
    ) -> AppointmentResponse:
        """
        Edit the reason of an open appointment.

        Raises:
            NotFoundException: If appointment not found
            ForbiddenException: If the patient does not own it
            ConflictException: If the appointment is Completed or Cancelled
        """
        row = await self._load_for_patient(appointment_id, patient)
        current = AppointmentStatus(row["status"])
        if current.is_terminal:
            raise ConflictException(f"Cannot update an appointment that is already {current.value}")

        result = await self.db.execute(
            update(appointments)
            .where(
                appointments.c.id == appointment_id,
                appointments.c.status == current.value,
            )
            .values(reason=reason, updated_at=utc_now())
        )
        if result.rowcount != 1:
            await self.db.rollback()
            raise ConflictException("Appointment was modified by another request")
        await self.db.commit()

        logger.info("appointment_reason_updated", appointment_id=str(appointment_id))
        return AppointmentResponse.model_validate(await self._load(appointment_id))

    async def cancel_by_patient(
        self,
        appointment_id: UUID,
        patient: PatientProfile,
    ) -> AppointmentResponse:
        """
        Cancel an open appointment and notify the doctor.

        Raises:
            NotFoundException: If appointment not found
            ForbiddenException: If the patient does not own it
            ConflictException: If the appointment is Completed or Cancelled
        """
        row = await self._load_for_patient(appointment_id, patient)
        current = AppointmentStatus(row["status"])
        if current.is_terminal:
            raise ConflictException(f"Cannot cancel an appointment that is already {current.value}")

        try:
            await transition_status(
                self.db, appointment_id, current, AppointmentStatus.CANCELLED
            )
        except ConflictException:
            await self.db.rollback()
            raise
        await self.db.commit()

        logger.info("appointment_cancelled_by_patient", appointment_id=str(appointment_id))

        await self.notifier.notify(
            row["doctor_user_id"],
            f"Appointment with {patient.name} on {row['date'].isoformat()} "
            "has been cancelled by the patient.",
        )

        return AppointmentResponse.model_validate(await self._load(appointment_id))
