"""Availability ledger: doctor-declared time slots."""

from collections import defaultdict
from datetime import date
from uuid import UUID

import structlog
from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import utc_now
from app.core.exceptions import ForbiddenException, NotFoundException
from app.models.doctor_availability import doctor_availability
from app.schemas.availability import AvailabilityCreate, AvailabilityResponse
from app.schemas.doctors import DoctorProfile

logger = structlog.get_logger(__name__)


def _open_after(since: date) -> tuple:
    return (
        doctor_availability.c.date > since,
        doctor_availability.c.is_available.is_(True),
    )


class AvailabilityService:
    """Service for managing a doctor's availability slots."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def _get_owned_slot(self, doctor: DoctorProfile, slot_id: UUID) -> dict:
        """
        Load a slot and check that the doctor owns it.

        Raises:
            NotFoundException: If slot not found
            ForbiddenException: If the slot belongs to another doctor
        """
        result = await self.db.execute(
            select(doctor_availability).where(doctor_availability.c.id == slot_id)
        )
        row = result.mappings().first()
        if not row:
            raise NotFoundException("Availability slot not found.")
        if row["doctor_id"] != doctor.id:
            raise ForbiddenException(
                "You do not have permission to modify this availability slot."
            )
        return dict(row)

    async def _list(self, *conditions) -> list[AvailabilityResponse]:
        result = await self.db.execute(
            select(doctor_availability)
            .where(*conditions)
            .order_by(doctor_availability.c.date.asc(), doctor_availability.c.time_slot.asc())
        )
        return [AvailabilityResponse.model_validate(dict(row)) for row in result.mappings()]

    async def add(self, doctor: DoctorProfile, data: AvailabilityCreate) -> AvailabilityResponse:
        """
        Declare a slot. Duplicate (date, time slot) pairs are accepted.

        Args:
            doctor: Owning doctor
            data: Slot date, label and open flag

        Returns:
            Created slot
        """
        result = await self.db.execute(
            insert(doctor_availability)
            .values(
                doctor_id=doctor.id,
                date=data.date,
                time_slot=data.time_slot,
                is_available=data.is_available,
            )
            .returning(doctor_availability)
        )
        row = result.mappings().one()
        await self.db.commit()

        logger.info("availability_added", slot_id=str(row["id"]), doctor_id=str(doctor.id))
        return AvailabilityResponse.model_validate(dict(row))

    async def list_for_date(self, doctor: DoctorProfile, day: date) -> list[AvailabilityResponse]:
        """List the doctor's slots on one date."""
        return await self._list(
            doctor_availability.c.doctor_id == doctor.id,
            doctor_availability.c.date == day,
        )

    async def list_all(self, doctor: DoctorProfile) -> list[AvailabilityResponse]:
        """List every slot of the doctor ordered by date and time slot."""
        return await self._list(doctor_availability.c.doctor_id == doctor.id)

    async def update(
        self,
        doctor: DoctorProfile,
        slot_id: UUID,
        is_available: bool,
    ) -> AvailabilityResponse:
        """
        Open or close one of the doctor's slots.

        Raises:
            NotFoundException: If slot not found
            ForbiddenException: If the slot belongs to another doctor
        """
        await self._get_owned_slot(doctor, slot_id)

        result = await self.db.execute(
            update(doctor_availability)
            .where(doctor_availability.c.id == slot_id)
            .values(is_available=is_available, updated_at=utc_now())
            .returning(doctor_availability)
        )
        row = result.mappings().one()
        await self.db.commit()

        return AvailabilityResponse.model_validate(dict(row))

    async def delete(self, doctor: DoctorProfile, slot_id: UUID) -> None:
        """
        Remove one of the doctor's slots.

        Raises:
            NotFoundException: If slot not found
            ForbiddenException: If the slot belongs to another doctor
        """
        await self._get_owned_slot(doctor, slot_id)

        await self.db.execute(
            delete(doctor_availability).where(doctor_availability.c.id == slot_id)
        )
        await self.db.commit()

        logger.info("availability_deleted", slot_id=str(slot_id), doctor_id=str(doctor.id))

    async def list_publicly_available(
        self,
        doctor_id: UUID,
        since: date,
    ) -> list[AvailabilityResponse]:
        """Open slots of a doctor strictly after ``since``."""
        return await self._list(
            doctor_availability.c.doctor_id == doctor_id,
            *_open_after(since),
        )

    async def list_publicly_available_by_doctor(
        self,
        since: date,
    ) -> dict[UUID, list[AvailabilityResponse]]:
        """Open slots of every doctor strictly after ``since``, keyed by doctor ID."""
        by_doctor: dict[UUID, list[AvailabilityResponse]] = defaultdict(list)
        for slot in await self._list(*_open_after(since)):
            by_doctor[slot.doctor_id].append(slot)
        return by_doctor
