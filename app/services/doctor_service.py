"""Doctor directory and the doctor's own profile."""

import structlog
from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import utc_now, utc_yesterday
from app.models.doctors import doctors
from app.schemas.doctors import (
    DoctorProfile,
    DoctorProfileUpdate,
    DoctorPublicProfile,
    DoctorSummary,
)
from app.services.availability_service import AvailabilityService

logger = structlog.get_logger(__name__)


class DoctorService:
    """Service for listing doctors to patients and editing doctor profiles."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db
        self.availability = AvailabilityService(db)

    async def list_top_rated(self, limit: int) -> list[DoctorSummary]:
        """List the highest rated doctors."""
        result = await self.db.execute(
            select(doctors).order_by(desc(doctors.c.rating), doctors.c.name).limit(limit)
        )
        return [DoctorSummary.model_validate(dict(row)) for row in result.mappings()]

    async def list_with_availability(self) -> list[DoctorPublicProfile]:
        """
        List every doctor with the open slots from today onwards.

        Returns:
            Doctors with their public availability
        """
        result = await self.db.execute(select(doctors).order_by(doctors.c.name))
        slots = await self.availability.list_publicly_available_by_doctor(utc_yesterday())

        return [
            DoctorPublicProfile.model_validate({**row, "availability": slots.get(row["id"], [])})
            for row in result.mappings()
        ]

    async def update_profile(
        self,
        doctor: DoctorProfile,
        data: DoctorProfileUpdate,
    ) -> DoctorProfile:
        """
        Update the doctor's own profile.

        Only the fields present in the request are changed. Appointments keep
        the specialty they were booked under.

        Args:
            doctor: Authenticated doctor
            data: Fields to change

        Returns:
            Updated profile
        """
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return doctor

        result = await self.db.execute(
            update(doctors)
            .where(doctors.c.id == doctor.id)
            .values(**changes, updated_at=utc_now())
            .returning(doctors)
        )
        row = result.mappings().one()
        await self.db.commit()

        logger.info("doctor_profile_updated", doctor_id=str(doctor.id), fields=sorted(changes))
        return DoctorProfile.model_validate(dict(row))
