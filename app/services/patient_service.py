"""Patient profile self-service."""

import structlog
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import utc_now
from app.models.patients import patients
from app.schemas.patients import PatientProfile, PatientProfileUpdate

logger = structlog.get_logger(__name__)


class PatientService:
    """Service for a patient editing their own profile."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def update_profile(
        self,
        patient: PatientProfile,
        data: PatientProfileUpdate,
    ) -> PatientProfile:
        """
        Update the patient's own profile with the fields present in the request.

        Args:
            patient: Authenticated patient
            data: Fields to change

        Returns:
            Updated profile
        """
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return patient

        result = await self.db.execute(
            update(patients)
            .where(patients.c.id == patient.id)
            .values(**changes, updated_at=utc_now())
            .returning(patients)
        )
        row = result.mappings().one()
        await self.db.commit()

        logger.info("patient_profile_updated", patient_id=str(patient.id), fields=sorted(changes))
        return PatientProfile.model_validate(dict(row))
