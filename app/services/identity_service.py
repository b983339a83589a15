"""Identity directory: resolves users to doctor and patient profiles."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException
from app.models.doctors import doctors
from app.models.patients import patients
from app.models.users import users
from app.schemas.doctors import DoctorProfile
from app.schemas.patients import PatientProfile


class IdentityDirectory:
    """Lookups of users and their role profiles."""

    def __init__(self, db: AsyncSession):
        """Initialize directory with database session."""
        self.db = db

    async def get_user(self, user_id: UUID) -> dict | None:
        """Get user by ID."""
        result = await self.db.execute(select(users).where(users.c.id == user_id))
        user = result.mappings().first()
        return dict(user) if user else None

    async def find_doctor_profile(self, user_id: UUID) -> DoctorProfile:
        """
        Resolve the doctor profile owned by a user.

        Raises:
            NotFoundException: If the user has no doctor profile
        """
        result = await self.db.execute(select(doctors).where(doctors.c.user_id == user_id))
        row = result.mappings().first()
        if not row:
            raise NotFoundException("Doctor profile not found.")
        return DoctorProfile.model_validate(dict(row))

    async def find_patient_profile(self, user_id: UUID) -> PatientProfile:
        """
        Resolve the patient profile owned by a user.

        Raises:
            NotFoundException: If the user has no patient profile
        """
        result = await self.db.execute(select(patients).where(patients.c.user_id == user_id))
        row = result.mappings().first()
        if not row:
            raise NotFoundException("Patient profile not found.")
        return PatientProfile.model_validate(dict(row))

    async def get_doctor(self, doctor_id: UUID) -> DoctorProfile:
        """
        Get a doctor by profile ID.

        Raises:
            NotFoundException: If doctor not found
        """
        result = await self.db.execute(select(doctors).where(doctors.c.id == doctor_id))
        row = result.mappings().first()
        if not row:
            raise NotFoundException("Doctor not found.")
        return DoctorProfile.model_validate(dict(row))

    async def get_patient(self, patient_id: UUID) -> PatientProfile:
        """
        Get a patient by profile ID.

        Raises:
            NotFoundException: If patient not found
        """
        result = await self.db.execute(select(patients).where(patients.c.id == patient_id))
        row = result.mappings().first()
        if not row:
            raise NotFoundException(f"Patient not found with ID: {patient_id}")
        return PatientProfile.model_validate(dict(row))
