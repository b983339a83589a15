"""Doctor schemas for request/response validation."""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, field_serializer

from app.schemas.availability import AvailabilityResponse


class DoctorProfile(BaseModel):
    """Resolved doctor handle for the authenticated caller."""

    id: UUID
    user_id: UUID
    name: str
    specialization: str | None = None
    qualification: str | None = None
    experience_years: int = 0
    rating: Decimal = Decimal("0")

    model_config = {"from_attributes": True}

    @field_serializer("rating")
    def serialize_rating(self, value: Decimal) -> float:
        """Serialize rating as a plain number."""
        return float(value)


class DoctorProfileUpdate(BaseModel):
    """Fields a doctor may change on their own profile."""

    name: str = Field(None, min_length=1, max_length=200)
    specialization: str | None = Field(None, max_length=200)
    qualification: str | None = Field(None, max_length=200)
    experience_years: int = Field(None, ge=0, le=80)


class DoctorSummary(BaseModel):
    """Public listing entry for a doctor."""

    id: UUID
    name: str
    specialization: str | None = None
    experience_years: int = 0
    rating: Decimal = Decimal("0")

    model_config = {"from_attributes": True}

    @field_serializer("rating")
    def serialize_rating(self, value: Decimal) -> float:
        """Serialize rating as a plain number."""
        return float(value)


class DoctorPublicProfile(DoctorSummary):
    """Doctor listing with the open slots from today onwards."""

    qualification: str | None = None
    availability: list[AvailabilityResponse] = []
