"""Doctor availability schemas."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field


class AvailabilityCreate(BaseModel):
    """Schema for declaring a slot."""

    date: date
    time_slot: str = Field(..., min_length=1, max_length=50)
    is_available: bool = True


class AvailabilityUpdate(BaseModel):
    """Only the open/closed flag of a slot can change."""

    is_available: bool


class AvailabilityResponse(BaseModel):
    """Schema for availability slot response."""

    id: UUID
    doctor_id: UUID
    date: date
    time_slot: str
    is_available: bool

    model_config = {"from_attributes": True}
