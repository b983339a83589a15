"""Consultation schemas for request/response validation."""

from datetime import date, datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class ConsultationStatus(str, Enum):
    """Clinical follow-up state recorded by the doctor."""

    ONGOING = "Ongoing"
    COMPLETED = "Completed"
    FOLLOW_UP = "FollowUp"


class ConsultationCreate(BaseModel):
    """Clinical fields supplied by the treating doctor."""

    symptoms: str = Field(..., min_length=1)
    blood_pressure: str | None = Field(None, max_length=20)
    height: int | None = Field(None, ge=0)
    weight: int | None = Field(None, ge=0)
    description: str = Field(..., min_length=1)
    notes: str | None = None
    status: ConsultationStatus


class ConsultationResponse(BaseModel):
    """Schema for consultation response."""

    id: UUID
    appointment_id: UUID
    doctor_id: UUID
    patient_id: UUID
    date: date
    symptoms: str
    blood_pressure: str | None = None
    height: int | None = None
    weight: int | None = None
    description: str
    notes: str | None = None
    status: ConsultationStatus
    created_at: datetime

    model_config = {"from_attributes": True}
