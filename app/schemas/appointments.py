"""Appointment schemas for request/response validation."""

from datetime import date, datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class AppointmentStatus(str, Enum):
    """Appointment status enumeration."""

    WAITING = "Waiting"
    BOOKED = "Booked"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        """Completed and Cancelled appointments accept no further changes."""
        return self in (AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED)


class AppointmentBook(BaseModel):
    """Schema for booking a new appointment."""

    doctor_id: UUID
    date: date
    time_slot: str = Field(..., min_length=1, max_length=50)
    reason: str = Field(..., min_length=1, max_length=500)


class AppointmentReasonUpdate(BaseModel):
    """Schema for a patient editing the reason of an appointment."""

    reason: str = Field(..., min_length=1, max_length=500)


class AppointmentStatusUpdate(BaseModel):
    """Schema for a doctor updating appointment status."""

    status: AppointmentStatus


class AppointmentResponse(BaseModel):
    """Schema for appointment response."""

    id: UUID
    doctor_id: UUID
    doctor_name: str
    patient_id: UUID
    patient_name: str
    date: date
    time_slot: str
    status: AppointmentStatus
    reason: str
    specialty: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
