"""Patient schemas for request/response validation."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.appointments import AppointmentResponse
from app.schemas.consultations import ConsultationResponse


class PatientProfile(BaseModel):
    """Resolved patient handle for the authenticated caller."""

    id: UUID
    user_id: UUID
    name: str
    age: int | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    blood_group: str | None = None
    phone: str | None = None
    address: str | None = None

    model_config = {"from_attributes": True}


class PatientProfileUpdate(BaseModel):
    """Fields a patient may change on their own profile."""

    name: str = Field(None, min_length=1, max_length=200)
    age: int | None = Field(None, ge=0, le=150)
    blood_group: str | None = Field(None, max_length=10)
    phone: str | None = Field(None, max_length=20)
    address: str | None = None


class PatientForDoctor(BaseModel):
    """Patient entry in a doctor's patient list."""

    id: UUID
    name: str
    age: int | None = None
    gender: str | None = None

    model_config = {"from_attributes": True}


class PatientHistory(BaseModel):
    """Patient profile with shared appointments and all consultations."""

    patient: PatientProfile
    appointments: list[AppointmentResponse]
    consultations: list[ConsultationResponse]
