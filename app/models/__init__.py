"""Database models."""

from app.models.appointments import appointments
from app.models.consultations import consultations
from app.models.doctor_availability import doctor_availability
from app.models.doctors import doctors
from app.models.metadata import metadata
from app.models.notifications import notifications
from app.models.patients import patients
from app.models.users import users

__all__ = [
    "appointments",
    "consultations",
    "doctor_availability",
    "doctors",
    "metadata",
    "notifications",
    "patients",
    "users",
]
