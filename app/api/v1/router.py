"""API v1 router configuration."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    appointments,
    availability,
    consultations,
    doctor_panel,
    doctors,
    health,
    notifications,
    patients,
)

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["Appointments"])
api_router.include_router(patients.router, tags=["Patients"])
api_router.include_router(consultations.router, prefix="/consultations", tags=["Consultations"])
api_router.include_router(availability.router, prefix="/doctor/availability", tags=["Availability"])
api_router.include_router(doctor_panel.router, prefix="/doctor-panel", tags=["Doctor Panel"])
api_router.include_router(doctors.router, prefix="/doctors", tags=["Doctors"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
