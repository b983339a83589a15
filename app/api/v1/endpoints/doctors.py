"""Doctor directory endpoints."""

from fastapi import APIRouter, status

from app.config import settings
from app.dependencies import CurrentDoctor, DatabaseSession
from app.schemas.doctors import (
    DoctorProfile,
    DoctorProfileUpdate,
    DoctorPublicProfile,
    DoctorSummary,
)
from app.services.doctor_service import DoctorService

router = APIRouter()


@router.get(
    "/top-rated",
    response_model=list[DoctorSummary],
    status_code=status.HTTP_200_OK,
    summary="List top rated doctors",
)
async def list_top_rated_doctors(db: DatabaseSession) -> list[DoctorSummary]:
    """List the highest rated doctors."""
    service = DoctorService(db)
    return await service.list_top_rated(settings.top_rated_limit)


@router.get(
    "/all",
    response_model=list[DoctorPublicProfile],
    status_code=status.HTTP_200_OK,
    summary="List doctors with availability",
)
async def list_doctors(db: DatabaseSession) -> list[DoctorPublicProfile]:
    """List every doctor with the open slots from today onwards."""
    service = DoctorService(db)
    return await service.list_with_availability()


@router.get(
    "/me",
    response_model=DoctorProfile,
    status_code=status.HTTP_200_OK,
    summary="Get my doctor profile",
)
async def get_my_profile(current_doctor: CurrentDoctor) -> DoctorProfile:
    """Return the authenticated doctor's profile."""
    return current_doctor


@router.put(
    "/me",
    response_model=DoctorProfile,
    status_code=status.HTTP_200_OK,
    summary="Update my doctor profile",
)
async def update_my_profile(
    data: DoctorProfileUpdate,
    current_doctor: CurrentDoctor,
    db: DatabaseSession,
) -> DoctorProfile:
    """Update name, specialization, qualification or experience."""
    service = DoctorService(db)
    return await service.update_profile(current_doctor, data)
