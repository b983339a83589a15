"""Doctor availability endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Query, status

from app.dependencies import CurrentDoctor, DatabaseSession
from app.schemas.availability import (
    AvailabilityCreate,
    AvailabilityResponse,
    AvailabilityUpdate,
)
from app.services.availability_service import AvailabilityService

router = APIRouter()


@router.post(
    "/",
    response_model=AvailabilityResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add availability slot",
)
async def add_availability(
    data: AvailabilityCreate,
    current_doctor: CurrentDoctor,
    db: DatabaseSession,
) -> AvailabilityResponse:
    """Declare a slot for the authenticated doctor."""
    service = AvailabilityService(db)
    return await service.add(current_doctor, data)


@router.get(
    "/",
    response_model=list[AvailabilityResponse],
    status_code=status.HTTP_200_OK,
    summary="List slots for a date",
)
async def list_availability_for_date(
    current_doctor: CurrentDoctor,
    db: DatabaseSession,
    day: date = Query(..., alias="date"),
) -> list[AvailabilityResponse]:
    """List the authenticated doctor's slots on one date."""
    service = AvailabilityService(db)
    return await service.list_for_date(current_doctor, day)


@router.get(
    "/all",
    response_model=list[AvailabilityResponse],
    status_code=status.HTTP_200_OK,
    summary="List all slots",
)
async def list_all_availability(
    current_doctor: CurrentDoctor,
    db: DatabaseSession,
) -> list[AvailabilityResponse]:
    """List every slot of the authenticated doctor."""
    service = AvailabilityService(db)
    return await service.list_all(current_doctor)


@router.patch(
    "/{slot_id}",
    response_model=AvailabilityResponse,
    status_code=status.HTTP_200_OK,
    summary="Open or close a slot",
)
async def update_availability(
    slot_id: UUID,
    data: AvailabilityUpdate,
    current_doctor: CurrentDoctor,
    db: DatabaseSession,
) -> AvailabilityResponse:
    """Change the open flag of one of the doctor's slots."""
    service = AvailabilityService(db)
    return await service.update(current_doctor, slot_id, data.is_available)


@router.delete(
    "/{slot_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a slot",
)
async def delete_availability(
    slot_id: UUID,
    current_doctor: CurrentDoctor,
    db: DatabaseSession,
) -> None:
    """Delete one of the doctor's slots."""
    service = AvailabilityService(db)
    await service.delete(current_doctor, slot_id)
