"""Tests for the doctor availability ledger."""

from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy import event

from app.core.clock import utc_today, utc_yesterday
from app.core.exceptions import ForbiddenException, NotFoundException
from app.schemas.availability import AvailabilityCreate
from app.services.availability_service import AvailabilityService
from app.services.doctor_service import DoctorService


def slot(days_ahead: int, time_slot: str, is_available: bool = True) -> AvailabilityCreate:
    return AvailabilityCreate(
        date=utc_today() + timedelta(days=days_ahead),
        time_slot=time_slot,
        is_available=is_available,
    )


@pytest.mark.asyncio
async def test_add_and_list_for_date(db_session, doctor) -> None:
    service = AvailabilityService(db_session)
    await service.add(doctor, slot(1, "14:00"))
    await service.add(doctor, slot(1, "09:00"))
    await service.add(doctor, slot(2, "09:00"))

    listed = await service.list_for_date(doctor, utc_today() + timedelta(days=1))

    assert [s.time_slot for s in listed] == ["09:00", "14:00"]


@pytest.mark.asyncio
async def test_duplicate_slots_are_accepted(db_session, doctor) -> None:
    service = AvailabilityService(db_session)
    await service.add(doctor, slot(1, "09:00"))
    await service.add(doctor, slot(1, "09:00"))

    assert len(await service.list_all(doctor)) == 2


@pytest.mark.asyncio
async def test_list_all_is_ordered_and_scoped_to_doctor(db_session, doctor, make_doctor) -> None:
    service = AvailabilityService(db_session)
    other = await make_doctor("Other Doctor")
    await service.add(doctor, slot(3, "08:00"))
    await service.add(doctor, slot(1, "16:00"))
    await service.add(doctor, slot(1, "10:00"))
    await service.add(other, slot(1, "09:00"))

    listed = await service.list_all(doctor)

    assert [(s.date, s.time_slot) for s in listed] == [
        (utc_today() + timedelta(days=1), "10:00"),
        (utc_today() + timedelta(days=1), "16:00"),
        (utc_today() + timedelta(days=3), "08:00"),
    ]
    assert all(s.doctor_id == doctor.id for s in listed)


@pytest.mark.asyncio
async def test_update_toggles_open_flag(db_session, doctor) -> None:
    service = AvailabilityService(db_session)
    created = await service.add(doctor, slot(1, "09:00"))

    updated = await service.update(doctor, created.id, False)

    assert updated.is_available is False
    assert updated.date == created.date
    assert updated.time_slot == created.time_slot


@pytest.mark.asyncio
async def test_other_doctor_cannot_modify_slot(db_session, doctor, make_doctor) -> None:
    service = AvailabilityService(db_session)
    other = await make_doctor("Other Doctor")
    created = await service.add(doctor, slot(1, "09:00"))

    with pytest.raises(ForbiddenException):
        await service.update(other, created.id, False)
    with pytest.raises(ForbiddenException):
        await service.delete(other, created.id)

    [kept] = await service.list_all(doctor)
    assert kept.is_available is True


@pytest.mark.asyncio
async def test_delete_removes_slot(db_session, doctor) -> None:
    service = AvailabilityService(db_session)
    created = await service.add(doctor, slot(1, "09:00"))

    await service.delete(doctor, created.id)

    assert await service.list_all(doctor) == []
    with pytest.raises(NotFoundException):
        await service.delete(doctor, created.id)


@pytest.mark.asyncio
async def test_unknown_slot_is_not_found(db_session, doctor) -> None:
    with pytest.raises(NotFoundException):
        await AvailabilityService(db_session).update(doctor, uuid4(), True)


@pytest.mark.asyncio
async def test_public_availability_is_open_and_strictly_after_since(db_session, doctor) -> None:
    service = AvailabilityService(db_session)
    await service.add(doctor, slot(-1, "09:00"))
    await service.add(doctor, slot(0, "09:00"))
    await service.add(doctor, slot(1, "09:00", is_available=False))
    await service.add(doctor, slot(2, "11:00"))

    public = await service.list_publicly_available(doctor.id, utc_yesterday())

    assert [(s.date, s.time_slot) for s in public] == [
        (utc_today(), "09:00"),
        (utc_today() + timedelta(days=2), "11:00"),
    ]


@pytest.mark.asyncio
async def test_directory_lists_doctors_with_open_slots(db_session, doctor, make_doctor) -> None:
    service = AvailabilityService(db_session)
    idle = await make_doctor("Albert Idle", specialization="Dermatology")
    await service.add(doctor, slot(1, "09:00"))
    await service.add(doctor, slot(-3, "09:00"))

    profiles = await DoctorService(db_session).list_with_availability()

    by_id = {p.id: p for p in profiles}
    assert [p.name for p in profiles] == ["Albert Idle", "Gregory House"]
    assert len(by_id[doctor.id].availability) == 1
    assert by_id[idle.id].availability == []


@pytest.mark.asyncio
async def test_directory_loads_slots_in_one_query(
    db_engine, db_session, doctor, make_doctor
) -> None:
    service = AvailabilityService(db_session)
    for name in ("Ann Second", "Bob Third", "Cid Fourth"):
        other = await make_doctor(name)
        await service.add(other, slot(1, "10:00"))
    await service.add(doctor, slot(1, "09:00"))

    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(db_engine.sync_engine, "before_cursor_execute", record)
    try:
        profiles = await DoctorService(db_session).list_with_availability()
    finally:
        event.remove(db_engine.sync_engine, "before_cursor_execute", record)

    assert len(statements) == 2
    assert len(profiles) == 4
    assert all(len(p.availability) == 1 for p in profiles)


@pytest.mark.asyncio
async def test_top_rated_orders_by_rating(db_session, make_doctor) -> None:
    await make_doctor("Low Rated", rating="3.10")
    await make_doctor("High Rated", rating="4.90")
    await make_doctor("Mid Rated", rating="4.20")
    await make_doctor("Lowest Rated", rating="2.00")

    top = await DoctorService(db_session).list_top_rated(3)

    assert [d.name for d in top] == ["High Rated", "Mid Rated", "Low Rated"]
