"""Tests for appointment, patient and consultation endpoints."""

from datetime import timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient

from app.core.clock import utc_today
from conftest import auth_headers_for


@pytest.fixture
def booking_data(doctor) -> dict:
    """Booking request for the default doctor."""
    return {
        "doctor_id": str(doctor.id),
        "date": (utc_today() + timedelta(days=2)).isoformat(),
        "time_slot": "10:30",
        "reason": "Annual checkup",
    }


@pytest.fixture
def consultation_data() -> dict:
    """Consultation notes for a completed visit."""
    return {
        "symptoms": "fever, sore throat",
        "blood_pressure": "118/76",
        "height": 172,
        "weight": 70,
        "description": "flu",
        "notes": "Paracetamol, rest",
        "status": "Completed",
    }


async def unread_messages(client: AsyncClient, headers: dict) -> list[str]:
    response = await client.get("/api/v1/notifications/", headers=headers)
    assert response.status_code == 200
    return [n["message"] for n in response.json()]


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    """Test health check endpoint."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


@pytest.mark.asyncio
async def test_book_appointment(
    client: AsyncClient,
    patient_headers: dict,
    booking_data: dict,
    doctor,
    patient,
) -> None:
    """Test booking an appointment."""
    response = await client.post(
        "/api/v1/appointments/book",
        json=booking_data,
        headers=patient_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "Waiting"
    assert data["doctor_name"] == doctor.name
    assert data["patient_name"] == patient.name
    assert data["specialty"] == doctor.specialization
    assert "id" in data


@pytest.mark.asyncio
async def test_book_appointment_unauthorized(client: AsyncClient, booking_data: dict) -> None:
    """Test booking without a token."""
    response = await client.post("/api/v1/appointments/book", json=booking_data)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_book_appointment_invalid_token(client: AsyncClient, booking_data: dict) -> None:
    """Test booking with a token that does not verify."""
    response = await client.post(
        "/api/v1/appointments/book",
        json=booking_data,
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_book_appointment_as_doctor_forbidden(
    client: AsyncClient,
    doctor_headers: dict,
    booking_data: dict,
) -> None:
    """Test that doctors cannot book appointments."""
    response = await client.post(
        "/api/v1/appointments/book",
        json=booking_data,
        headers=doctor_headers,
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_book_appointment_unknown_doctor(
    client: AsyncClient,
    patient_headers: dict,
    booking_data: dict,
) -> None:
    """Test booking with a doctor that does not exist."""
    booking_data["doctor_id"] = str(uuid4())
    response = await client.post(
        "/api/v1/appointments/book",
        json=booking_data,
        headers=patient_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_book_appointment_validation_error(
    client: AsyncClient,
    patient_headers: dict,
    booking_data: dict,
) -> None:
    """Test booking with an empty reason."""
    booking_data["reason"] = ""
    response = await client.post(
        "/api/v1/appointments/book",
        json=booking_data,
        headers=patient_headers,
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_doctor_lists_appointments(
    client: AsyncClient,
    patient_headers: dict,
    doctor_headers: dict,
    booking_data: dict,
) -> None:
    """Test listing the doctor's appointments."""
    await client.post("/api/v1/appointments/book", json=booking_data, headers=patient_headers)

    response = await client.get("/api/v1/appointments/doctor", headers=doctor_headers)
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["reason"] == booking_data["reason"]


@pytest.mark.asyncio
async def test_patient_cannot_list_doctor_appointments(
    client: AsyncClient,
    patient_headers: dict,
) -> None:
    """Test role enforcement on the doctor listing."""
    response = await client.get("/api/v1/appointments/doctor", headers=patient_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_update_status_invalid_value(
    client: AsyncClient,
    patient_headers: dict,
    doctor_headers: dict,
    booking_data: dict,
) -> None:
    """Test updating with a status outside the enumeration."""
    created = await client.post(
        "/api/v1/appointments/book", json=booking_data, headers=patient_headers
    )

    response = await client.patch(
        f"/api/v1/appointments/{created.json()['id']}/status",
        json={"status": "Rescheduled"},
        headers=doctor_headers,
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_status_by_other_doctor(
    client: AsyncClient,
    patient_headers: dict,
    booking_data: dict,
    make_doctor,
) -> None:
    """Test that only the treating doctor can change status."""
    created = await client.post(
        "/api/v1/appointments/book", json=booking_data, headers=patient_headers
    )
    other = await make_doctor("Other Doctor")

    response = await client.patch(
        f"/api/v1/appointments/{created.json()['id']}/status",
        json={"status": "Booked"},
        headers=auth_headers_for(other.user_id),
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_patient_edits_and_cancels(
    client: AsyncClient,
    patient_headers: dict,
    doctor_headers: dict,
    booking_data: dict,
) -> None:
    """Test reason edit, cancellation and the conflicts that follow."""
    created = await client.post(
        "/api/v1/appointments/book", json=booking_data, headers=patient_headers
    )
    appointment_id = created.json()["id"]

    response = await client.patch(
        f"/api/v1/patient/appointments/{appointment_id}",
        json={"reason": "Follow-up on blood test"},
        headers=patient_headers,
    )
    assert response.status_code == 200
    assert response.json()["reason"] == "Follow-up on blood test"

    response = await client.patch(
        f"/api/v1/patient/appointments/{appointment_id}/cancel",
        headers=patient_headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "Cancelled"

    doctor_messages = await unread_messages(client, doctor_headers)
    assert any("cancelled by the patient" in m for m in doctor_messages)

    response = await client.patch(
        f"/api/v1/patient/appointments/{appointment_id}",
        json={"reason": "Too late"},
        headers=patient_headers,
    )
    assert response.status_code == 409

    response = await client.patch(
        f"/api/v1/patient/appointments/{appointment_id}/cancel",
        headers=patient_headers,
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_upcoming_and_history(
    client: AsyncClient,
    patient_headers: dict,
    booking_data: dict,
) -> None:
    """Test that past bookings land in history and the rest in upcoming."""
    await client.post("/api/v1/appointments/book", json=booking_data, headers=patient_headers)
    past = {**booking_data, "date": (utc_today() - timedelta(days=7)).isoformat()}
    await client.post("/api/v1/appointments/book", json=past, headers=patient_headers)

    upcoming = await client.get("/api/v1/patient/appointments/upcoming", headers=patient_headers)
    history = await client.get("/api/v1/patient/appointments/history", headers=patient_headers)

    assert upcoming.status_code == 200
    assert history.status_code == 200
    assert [a["date"] for a in upcoming.json()] == [booking_data["date"]]
    assert [a["date"] for a in history.json()] == [past["date"]]


@pytest.mark.asyncio
async def test_appointment_lifecycle_end_to_end(
    client: AsyncClient,
    doctor,
    patient,
    patient_headers: dict,
    doctor_headers: dict,
    consultation_data: dict,
) -> None:
    """Test booking, confirmation and consultation of a single visit."""
    response = await client.post(
        "/api/v1/appointments/book",
        json={
            "doctor_id": str(doctor.id),
            "date": "2025-01-10",
            "time_slot": "09:00",
            "reason": "checkup",
        },
        headers=patient_headers,
    )
    assert response.status_code == 201
    appointment = response.json()
    assert appointment["status"] == "Waiting"

    doctor_messages = await unread_messages(client, doctor_headers)
    assert len(doctor_messages) == 1
    assert patient.name in doctor_messages[0]

    response = await client.patch(
        f"/api/v1/appointments/{appointment['id']}/status",
        json={"status": "Booked"},
        headers=doctor_headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "Booked"

    patient_messages = await unread_messages(client, patient_headers)
    assert len(patient_messages) == 1
    assert "confirmed" in patient_messages[0]

    response = await client.post(
        f"/api/v1/consultations/appointments/{appointment['id']}",
        json=consultation_data,
        headers=doctor_headers,
    )
    assert response.status_code == 201
    consultation = response.json()
    assert consultation["description"] == "flu"

    patient_messages = await unread_messages(client, patient_headers)
    assert len(patient_messages) == 2
    assert "consultation notes" in patient_messages[0]

    history = await client.get("/api/v1/patient/appointments/history", headers=patient_headers)
    [stored] = [a for a in history.json() if a["id"] == appointment["id"]]
    assert stored["status"] == "Completed"

    response = await client.post(
        f"/api/v1/consultations/appointments/{appointment['id']}",
        json=consultation_data,
        headers=doctor_headers,
    )
    assert response.status_code == 409

    response = await client.patch(
        f"/api/v1/patient/appointments/{appointment['id']}/cancel",
        headers=patient_headers,
    )
    assert response.status_code == 409

    response = await client.get(
        f"/api/v1/consultations/appointments/{appointment['id']}",
        headers=patient_headers,
    )
    assert response.status_code == 200
    assert response.json()["id"] == consultation["id"]

    response = await client.get("/api/v1/patient/consultations", headers=patient_headers)
    assert [c["id"] for c in response.json()] == [consultation["id"]]


@pytest.mark.asyncio
async def test_consultation_hidden_from_strangers(
    client: AsyncClient,
    doctor_headers: dict,
    patient_headers: dict,
    booking_data: dict,
    consultation_data: dict,
    make_patient,
) -> None:
    """Test that only the appointment's parties can read its consultation."""
    created = await client.post(
        "/api/v1/appointments/book", json=booking_data, headers=patient_headers
    )
    appointment_id = created.json()["id"]
    await client.patch(
        f"/api/v1/appointments/{appointment_id}/status",
        json={"status": "Booked"},
        headers=doctor_headers,
    )
    await client.post(
        f"/api/v1/consultations/appointments/{appointment_id}",
        json=consultation_data,
        headers=doctor_headers,
    )
    stranger = await make_patient("Stranger")

    response = await client.get(
        f"/api/v1/consultations/appointments/{appointment_id}",
        headers=auth_headers_for(stranger.user_id),
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_readiness_check(client: AsyncClient) -> None:
    """Test readiness against the configured database."""
    response = await client.get("/api/v1/health/detailed")
    assert response.status_code == 200
    assert response.json()["database"] == "healthy"


@pytest.mark.asyncio
async def test_error_body_carries_request_id(
    client: AsyncClient,
    patient_headers: dict,
) -> None:
    """Test the error body shape and request ID propagation."""
    response = await client.patch(
        f"/api/v1/patient/appointments/{uuid4()}/cancel",
        headers={**patient_headers, "X-Request-ID": "req-123"},
    )
    assert response.status_code == 404
    assert response.headers["X-Request-ID"] == "req-123"
    body = response.json()
    assert body["error"] == "NotFoundException"
    assert body["message"] == "Appointment not found."
    assert body["request_id"] == "req-123"
