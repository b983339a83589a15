import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from decimal import Decimal
from uuid import UUID, uuid4

# Settings are read at import time, so the environment must be in place first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-not-for-production"  # pragma: allowlist secret
os.environ["LOG_FORMAT"] = "console"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.core.security import issue_token
from app.database import get_db
from app.main import app
from app.models import doctors, metadata, patients, users
from app.schemas.doctors import DoctorProfile
from app.schemas.patients import PatientProfile
from app.services.identity_service import IdentityDirectory

# In-memory SQLite shared across the single pooled connection
TEST_DATABASE_URL = "sqlite+aiosqlite://"


class RecordingNotifier:
    """Notification sink that keeps messages in memory."""

    def __init__(self) -> None:
        self.sent: list[tuple[UUID, str]] = []

    async def notify(self, user_id: UUID, message: str) -> None:
        self.sent.append((user_id, message))

    def messages_for(self, user_id: UUID) -> list[str]:
        return [message for recipient, message in self.sent if recipient == user_id]


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def notifier() -> RecordingNotifier:
    """In-memory notification sink."""
    return RecordingNotifier()


async def _create_user(db: AsyncSession, role: str, full_name: str) -> UUID:
    user_id = uuid4()
    await db.execute(
        insert(users).values(
            id=user_id,
            email=f"{role}.{user_id}@example.com",
            full_name=full_name,
            role=role,
            is_active=True,
        )
    )
    return user_id


@pytest.fixture
def make_doctor(
    db_session: AsyncSession,
) -> Callable[..., Awaitable[DoctorProfile]]:
    """Factory creating a doctor user and profile."""

    async def _make(
        name: str = "Gregory House",
        specialization: str = "Diagnostics",
        rating: str = "4.50",
    ) -> DoctorProfile:
        user_id = await _create_user(db_session, "doctor", name)
        await db_session.execute(
            insert(doctors).values(
                user_id=user_id,
                name=name,
                specialization=specialization,
                qualification="MD",
                experience_years=10,
                rating=Decimal(rating),
            )
        )
        await db_session.commit()
        return await IdentityDirectory(db_session).find_doctor_profile(user_id)

    return _make


@pytest.fixture
def make_patient(
    db_session: AsyncSession,
) -> Callable[..., Awaitable[PatientProfile]]:
    """Factory creating a patient user and profile."""

    async def _make(name: str = "Jane Roe") -> PatientProfile:
        user_id = await _create_user(db_session, "patient", name)
        await db_session.execute(
            insert(patients).values(
                user_id=user_id,
                name=name,
                age=34,
                gender="Female",
                blood_group="A+",
            )
        )
        await db_session.commit()
        return await IdentityDirectory(db_session).find_patient_profile(user_id)

    return _make


@pytest_asyncio.fixture
async def doctor(make_doctor) -> DoctorProfile:
    """Default doctor."""
    return await make_doctor()


@pytest_asyncio.fixture
async def patient(make_patient) -> PatientProfile:
    """Default patient."""
    return await make_patient()


def auth_headers_for(user_id: UUID) -> dict:
    """Create authentication headers for a user."""
    return {"Authorization": f"Bearer {issue_token(user_id)}"}


@pytest.fixture
def doctor_headers(doctor: DoctorProfile) -> dict:
    """Authentication headers for the default doctor."""
    return auth_headers_for(doctor.user_id)


@pytest.fixture
def patient_headers(patient: PatientProfile) -> dict:
    """Authentication headers for the default patient."""
    return auth_headers_for(patient.user_id)
