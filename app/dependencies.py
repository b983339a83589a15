"""FastAPI dependencies resolving the caller to a user and role profile."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ForbiddenException
from app.core.security import InvalidTokenError, verify_token
from app.database import get_db
from app.schemas.doctors import DoctorProfile
from app.schemas.patients import PatientProfile
from app.services.identity_service import IdentityDirectory

# Missing credentials are reported as 401 below rather than by HTTPBearer
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> UUID:
    """
    Verify the bearer token and return its subject.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        return verify_token(credentials.credentials)
    except InvalidTokenError as e:
        raise _unauthorized(str(e)) from e


async def get_current_user(
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """
    Load the active user behind the token.

    Raises:
        HTTPException: 401 if the user does not exist, 403 if deactivated
    """
    user = await IdentityDirectory(db).get_user(user_id)

    if user is None:
        raise _unauthorized("User not found")

    if not user["is_active"]:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is deactivated",
        )

    return user


async def get_current_doctor(
    user: Annotated[dict, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DoctorProfile:
    """
    Resolve the caller to a doctor profile.

    Raises:
        ForbiddenException: If the caller is not a doctor
        NotFoundException: If the doctor has no profile
    """
    if user["role"] != "doctor":
        raise ForbiddenException("Access denied. Doctor role required.")
    return await IdentityDirectory(db).find_doctor_profile(user["id"])


async def get_current_patient(
    user: Annotated[dict, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PatientProfile:
    """
    Resolve the caller to a patient profile.

    Raises:
        ForbiddenException: If the caller is not a patient
        NotFoundException: If the patient has no profile
    """
    if user["role"] != "patient":
        raise ForbiddenException("Access denied. Patient role required.")
    return await IdentityDirectory(db).find_patient_profile(user["id"])


DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUserId = Annotated[UUID, Depends(get_current_user_id)]
CurrentUser = Annotated[dict, Depends(get_current_user)]
CurrentDoctor = Annotated[DoctorProfile, Depends(get_current_doctor)]
CurrentPatient = Annotated[PatientProfile, Depends(get_current_patient)]
