"""Liveness and readiness endpoints."""

import time

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.config import settings
from app.database import check_database_connection

router = APIRouter()


class HealthResponse(BaseModel):
    """Process liveness."""

    status: str
    version: str
    environment: str


class ReadinessResponse(HealthResponse):
    """Liveness plus the state of the database."""

    database: str
    database_latency_ms: float | None = None


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness check",
)
async def health_check() -> HealthResponse:
    """Report that the process is up without touching the database."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get(
    "/health/detailed",
    response_model=ReadinessResponse,
    summary="Readiness check",
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ReadinessResponse}},
)
async def readiness_check() -> JSONResponse:
    """
    Round-trip to the database.

    Returns:
        200 when the database answers, 503 otherwise
    """
    started = time.perf_counter()
    db_healthy = await check_database_connection()
    latency_ms = (time.perf_counter() - started) * 1000

    body = ReadinessResponse(
        status="healthy" if db_healthy else "degraded",
        version=settings.app_version,
        environment=settings.environment,
        database="healthy" if db_healthy else "unhealthy",
        database_latency_ms=round(latency_ms, 2) if db_healthy else None,
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if db_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(),
    )


@router.get("/ping", status_code=status.HTTP_200_OK, summary="Ping")
async def ping() -> dict[str, str]:
    return {"message": "pong"}
