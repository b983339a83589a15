"""Notification inbox endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from app.dependencies import CurrentUserId, DatabaseSession
from app.schemas.notifications import NotificationResponse
from app.services.notification_service import NotificationService

router = APIRouter()


@router.get(
    "/",
    response_model=list[NotificationResponse],
    status_code=status.HTTP_200_OK,
    summary="List unread notifications",
)
async def list_notifications(
    current_user_id: CurrentUserId,
    db: DatabaseSession,
) -> list[NotificationResponse]:
    """List the caller's unread notifications, newest first."""
    service = NotificationService(db)
    return await service.list_unread(current_user_id)


@router.patch(
    "/read-all",
    response_model=list[NotificationResponse],
    status_code=status.HTTP_200_OK,
    summary="Mark all notifications as read",
)
async def mark_all_notifications_read(
    current_user_id: CurrentUserId,
    db: DatabaseSession,
) -> list[NotificationResponse]:
    """Mark every unread notification of the caller as read."""
    service = NotificationService(db)
    return await service.mark_all_as_read(current_user_id)


@router.patch(
    "/{notification_id}/read",
    response_model=NotificationResponse,
    status_code=status.HTTP_200_OK,
    summary="Mark notification as read",
)
async def mark_notification_read(
    notification_id: UUID,
    current_user_id: CurrentUserId,
    db: DatabaseSession,
) -> NotificationResponse:
    """
    Mark one of the caller's notifications as read.

    Args:
        notification_id: Notification ID
        current_user_id: Authenticated user ID
        db: Database session

    Returns:
        Updated notification
    """
    service = NotificationService(db)
    return await service.mark_as_read(notification_id, current_user_id)
