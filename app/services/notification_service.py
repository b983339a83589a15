"""Notification sink and inbox for in-app notifications."""

from typing import Protocol
from uuid import UUID

import structlog
from sqlalchemy import desc, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import utc_now
from app.core.exceptions import ForbiddenException, NotFoundException
from app.models.notifications import notifications
from app.schemas.notifications import NotificationResponse

logger = structlog.get_logger(__name__)


class NotificationSink(Protocol):
    """Receives a message for a user; delivery channel is up to the sink."""

    async def notify(self, user_id: UUID, message: str) -> None:
        """Deliver ``message`` to ``user_id`` without raising."""
        ...


class NotificationService:
    """Stores notifications in the database and serves the recipient's inbox."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def notify(self, user_id: UUID, message: str) -> None:
        """
        Store an unread notification for a user.

        Runs after the triggering transition has been committed. Failures are
        logged and rolled back locally so they never undo that transition.

        Args:
            user_id: Recipient user ID
            message: Notification text
        """
        try:
            await self.db.execute(
                insert(notifications).values(
                    user_id=user_id,
                    message=message,
                    is_read=False,
                    created_at=utc_now(),
                )
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.warning("notification_failed", user_id=str(user_id), error=str(e))
            return

        logger.info("notification_created", user_id=str(user_id))

    async def list_unread(self, user_id: UUID) -> list[NotificationResponse]:
        """
        Get unread notifications for a user, newest first.

        Args:
            user_id: Recipient user ID

        Returns:
            Unread notifications
        """
        query = (
            select(notifications)
            .where(
                notifications.c.user_id == user_id,
                notifications.c.is_read.is_(False),
            )
            .order_by(desc(notifications.c.created_at))
        )
        result = await self.db.execute(query)
        return [NotificationResponse.model_validate(dict(row)) for row in result.mappings()]

    async def mark_as_read(self, notification_id: UUID, user_id: UUID) -> NotificationResponse:
        """
        Mark a single notification as read.

        Args:
            notification_id: Notification ID
            user_id: Requesting user ID

        Returns:
            Updated notification

        Raises:
            NotFoundException: If notification not found
            ForbiddenException: If the notification belongs to another user
        """
        result = await self.db.execute(
            select(notifications).where(notifications.c.id == notification_id)
        )
        row = result.mappings().first()

        if not row:
            raise NotFoundException("Notification not found")

        if row["user_id"] != user_id:
            raise ForbiddenException("You do not have permission to access this notification.")

        result = await self.db.execute(
            update(notifications)
            .where(notifications.c.id == notification_id)
            .values(is_read=True, read_at=utc_now())
            .returning(notifications)
        )
        updated = result.mappings().one()
        await self.db.commit()

        return NotificationResponse.model_validate(dict(updated))

    async def mark_all_as_read(self, user_id: UUID) -> list[NotificationResponse]:
        """
        Mark every unread notification of a user as read.

        Args:
            user_id: Requesting user ID

        Returns:
            The notifications that were updated, newest first
        """
        result = await self.db.execute(
            update(notifications)
            .where(
                notifications.c.user_id == user_id,
                notifications.c.is_read.is_(False),
            )
            .values(is_read=True, read_at=utc_now())
            .returning(notifications)
        )
        rows = [dict(row) for row in result.mappings()]
        await self.db.commit()

        # RETURNING does not preserve any order
        rows.sort(key=lambda row: row["created_at"], reverse=True)
        return [NotificationResponse.model_validate(row) for row in rows]
