"""
Notification outbox: per-user unread system messages
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, update
import logging

from ewaste_rewards.core.database import commit_or_raise
from ewaste_rewards.core.exceptions import PersistenceException
from ewaste_rewards.models import Notification

logger = logging.getLogger(__name__)

class NotificationService:
    """Service for managing in-app notifications"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def stage_notification(self, user_id: int, message: str, type: str) -> Notification:
        """Add a notification to the current unit of work without committing"""
        notification = Notification(user_id=user_id, message=message, type=type)
        self.db.add(notification)
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to stage notification for user {user_id}: {str(e)}")
            raise PersistenceException("Could not record notification") from e
        return notification

    async def create_notification(self, user_id: int, message: str, type: str) -> Notification:
        """Create in-app notification"""
        try:
            notification = await self.stage_notification(user_id, message, type)
        except Exception:
            await self.db.rollback()
            raise
        await commit_or_raise(self.db, "notification")
        return notification

    async def list_unread(self, user_id: int) -> List[Notification]:
        """Unread notifications for a user; empty on storage failure"""
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .order_by(Notification.created_at.desc(), Notification.id.desc())
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching unread notifications for user {user_id}: {str(e)}")
            return []
        return list(result.scalars().all())

    async def mark_read(self, notification_id: int) -> bool:
        """
        Mark a notification as read

        Idempotent: unknown or already-read ids are a no-op. Storage
        failures are logged, not raised. Returns True when a row changed.
        """
        stmt = (
            update(Notification)
            .where(Notification.id == notification_id, Notification.is_read.is_(False))
            .values(is_read=True)
        )
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Error marking notification {notification_id} as read: {str(e)}")
            return False
        return result.rowcount > 0
