"""In-app notification endpoints"""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ewaste_rewards.api.dependencies import get_current_user
from ewaste_rewards.core.database import get_db
from ewaste_rewards.models import User
from ewaste_rewards.schemas.notification import MarkReadResponse, NotificationResponse
from ewaste_rewards.services.notification_service import NotificationService

router = APIRouter()

@router.get("/unread", response_model=List[NotificationResponse])
async def get_unread_notifications(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await NotificationService(db).list_unread(current_user.id)

@router.post("/{notification_id}/read", response_model=MarkReadResponse)
async def mark_notification_read(
    notification_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Mark as read; repeating the call or an unknown id is not an error"""
    updated = await NotificationService(db).mark_read(notification_id)
    return MarkReadResponse(notification_id=notification_id, updated=updated)
