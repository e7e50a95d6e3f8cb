"""
Request-scoped identity

Authentication happens upstream; the gateway forwards the resolved user id
in the X-User-Id header. Nothing about the caller is kept in process state.
"""

from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from ewaste_rewards.core.database import get_db
from ewaste_rewards.core.exceptions import UnauthorizedException, NotFoundException
from ewaste_rewards.models import User
from ewaste_rewards.services.user_service import UserService

async def get_current_user(
    x_user_id: Optional[int] = Header(None, alias="X-User-Id"),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Get current user (required)
    Raises 401 if the header is missing or the user does not exist
    """
    if x_user_id is None:
        raise UnauthorizedException("Missing X-User-Id header")

    try:
        return await UserService(db).get_user(x_user_id)
    except NotFoundException:
        raise UnauthorizedException("User not found")
