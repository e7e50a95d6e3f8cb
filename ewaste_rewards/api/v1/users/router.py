"""Identity resolution endpoints"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ewaste_rewards.core.database import get_db
from ewaste_rewards.core.exceptions import NotFoundException
from ewaste_rewards.schemas.user import UserResolveRequest, UserResponse
from ewaste_rewards.services.user_service import UserService

router = APIRouter()

@router.post("/resolve", response_model=UserResponse)
async def resolve_user(
    request: UserResolveRequest,
    db: AsyncSession = Depends(get_db)
):
    """Get or create the user for an authenticated email"""
    return await UserService(db).resolve_or_create_user(request.email, request.name)

@router.get("/by-email", response_model=UserResponse)
async def get_user_by_email(
    email: str = Query(..., max_length=255),
    db: AsyncSession = Depends(get_db)
):
    """Look up a user by email"""
    user = await UserService(db).get_user_by_email(email)
    if not user:
        raise NotFoundException("User not found")
    return user
