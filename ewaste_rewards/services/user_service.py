"""User service: identity resolution keyed on email"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import select
import logging

from ewaste_rewards.core.exceptions import NotFoundException, PersistenceException, ValidationException
from ewaste_rewards.models import User
from ewaste_rewards.utils.validators import validate_email_address

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_NAME = "Anonymous User"

def normalize_email(email: str) -> str:
    try:
        return validate_email_address(email)
    except ValueError as e:
        raise ValidationException(str(e))

class UserService:
    """Service class for user operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: int) -> User:
        """Get user by ID or raise NotFoundException"""
        try:
            user = await self.db.get(User, user_id)
        except SQLAlchemyError as e:
            raise PersistenceException("Could not load user") from e
        if not user:
            raise NotFoundException("User not found")
        return user

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        email = normalize_email(email)
        try:
            result = await self.db.execute(select(User).where(User.email == email))
        except SQLAlchemyError as e:
            logger.error(f"Error fetching user by email: {str(e)}")
            raise PersistenceException("Could not load user") from e
        return result.scalar_one_or_none()

    async def resolve_or_create_user(self, email: str, name: Optional[str] = None) -> User:
        """
        Return the user owning this email, creating it on first contact

        Re-resolving an existing email never creates a second row. A
        concurrent insert losing the unique-email race re-reads the winner.
        """
        email = normalize_email(email)
        existing = await self.get_user_by_email(email)
        if existing:
            return existing

        user = User(email=email, name=name or DEFAULT_DISPLAY_NAME)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            existing = await self.get_user_by_email(email)
            if existing is None:
                raise PersistenceException("Could not create user")
            return existing
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Error creating user: {str(e)}")
            raise PersistenceException("Could not create user") from e

        logger.info(f"Created user {user.id}")
        return user
