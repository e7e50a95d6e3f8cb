"""
Transaction log: the append-only point ledger

Entries are only ever inserted. Nothing in the service layer updates or
deletes a Transaction row.
"""

from typing import List, Optional, Union
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select
import logging

from ewaste_rewards.core.config import settings
from ewaste_rewards.core.database import commit_or_raise
from ewaste_rewards.core.exceptions import PersistenceException, ValidationException
from ewaste_rewards.core.locks import user_locks
from ewaste_rewards.models import Transaction, TransactionType

logger = logging.getLogger(__name__)

class TransactionService:
    """Service for appending to and reading the point ledger"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def stage(
        self,
        user_id: int,
        type: Union[TransactionType, str],
        amount: int,
        description: str
    ) -> Transaction:
        """
        Add a ledger entry to the current unit of work without committing

        The caller owns the commit and must hold the user's lock.
        """
        try:
            type = TransactionType(type)
        except ValueError:
            raise ValidationException(f"Unknown transaction type: {type}")

        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValidationException("Transaction amount must be a positive integer")

        transaction = Transaction(
            user_id=user_id,
            type=type.value,
            amount=amount,
            description=description
        )
        self.db.add(transaction)

        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to stage {type.value} of {amount} for user {user_id}: {str(e)}")
            raise PersistenceException("Could not record transaction") from e

        return transaction

    async def append(
        self,
        user_id: int,
        type: Union[TransactionType, str],
        amount: int,
        description: str
    ) -> Transaction:
        """Append one ledger entry and commit it"""
        async with user_locks.hold(user_id):
            try:
                transaction = await self.stage(user_id, type, amount, description)
            except Exception:
                await self.db.rollback()
                raise
            await commit_or_raise(self.db, "transaction")

        logger.info(f"Ledger {transaction.type}: user={user_id} amount={amount}")
        return transaction

    async def list_recent(self, user_id: int, limit: Optional[int] = None) -> List[Transaction]:
        """Most recent entries for a user, newest first"""
        limit = limit or settings.RECENT_TRANSACTIONS_LIMIT
        stmt = (
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(Transaction.date.desc(), Transaction.id.desc())
            .limit(limit)
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch transactions for user {user_id}: {str(e)}")
            raise PersistenceException("Could not read transactions") from e
        return list(result.scalars().all())

    async def list_all(self, user_id: int) -> List[Transaction]:
        """Full history for a user in append order"""
        stmt = (
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(Transaction.id.asc())
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch ledger for user {user_id}: {str(e)}")
            raise PersistenceException("Could not read transactions") from e
        return list(result.scalars().all())
