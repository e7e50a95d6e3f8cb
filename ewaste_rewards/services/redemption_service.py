"""
Redemption engine

A redemption is gated on the balance computed from the ledger and recorded
as a single `redeemed` entry. The balance read and the append run inside
the user's critical section and one database transaction, so two
concurrent requests can never both spend the same points.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from ewaste_rewards.core.database import commit_or_raise
from ewaste_rewards.core.exceptions import (
    InsufficientBalanceException,
    NoPointsToRedeemException,
    NotFoundException,
    PersistenceException,
    UnknownRewardException,
)
from ewaste_rewards.core.locks import user_locks
from ewaste_rewards.models import User, TransactionType
from ewaste_rewards.schemas.reward import (
    RedemptionResult,
    RewardAccountResponse,
    TransactionResponse,
)
from ewaste_rewards.services.balance_service import BalanceService
from ewaste_rewards.services.reward_service import RewardService, FULL_REDEMPTION_ID
from ewaste_rewards.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

class RedemptionService:
    """Validates and settles redemption requests"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.balance_service = BalanceService(db)
        self.reward_service = RewardService(db)
        self.transaction_service = TransactionService(db)

    async def redeem(self, user_id: int, reward_id: int) -> RedemptionResult:
        """
        Redeem a catalog reward, or every point when reward_id is 0

        Raises:
            NotFoundException: unknown user
            UnknownRewardException: reward_id is not an available catalog entry
            NoPointsToRedeemException: full redemption with a zero balance
            InsufficientBalanceException: balance below the reward cost
            PersistenceException: the debit could not be committed
        """
        async with user_locks.hold(user_id):
            try:
                result = await self._redeem_locked(user_id, reward_id)
            except Exception:
                await self.db.rollback()
                raise

        logger.info(
            f"Redeemed {result.transaction.amount} points for user {user_id} "
            f"(reward {reward_id}), balance now {result.balance}"
        )
        return result

    async def _redeem_locked(self, user_id: int, reward_id: int) -> RedemptionResult:
        try:
            user = await self.db.get(User, user_id)
        except SQLAlchemyError as e:
            raise PersistenceException("Could not load user") from e
        if not user:
            raise NotFoundException("User not found")

        account = await self.reward_service.get_or_create_account(user_id, for_update=True)
        balance = await self.balance_service.compute_balance(user_id)

        if reward_id == FULL_REDEMPTION_ID:
            if balance <= 0:
                raise NoPointsToRedeemException()
            cost = balance
            description = f"Redeemed all points: {balance}"
            account.points = 0
            message = f"Successfully redeemed {balance} points"
        else:
            entry = await self.reward_service.get_catalog_entry(reward_id)
            if entry is None or not entry.is_available or entry.points <= 0:
                raise UnknownRewardException(reward_id)
            cost = entry.points
            if balance < cost:
                raise InsufficientBalanceException(balance=balance, cost=cost)
            description = f"Redeemed: {entry.name}"
            account.points = max((account.points or 0) - cost, 0)
            message = f"Successfully redeemed: {entry.name}"

        transaction = await self.transaction_service.stage(
            user_id, TransactionType.REDEEMED, cost, description
        )
        await commit_or_raise(self.db, "redemption")

        return RedemptionResult(
            account=RewardAccountResponse.model_validate(account),
            transaction=TransactionResponse.model_validate(transaction),
            balance=balance - cost,
            message=message,
        )
