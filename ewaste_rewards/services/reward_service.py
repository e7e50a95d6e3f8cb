"""Reward accounts, the reward catalog and the leaderboard"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select
import logging

from ewaste_rewards.core.exceptions import PersistenceException
from ewaste_rewards.models import Reward, RewardCatalogEntry, User
from ewaste_rewards.schemas.reward import CatalogEntry, LeaderboardEntry
from ewaste_rewards.services.balance_service import BalanceService

logger = logging.getLogger(__name__)

# Reserved catalog id for "redeem everything"
FULL_REDEMPTION_ID = 0

def full_redemption_entry(balance: int) -> CatalogEntry:
    return CatalogEntry(
        id=FULL_REDEMPTION_ID,
        name="Your Points",
        cost=balance,
        description="Redeem your earned points",
        collection_info="Points earned from reporting and collecting waste",
    )

class RewardService:
    """Service for reward accounts and the redeemable catalog"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.balance_service = BalanceService(db)

    async def get_or_create_account(self, user_id: int, for_update: bool = False) -> Reward:
        """
        Fetch the user's reward account, creating the default row on first use

        Creation is flushed, not committed. Callers hold the user's lock.
        """
        stmt = select(Reward).where(Reward.user_id == user_id)
        if for_update:
            stmt = stmt.with_for_update()

        try:
            account = (await self.db.execute(stmt)).scalar_one_or_none()
            if account is None:
                account = Reward(
                    user_id=user_id,
                    name="Default Reward",
                    collection_info="Default Collection Info",
                    points=0,
                    level=1,
                    is_available=True,
                )
                self.db.add(account)
                await self.db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load reward account for user {user_id}: {str(e)}")
            raise PersistenceException("Could not load reward account") from e

        return account

    async def adjust_cached_points(self, user_id: int, delta: int) -> Reward:
        """Move the display counter by delta, never below zero"""
        account = await self.get_or_create_account(user_id, for_update=True)
        account.points = max((account.points or 0) + delta, 0)
        return account

    async def get_catalog_entry(self, reward_id: int) -> Optional[RewardCatalogEntry]:
        try:
            return await self.db.get(RewardCatalogEntry, reward_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load catalog entry {reward_id}: {str(e)}")
            raise PersistenceException("Could not load reward") from e

    async def list_available(self, user_id: int) -> List[CatalogEntry]:
        """
        Catalog as shown to a user

        The synthetic "Your Points" entry carrying the live balance comes
        first, then every available entry with a positive cost. Rebuilt on
        every call.
        """
        try:
            balance = await self.balance_service.compute_balance(user_id)
            stmt = (
                select(RewardCatalogEntry)
                .where(
                    RewardCatalogEntry.is_available.is_(True),
                    RewardCatalogEntry.points > 0,
                )
                .order_by(RewardCatalogEntry.points.asc(), RewardCatalogEntry.id.asc())
            )
            rows = (await self.db.execute(stmt)).scalars().all()
        except (SQLAlchemyError, PersistenceException) as e:
            logger.error(f"Error fetching available rewards for user {user_id}: {str(e)}")
            return []

        entries = [full_redemption_entry(balance)]
        entries.extend(
            CatalogEntry(
                id=row.id,
                name=row.name,
                cost=row.points,
                description=row.description,
                collection_info=row.collection_info or "",
            )
            for row in rows
        )
        return entries

    async def leaderboard(self, limit: int = 10) -> List[LeaderboardEntry]:
        """Accounts ordered by cached points (display only)"""
        stmt = (
            select(Reward, User.name)
            .outerjoin(User, Reward.user_id == User.id)
            .order_by(Reward.points.desc(), Reward.id.asc())
            .limit(limit)
        )
        try:
            rows = (await self.db.execute(stmt)).all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching leaderboard: {str(e)}")
            return []

        return [
            LeaderboardEntry(
                user_id=reward.user_id,
                user_name=user_name,
                points=reward.points,
                level=reward.level,
                created_at=reward.created_at,
            )
            for reward, user_name in rows
        ]
