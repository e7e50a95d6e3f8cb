"""
Balance calculator

The spendable balance is a pure function of the transaction log: replay
every entry, credits add and redemptions subtract, floor at zero. The
cached `Reward.points` counter is never consulted here.
"""

from typing import Iterable, Protocol
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select
import logging

from ewaste_rewards.core.exceptions import PersistenceException
from ewaste_rewards.models import Transaction, TransactionType
from ewaste_rewards.schemas.reward import BalanceSummary

logger = logging.getLogger(__name__)

class LedgerRow(Protocol):
    type: str
    amount: int

def signed_amount(row: LedgerRow) -> int:
    """Credits count up, redemptions count down"""
    return row.amount if TransactionType(row.type).is_credit else -row.amount

def fold_balance(rows: Iterable[LedgerRow]) -> int:
    """Replay ledger rows into a balance, clamped at zero"""
    return max(sum(signed_amount(row) for row in rows), 0)

class BalanceService:
    """Derives balances from the ledger"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _ledger_rows(self, user_id: int):
        stmt = select(Transaction.type, Transaction.amount).where(Transaction.user_id == user_id)
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Failed to read ledger for user {user_id}: {str(e)}")
            raise PersistenceException("Could not compute balance") from e
        return result.all()

    async def compute_balance(self, user_id: int) -> int:
        """Current spendable balance, always >= 0"""
        return fold_balance(await self._ledger_rows(user_id))

    async def balance_summary(self, user_id: int) -> BalanceSummary:
        """Balance plus lifetime totals"""
        rows = await self._ledger_rows(user_id)

        credits = [TransactionType(row.type).is_credit for row in rows]
        total_earned = sum(row.amount for row, credit in zip(rows, credits) if credit)
        total_redeemed = sum(row.amount for row, credit in zip(rows, credits) if not credit)

        return BalanceSummary(
            user_id=user_id,
            balance=fold_balance(rows),
            total_earned=total_earned,
            total_redeemed=total_redeemed,
            transaction_count=len(rows)
        )
