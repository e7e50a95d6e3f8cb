"""Rewards API router"""

from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ewaste_rewards.api.dependencies import get_current_user
from ewaste_rewards.core.database import get_db
from ewaste_rewards.models import User
from ewaste_rewards.schemas.reward import (
    BalanceSummary,
    CatalogEntry,
    LeaderboardEntry,
    RedemptionResult,
    TransactionHistory,
    TransactionResponse,
)
from ewaste_rewards.services.balance_service import BalanceService
from ewaste_rewards.services.redemption_service import RedemptionService
from ewaste_rewards.services.reward_service import RewardService
from ewaste_rewards.services.transaction_service import TransactionService

router = APIRouter()

@router.get("/catalog", response_model=List[CatalogEntry])
async def get_available_rewards(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Redeemable rewards, led by the user's full point balance"""
    return await RewardService(db).list_available(current_user.id)

@router.get("/balance", response_model=BalanceSummary)
async def get_points_balance(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await BalanceService(db).balance_summary(current_user.id)

@router.get("/transactions", response_model=TransactionHistory)
async def get_points_history(
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Recent ledger entries, newest first"""
    transactions = await TransactionService(db).list_recent(current_user.id, limit)
    balance = await BalanceService(db).compute_balance(current_user.id)
    return TransactionHistory(
        user_id=current_user.id,
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        balance=balance,
    )

@router.post("/redeem/{reward_id}", response_model=RedemptionResult)
async def redeem_reward(
    reward_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Redeem a catalog reward; reward 0 redeems every point"""
    return await RedemptionService(db).redeem(current_user.id, reward_id)

@router.get("/leaderboard", response_model=List[LeaderboardEntry])
async def get_leaderboard(
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    return await RewardService(db).leaderboard(limit)
