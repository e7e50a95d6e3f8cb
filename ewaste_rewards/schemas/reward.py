"""Reward, ledger and redemption schemas"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime

from ewaste_rewards.models.transaction import TransactionType

class CatalogEntry(BaseModel):
    """One redeemable offer as shown to a user"""
    id: int
    name: str
    cost: int = Field(..., ge=0)
    description: Optional[str] = None
    collection_info: str = ""

class RewardAccountResponse(BaseModel):
    id: int
    user_id: int
    points: int
    level: int
    is_available: bool
    name: str
    description: Optional[str] = None
    collection_info: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class TransactionResponse(BaseModel):
    id: int
    user_id: int
    type: TransactionType
    amount: int
    description: str
    date: datetime

    model_config = ConfigDict(from_attributes=True)

class BalanceSummary(BaseModel):
    user_id: int
    balance: int
    total_earned: int
    total_redeemed: int
    transaction_count: int

class RedemptionResult(BaseModel):
    account: RewardAccountResponse
    transaction: TransactionResponse
    balance: int
    message: str

class LeaderboardEntry(BaseModel):
    user_id: int
    user_name: Optional[str] = None
    points: int
    level: int
    created_at: datetime

class TransactionHistory(BaseModel):
    user_id: int
    transactions: List[TransactionResponse]
    balance: int
