"""Request and response schemas"""

from .user import UserResolveRequest, UserResponse
from .report import (
    WasteClassification,
    VerificationResult,
    ReportCreate,
    ReportResponse,
    CollectionTask,
    CollectionStatusResponse,
    TaskStatusUpdate,
    CollectRequest,
    CollectedWasteResponse,
)
from .reward import (
    CatalogEntry,
    RewardAccountResponse,
    TransactionResponse,
    BalanceSummary,
    RedemptionResult,
    LeaderboardEntry,
    TransactionHistory,
)
from .notification import NotificationResponse, MarkReadResponse
from .stats import ImpactSummary

__all__ = [
    "UserResolveRequest",
    "UserResponse",
    "WasteClassification",
    "VerificationResult",
    "ReportCreate",
    "ReportResponse",
    "CollectionTask",
    "CollectionStatusResponse",
    "TaskStatusUpdate",
    "CollectRequest",
    "CollectedWasteResponse",
    "CatalogEntry",
    "RewardAccountResponse",
    "TransactionResponse",
    "BalanceSummary",
    "RedemptionResult",
    "LeaderboardEntry",
    "TransactionHistory",
    "NotificationResponse",
    "MarkReadResponse",
    "ImpactSummary",
]
