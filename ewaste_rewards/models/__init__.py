"""Models package initialization"""

from .base import Base
from .user import User
from .report import Report, ReportStatus, CollectedWaste, CollectionStatus
from .reward import Reward, RewardCatalogEntry
from .transaction import Transaction, TransactionType
from .notification import Notification

# Export all models
__all__ = [
    "Base",
    "User",
    "Report",
    "ReportStatus",
    "CollectedWaste",
    "CollectionStatus",
    "Reward",
    "RewardCatalogEntry",
    "Transaction",
    "TransactionType",
    "Notification",
]
