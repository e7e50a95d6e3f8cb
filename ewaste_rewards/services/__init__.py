"""Business services: the points ledger and everything that writes to it"""

from .balance_service import BalanceService, fold_balance
from .impact_service import ImpactService
from .notification_service import NotificationService
from .redemption_service import RedemptionService
from .report_service import ReportService
from .report_state_machine import ReportStateMachine, report_state_machine
from .reward_service import RewardService, FULL_REDEMPTION_ID
from .settlement_service import SettlementService
from .transaction_service import TransactionService
from .user_service import UserService

__all__ = [
    "BalanceService",
    "fold_balance",
    "ImpactService",
    "NotificationService",
    "RedemptionService",
    "ReportService",
    "ReportStateMachine",
    "report_state_machine",
    "RewardService",
    "FULL_REDEMPTION_ID",
    "SettlementService",
    "TransactionService",
    "UserService",
]
