"""
Waste verification settlement

Completing a report is one unit of work: the collected-waste record, the
report status change, both ledger credits, both cached counter updates
and both notifications are staged in a single database transaction and
committed together, or not at all.
"""

from typing import Any, Dict, List, Optional, Union
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select
import logging

from ewaste_rewards.core.config import settings
from ewaste_rewards.core.database import commit_or_raise
from ewaste_rewards.core.exceptions import (
    ForbiddenException,
    InvalidStatusTransitionException,
    PersistenceException,
    ReportNotFoundException,
)
from ewaste_rewards.core.locks import user_locks
from ewaste_rewards.models import (
    CollectedWaste,
    CollectionStatus,
    Report,
    ReportStatus,
    TransactionType,
)
from ewaste_rewards.models.base import utcnow
from ewaste_rewards.schemas.report import VerificationResult
from ewaste_rewards.services.notification_service import NotificationService
from ewaste_rewards.services.report_service import ReportService
from ewaste_rewards.services.report_state_machine import report_state_machine
from ewaste_rewards.services.reward_service import RewardService
from ewaste_rewards.services.transaction_service import TransactionService
from ewaste_rewards.services.user_service import UserService

logger = logging.getLogger(__name__)

REWARD_NOTIFICATION_TYPE = "reward"

class SettlementService:
    """Completes verified collections and pays out both sides"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.report_service = ReportService(db)
        self.user_service = UserService(db)
        self.reward_service = RewardService(db)
        self.transaction_service = TransactionService(db)
        self.notification_service = NotificationService(db)

    async def save_collected_waste(
        self,
        report_id: int,
        collector_id: int,
        verification_result: Optional[Union[VerificationResult, Dict[str, Any]]] = None
    ) -> CollectedWaste:
        """
        in_progress -> completed for a verified collection

        Credits the reporter and the collector and notifies both.

        Raises:
            ReportNotFoundException: unknown report
            InvalidStatusTransitionException: report is not in progress
            ForbiddenException: report was claimed by a different collector
            PersistenceException: the unit of work could not be committed
        """
        if isinstance(verification_result, dict):
            verification_result = VerificationResult.model_validate(verification_result)

        reporter_id = await self._reporter_id(report_id)

        async with user_locks.hold(reporter_id, collector_id):
            try:
                collected = await self._settle_locked(report_id, collector_id, verification_result)
            except Exception:
                await self.db.rollback()
                raise

        logger.info(
            f"Report {report_id} settled: reporter {reporter_id} "
            f"+{settings.REPORTER_REWARD_POINTS}, collector {collector_id} "
            f"+{settings.COLLECTOR_REWARD_POINTS}"
        )
        return collected

    async def _reporter_id(self, report_id: int) -> int:
        try:
            reporter_id = await self.db.scalar(select(Report.user_id).where(Report.id == report_id))
        except SQLAlchemyError as e:
            raise PersistenceException("Could not load report") from e
        if reporter_id is None:
            raise ReportNotFoundException(report_id)
        return reporter_id

    async def _settle_locked(
        self,
        report_id: int,
        collector_id: int,
        verification_result: Optional[VerificationResult]
    ) -> CollectedWaste:
        await self.user_service.get_user(collector_id)
        report = await self.report_service.get_report(report_id, for_update=True)
        current = ReportStatus(report.status)

        if not report_state_machine.can_transition(current, ReportStatus.COMPLETED):
            raise InvalidStatusTransitionException(current.value, ReportStatus.COMPLETED.value)
        if report.collector_id is not None and report.collector_id != collector_id:
            raise ForbiddenException("Report is assigned to another collector")

        now = utcnow()
        collected = CollectedWaste(
            report_id=report.id,
            collector_id=collector_id,
            collection_date=now,
            status=CollectionStatus.VERIFIED,
            verification_result=verification_result.to_storage() if verification_result else None,
        )
        self.db.add(collected)

        report.status = ReportStatus.COMPLETED
        report.collector_id = collector_id
        report.completed_at = now

        reporter_points = settings.REPORTER_REWARD_POINTS
        collector_points = settings.COLLECTOR_REWARD_POINTS

        await self._credit(
            report.user_id,
            reporter_points,
            TransactionType.EARNED_REPORT,
            "Points earned for verified waste report",
            f"Your waste report has been verified and collected! You've earned {reporter_points} points!",
        )
        await self._credit(
            collector_id,
            collector_points,
            TransactionType.EARNED_COLLECT,
            "Points earned for waste collection",
            f"Waste collection verified! You've earned {collector_points} points!",
        )

        await commit_or_raise(self.db, "collection settlement")
        return collected

    async def _credit(
        self,
        user_id: int,
        points: int,
        type: TransactionType,
        description: str,
        message: str
    ) -> None:
        await self.transaction_service.stage(user_id, type, points, description)
        await self.reward_service.adjust_cached_points(user_id, points)
        await self.notification_service.stage_notification(user_id, message, REWARD_NOTIFICATION_TYPE)

    async def list_collected_by_collector(self, collector_id: int) -> List[CollectedWaste]:
        stmt = (
            select(CollectedWaste)
            .where(CollectedWaste.collector_id == collector_id)
            .order_by(CollectedWaste.collection_date.desc(), CollectedWaste.id.desc())
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching collected wastes for collector {collector_id}: {str(e)}")
            return []
        return list(result.scalars().all())
