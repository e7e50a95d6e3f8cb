"""Report intake, listings and the claim transition"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select
import logging

from ewaste_rewards.core.config import settings
from ewaste_rewards.core.database import commit_or_raise
from ewaste_rewards.core.exceptions import (
    InvalidStatusTransitionException,
    NoWasteDetectedException,
    PersistenceException,
    ReportNotFoundException,
    ValidationException,
)
from ewaste_rewards.models import Report, ReportStatus
from ewaste_rewards.models.base import utcnow
from ewaste_rewards.schemas.report import (
    CollectionTask,
    NO_WASTE_SENTINEL,
    ReportCreate,
)
from ewaste_rewards.services.report_state_machine import report_state_machine
from ewaste_rewards.services.user_service import UserService

logger = logging.getLogger(__name__)

class ReportService:
    """Service for e-waste reports"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_service = UserService(db)

    async def create_report(self, user_id: int, data: ReportCreate) -> Report:
        """
        Create a pending report from a classified submission

        Submissions the classifier marked as "no waste detected" are refused.
        """
        verification = data.verification_result
        if data.waste_type.strip().lower() == NO_WASTE_SENTINEL or (
            verification is not None and verification.no_waste_detected
        ):
            raise NoWasteDetectedException()

        await self.user_service.get_user(user_id)

        report = Report(
            user_id=user_id,
            location=data.location,
            waste_type=data.waste_type,
            amount=data.amount,
            image_url=data.image_url,
            verification_result=verification.to_storage() if verification else None,
            status=ReportStatus.PENDING,
        )
        self.db.add(report)
        await commit_or_raise(self.db, "report")

        logger.info(f"Report {report.id} created by user {user_id}")
        return report

    async def get_report(self, report_id: int, for_update: bool = False) -> Report:
        stmt = select(Report).where(Report.id == report_id).execution_options(populate_existing=True)
        if for_update:
            stmt = stmt.with_for_update()
        try:
            report = (await self.db.execute(stmt)).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error loading report {report_id}: {str(e)}")
            raise PersistenceException("Could not load report") from e
        if report is None:
            raise ReportNotFoundException(report_id)
        return report

    async def _list(self, stmt, what: str) -> List[Report]:
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching {what}: {str(e)}")
            return []
        return list(result.scalars().all())

    async def get_reports_by_user(self, user_id: int) -> List[Report]:
        stmt = (
            select(Report)
            .where(Report.user_id == user_id)
            .order_by(Report.created_at.desc(), Report.id.desc())
        )
        return await self._list(stmt, "reports")

    async def get_pending_reports(self) -> List[Report]:
        stmt = (
            select(Report)
            .where(Report.status == ReportStatus.PENDING)
            .order_by(Report.created_at.asc(), Report.id.asc())
        )
        return await self._list(stmt, "pending reports")

    async def get_recent_reports(self, limit: int = 10) -> List[Report]:
        stmt = (
            select(Report)
            .order_by(Report.created_at.desc(), Report.id.desc())
            .limit(limit)
        )
        return await self._list(stmt, "recent reports")

    async def get_waste_collection_tasks(self, limit: Optional[int] = None) -> List[CollectionTask]:
        """Reports as collection tasks, dated YYYY-MM-DD"""
        limit = limit or settings.DEFAULT_TASKS_LIMIT
        stmt = select(Report).order_by(Report.id.asc()).limit(limit)
        reports = await self._list(stmt, "waste collection tasks")
        return [
            CollectionTask(
                id=report.id,
                location=report.location,
                waste_type=report.waste_type,
                amount=report.amount,
                status=report.status,
                date=report.created_at.date().isoformat(),
                collector_id=report.collector_id,
            )
            for report in reports
        ]

    async def get_collection_status(self, report_id: int) -> Report:
        return await self.get_report(report_id)

    async def claim_report(self, report_id: int, collector_id: int) -> Report:
        """pending -> in_progress: a collector takes the report, no rewards yet"""
        await self.user_service.get_user(collector_id)

        try:
            report = await self.get_report(report_id, for_update=True)
            if not report_state_machine.can_transition(report.status, ReportStatus.IN_PROGRESS):
                raise InvalidStatusTransitionException(
                    ReportStatus(report.status).value, ReportStatus.IN_PROGRESS.value
                )

            report.status = ReportStatus.IN_PROGRESS
            report.collector_id = collector_id
            report.assigned_at = utcnow()
        except Exception:
            await self.db.rollback()
            raise

        await commit_or_raise(self.db, "report claim")
        logger.info(f"Report {report_id} claimed by collector {collector_id}")
        return report

    async def update_task_status(
        self,
        report_id: int,
        new_status: ReportStatus,
        collector_id: Optional[int] = None
    ) -> Report:
        """
        Generic status change, forward only

        Completion is refused here; a report is only completed by a verified
        collection, which also credits both parties.
        """
        new_status = ReportStatus(new_status)
        report = await self.get_report(report_id)
        current = ReportStatus(report.status)

        if not report_state_machine.can_transition(current, new_status):
            raise InvalidStatusTransitionException(current.value, new_status.value)
        if new_status == ReportStatus.COMPLETED:
            raise InvalidStatusTransitionException(current.value, new_status.value)
        if collector_id is None:
            raise ValidationException("A collector is required to start a collection")

        return await self.claim_report(report_id, collector_id)
