"""Community impact statistics"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, func
import logging

from ewaste_rewards.core.config import settings
from ewaste_rewards.core.exceptions import PersistenceException
from ewaste_rewards.models import Report, ReportStatus, Transaction
from ewaste_rewards.schemas.stats import ImpactSummary
from ewaste_rewards.utils.validators import parse_quantity

logger = logging.getLogger(__name__)

class ImpactService:
    """Aggregates report and ledger figures for the public dashboard"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def impact_summary(self) -> ImpactSummary:
        try:
            reports_submitted = await self.db.scalar(select(func.count(Report.id))) or 0
            completed = (
                await self.db.execute(
                    select(Report.amount, Report.verification_result)
                    .where(Report.status == ReportStatus.COMPLETED)
                )
            ).all()
            tokens_earned = await self.db.scalar(
                select(func.coalesce(func.sum(Transaction.amount), 0))
                .where(Transaction.type.like("earned%"))
            ) or 0
        except SQLAlchemyError as e:
            logger.error(f"Error computing impact statistics: {str(e)}")
            raise PersistenceException("Could not compute impact statistics") from e

        waste_collected = 0.0
        hazardous_waste = 0.0
        for amount, verification in completed:
            quantity = parse_quantity(amount)
            waste_collected += quantity
            if verification and verification.get("hazardous"):
                hazardous_waste += quantity

        return ImpactSummary(
            reports_submitted=reports_submitted,
            waste_collected=round(waste_collected, 1),
            hazardous_waste=round(hazardous_waste, 1),
            tokens_earned=int(tokens_earned),
            co2_offset=round(waste_collected * settings.CO2_OFFSET_PER_UNIT, 1),
        )
