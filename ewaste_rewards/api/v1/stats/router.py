"""Public impact statistics"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ewaste_rewards.core.database import get_db
from ewaste_rewards.schemas.stats import ImpactSummary
from ewaste_rewards.services.impact_service import ImpactService

router = APIRouter()

@router.get("/impact", response_model=ImpactSummary)
async def get_impact(db: AsyncSession = Depends(get_db)):
    return await ImpactService(db).impact_summary()
