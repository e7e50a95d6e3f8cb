"""API v1 routes aggregation"""

from fastapi import APIRouter

from .users.router import router as users_router
from .reports.router import router as reports_router
from .rewards.router import router as rewards_router
from .notifications.router import router as notifications_router
from .stats.router import router as stats_router

# Create v1 router
api_router = APIRouter()

api_router.include_router(users_router, prefix="/users", tags=["Users"])
api_router.include_router(reports_router, prefix="/reports", tags=["Reports"])
api_router.include_router(rewards_router, prefix="/rewards", tags=["Rewards"])
api_router.include_router(notifications_router, prefix="/notifications", tags=["Notifications"])
api_router.include_router(stats_router, prefix="/stats", tags=["Stats"])
