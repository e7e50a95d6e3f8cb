"""Waste report and collection endpoints"""

from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ewaste_rewards.api.dependencies import get_current_user
from ewaste_rewards.core.database import get_db
from ewaste_rewards.models import User
from ewaste_rewards.schemas.report import (
    CollectedWasteResponse,
    CollectionStatusResponse,
    CollectionTask,
    CollectRequest,
    ReportCreate,
    ReportResponse,
    TaskStatusUpdate,
)
from ewaste_rewards.services.report_service import ReportService
from ewaste_rewards.services.settlement_service import SettlementService

router = APIRouter()

@router.post("", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def create_report(
    request: ReportCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Submit a classified e-waste report"""
    return await ReportService(db).create_report(current_user.id, request)

@router.get("/mine", response_model=List[ReportResponse])
async def get_my_reports(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await ReportService(db).get_reports_by_user(current_user.id)

@router.get("/pending", response_model=List[ReportResponse])
async def get_pending_reports(db: AsyncSession = Depends(get_db)):
    return await ReportService(db).get_pending_reports()

@router.get("/recent", response_model=List[ReportResponse])
async def get_recent_reports(
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    return await ReportService(db).get_recent_reports(limit)

@router.get("/tasks", response_model=List[CollectionTask])
async def get_collection_tasks(
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """Reports as collector tasks"""
    return await ReportService(db).get_waste_collection_tasks(limit)

@router.get("/collected", response_model=List[CollectedWasteResponse])
async def get_my_collections(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Collections verified by the current user"""
    return await SettlementService(db).list_collected_by_collector(current_user.id)

@router.get("/{report_id}/status", response_model=CollectionStatusResponse)
async def get_collection_status(report_id: int, db: AsyncSession = Depends(get_db)):
    return await ReportService(db).get_collection_status(report_id)

@router.post("/{report_id}/claim", response_model=ReportResponse)
async def claim_report(
    report_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Start collecting a pending report"""
    return await ReportService(db).claim_report(report_id, current_user.id)

@router.patch("/{report_id}/status", response_model=ReportResponse)
async def update_task_status(
    report_id: int,
    request: TaskStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await ReportService(db).update_task_status(report_id, request.status, current_user.id)

@router.post("/{report_id}/collect", response_model=CollectedWasteResponse)
async def collect_report(
    report_id: int,
    request: CollectRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Verify a collection; credits the reporter and the collector"""
    return await SettlementService(db).save_collected_waste(
        report_id, current_user.id, request.verification_result
    )
