"""
Report schemas for request/response validation
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any
from datetime import datetime
import enum

from ewaste_rewards.models.report import ReportStatus, CollectionStatus

NO_WASTE_SENTINEL = "none"

class WasteClassification(str, enum.Enum):
    RECYCLABLE = "recyclable"
    HAZARDOUS = "hazardous"
    REFURBISHABLE = "refurbishable"
    NON_RECYCLABLE = "non-recyclable"

class VerificationResult(BaseModel):
    """
    Structured output of the image classification service

    Accepts the classifier's camelCase keys as well as snake_case.
    """
    waste_type: str = Field(..., alias="wasteType", min_length=1)
    quantity: str = Field(..., min_length=1)
    confidence: float = Field(..., ge=0, le=100)
    hazardous: bool = False
    disposal_instructions: Optional[str] = Field(None, alias="disposalInstructions")
    recycling_value: Optional[str] = Field(None, alias="recyclingValue")
    classification: Optional[WasteClassification] = None

    model_config = ConfigDict(populate_by_name=True)

    @property
    def no_waste_detected(self) -> bool:
        return self.waste_type.strip().lower() == NO_WASTE_SENTINEL

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

class ReportCreate(BaseModel):
    """Schema for creating a report"""
    location: str = Field(..., min_length=1)
    waste_type: str = Field(..., min_length=1, max_length=255)
    amount: str = Field(..., min_length=1, max_length=255)
    image_url: Optional[str] = None
    verification_result: Optional[VerificationResult] = None

class ReportResponse(BaseModel):
    id: int
    user_id: int
    location: str
    waste_type: str
    amount: str
    image_url: Optional[str] = None
    verification_result: Optional[Dict[str, Any]] = None
    status: ReportStatus
    created_at: datetime
    assigned_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    collector_id: Optional[int] = None
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class CollectionTask(BaseModel):
    """Collector-facing task view of a report"""
    id: int
    location: str
    waste_type: str
    amount: str
    status: ReportStatus
    date: str  # YYYY-MM-DD
    collector_id: Optional[int] = None

class CollectionStatusResponse(BaseModel):
    id: int
    status: ReportStatus
    created_at: datetime
    assigned_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    collector_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)

class TaskStatusUpdate(BaseModel):
    status: ReportStatus

class CollectRequest(BaseModel):
    """Collector's verification of a picked-up report"""
    verification_result: Optional[VerificationResult] = None

class CollectedWasteResponse(BaseModel):
    id: int
    report_id: int
    collector_id: int
    collection_date: datetime
    status: CollectionStatus
    verification_result: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(from_attributes=True)
