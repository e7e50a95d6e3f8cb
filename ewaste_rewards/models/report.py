"""
Waste report and collection models
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, JSON, Enum
from sqlalchemy.orm import relationship
import enum

from .base import Base, TimestampedModel, utcnow

class ReportStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

class CollectionStatus(str, enum.Enum):
    COLLECTED = "collected"
    VERIFIED = "verified"

def _enum_values(enum_class):
    return [member.value for member in enum_class]

class Report(Base, TimestampedModel):
    """A single e-waste submission"""

    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    # Submission
    location = Column(Text, nullable=False)
    waste_type = Column(String(255), nullable=False)
    amount = Column(String(255), nullable=False)
    image_url = Column(Text, nullable=True)
    verification_result = Column(JSON, nullable=True)

    # Lifecycle
    status = Column(
        Enum(ReportStatus, name="report_status", values_callable=_enum_values),
        nullable=False,
        default=ReportStatus.PENDING,
    )
    assigned_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    collector_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    # Relationships
    reporter = relationship("User", back_populates="reports", foreign_keys=[user_id])
    collector = relationship("User", foreign_keys=[collector_id])
    collected_waste = relationship("CollectedWaste", back_populates="report", uselist=False)

    # Indexes
    __table_args__ = (
        Index("idx_reports_status", "status"),
        Index("idx_reports_user", "user_id"),
    )

class CollectedWaste(Base):
    """Links a report to the collector who verified it; one per report"""

    __tablename__ = "collected_wastes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    report_id = Column(Integer, ForeignKey("reports.id"), unique=True, nullable=False)
    collector_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    collection_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    status = Column(
        Enum(CollectionStatus, name="collection_status", values_callable=_enum_values),
        nullable=False,
        default=CollectionStatus.COLLECTED,
    )
    verification_result = Column(JSON, nullable=True)

    # Relationships
    report = relationship("Report", back_populates="collected_waste")
    collector = relationship("User", foreign_keys=[collector_id])

    __table_args__ = (
        Index("idx_collected_wastes_collector", "collector_id"),
    )
