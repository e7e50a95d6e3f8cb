"""
User model
Identity anchor for reports, ledger entries, rewards and notifications
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from .base import Base, utcnow

class User(Base):
    """A resolved identity (email comes from the external auth provider)"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    reward = relationship("Reward", back_populates="user", uselist=False)
    transactions = relationship("Transaction", back_populates="user")
    notifications = relationship("Notification", back_populates="user")
    reports = relationship("Report", back_populates="reporter", foreign_keys="Report.user_id")
