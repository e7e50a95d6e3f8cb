"""
Rewards models: per-user reward accounts and the redeemable catalog
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from .base import Base, TimestampedModel

class Reward(Base, TimestampedModel):
    """
    Per-user reward account

    `points` is a display cache only. The spendable balance is always
    recomputed from the transaction log.
    """

    __tablename__ = "rewards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    points = Column(Integer, nullable=False, default=0)
    level = Column(Integer, nullable=False, default=1)
    is_available = Column(Boolean, nullable=False, default=True)

    # Display fields
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    collection_info = Column(Text, nullable=False)

    # Relationships
    user = relationship("User", back_populates="reward")

    # Constraints
    __table_args__ = (
        CheckConstraint("points >= 0", name="check_non_negative_points"),
    )

class RewardCatalogEntry(Base):
    """A redeemable offer, maintained by the admin surface"""

    __tablename__ = "reward_catalog"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    points = Column(Integer, nullable=False, default=0)  # cost
    description = Column(Text, nullable=True)
    collection_info = Column(Text, nullable=False, default="")
    is_available = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("points >= 0", name="check_non_negative_cost"),
        Index("idx_reward_catalog_available", "is_available"),
    )
