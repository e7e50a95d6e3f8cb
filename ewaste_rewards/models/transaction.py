"""Point ledger model"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
import enum

from .base import Base, utcnow

class TransactionType(str, enum.Enum):
    EARNED_REPORT = "earned_report"
    EARNED_COLLECT = "earned_collect"
    REDEEMED = "redeemed"

    @property
    def is_credit(self) -> bool:
        return self.value.startswith("earned")

class Transaction(Base):
    """Append-only ledger entry; never updated or deleted"""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    type = Column(String(20), nullable=False)  # earned_report, earned_collect, redeemed
    amount = Column(Integer, nullable=False)  # always positive, sign comes from type
    description = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    user = relationship("User", back_populates="transactions")

    __table_args__ = (
        CheckConstraint("amount > 0", name="check_positive_amount"),
        CheckConstraint(
            "type IN ('earned_report', 'earned_collect', 'redeemed')",
            name="check_transaction_type",
        ),
        Index("idx_transactions_user_date", "user_id", "date"),
    )
