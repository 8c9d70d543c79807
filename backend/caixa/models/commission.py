"""Commission model: consultant credit/debit entries derived from payments."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from caixa.core.database import Base
from caixa.models.shared import UUIDType, generate_uuid


class Commission(Base):
    """A commission movement for a consultant.

    Entries derived from a payment carry its ``payment_id`` (at most one per
    payment); manual adjustments leave it null.
    """

    __tablename__ = "commissions"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    payment_id = Column(
        UUIDType,
        ForeignKey("payments.id", ondelete="CASCADE"),
        nullable=True,
        unique=True,
        index=True,
    )
    consultant_id = Column(
        UUIDType, ForeignKey("consultants.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    transaction_type = Column(String(10), nullable=False)
    base_amount = Column(Numeric(12, 2), nullable=False, default=0)
    percentage = Column(Numeric(5, 2), nullable=False, default=0)
    amount = Column(Numeric(12, 2), nullable=False)
    operation_date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    payment = relationship("Payment", back_populates="commission")

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_commissions_amount"),
        CheckConstraint(
            "transaction_type IN ('credit', 'debit')", name="ck_commissions_transaction_type"
        ),
    )
