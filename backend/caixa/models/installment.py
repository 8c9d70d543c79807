"""Installment model: one scheduled portion of a payment."""

from datetime import date
from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from caixa.core.database import Base
from caixa.models.shared import UUIDType, generate_uuid


class InstallmentStatus(str, Enum):
    """Stored settlement status.

    "overdue" is deliberately absent: it is derived at read time from
    ``due_date`` and never written.
    """

    PENDING = "pending"
    PAID = "paid"


class Installment(Base):
    __tablename__ = "installments"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    payment_id = Column(
        UUIDType, ForeignKey("payments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sequence_number = Column(Integer, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    paid_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default=InstallmentStatus.PENDING.value)
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    payment = relationship("Payment", back_populates="installments")

    __table_args__ = (
        UniqueConstraint("payment_id", "sequence_number", name="uq_installments_payment_sequence"),
        CheckConstraint("sequence_number >= 1", name="ck_installments_sequence_number"),
        CheckConstraint("amount > 0", name="ck_installments_amount_positive"),
        CheckConstraint("status IN ('pending', 'paid')", name="ck_installments_status"),
        CheckConstraint(
            "status = 'pending' OR paid_date IS NOT NULL", name="ck_installments_paid_date"
        ),
    )


class InstallmentDisplayStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


def derive_display_status(status: str, due_date: date, as_of: date) -> InstallmentDisplayStatus:
    """Status shown to users: a pending installment past its due date reads as overdue."""
    if status == InstallmentStatus.PAID.value:
        return InstallmentDisplayStatus.PAID
    if due_date < as_of:
        return InstallmentDisplayStatus.OVERDUE
    return InstallmentDisplayStatus.PENDING
