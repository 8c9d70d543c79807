"""Payment model: the parent record of an installment plan."""

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
    Text,
    func,
)
from sqlalchemy.orm import relationship

from caixa.core.database import Base
from caixa.models.shared import UUIDType, generate_uuid


class TransactionType(str, Enum):
    """Direction of the money: credit ("entrada") or debit ("saída")."""

    CREDIT = "credit"
    DEBIT = "debit"


class Payment(Base):
    """A single cash register transaction, split into ``installment_count`` installments.

    ``total_amount`` and ``installment_count`` are fixed at creation; there is
    no update path for them.
    """

    __tablename__ = "payments"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    client_id = Column(
        UUIDType, ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    consultant_id = Column(
        UUIDType, ForeignKey("consultants.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    service_id = Column(
        UUIDType, ForeignKey("services.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    payment_method_id = Column(
        UUIDType, ForeignKey("payment_methods.id", ondelete="RESTRICT"), nullable=False
    )

    transaction_type = Column(String(10), nullable=False, default=TransactionType.CREDIT.value)
    total_amount = Column(Numeric(12, 2), nullable=False)
    installment_count = Column(Integer, nullable=False, default=1)
    transaction_date = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    installments = relationship(
        "Installment",
        back_populates="payment",
        order_by="Installment.sequence_number",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    commission = relationship(
        "Commission",
        back_populates="payment",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("total_amount > 0", name="ck_payments_total_amount_positive"),
        CheckConstraint("installment_count >= 1", name="ck_payments_installment_count"),
        CheckConstraint(
            "transaction_type IN ('credit', 'debit')", name="ck_payments_transaction_type"
        ),
    )
