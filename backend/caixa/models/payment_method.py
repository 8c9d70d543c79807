"""Payment method registry entry ("forma de pagamento")."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from caixa.core.database import Base
from caixa.models.shared import UUIDType, generate_uuid


class PaymentMethod(Base):
    """A way of paying at the counter.

    Only methods with ``allows_installments`` (credit cards, in practice)
    may split a payment into more than one installment.
    """

    __tablename__ = "payment_methods"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    allows_installments = Column(Boolean, nullable=False, default=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
