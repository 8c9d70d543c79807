"""Payment method repository for data access."""

from uuid import UUID

from sqlalchemy.orm import Session

from caixa.models.payment_method import PaymentMethod
from caixa.schemas.directory import PaymentMethodCreate


class PaymentMethodRepository:
    """Repository for PaymentMethod model."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, payment_method_id: UUID) -> PaymentMethod | None:
        """Get a payment method by ID."""
        return self.db.query(PaymentMethod).filter(PaymentMethod.id == payment_method_id).first()

    def create(self, data: PaymentMethodCreate) -> PaymentMethod:
        """Create a new payment method."""
        payment_method = PaymentMethod(**data.model_dump())
        self.db.add(payment_method)
        self.db.commit()
        self.db.refresh(payment_method)
        return payment_method
