"""Commission repository for data access."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy.orm import Session

from caixa.models.commission import Commission
from caixa.models.payment import TransactionType


class CommissionRepository:
    """Repository for Commission model."""

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        consultant_id: UUID,
        transaction_type: TransactionType,
        amount: Decimal,
        operation_date: date,
        base_amount: Decimal = Decimal("0"),
        percentage: Decimal = Decimal("0"),
        payment_id: UUID | None = None,
        description: str | None = None,
    ) -> Commission:
        """Create a new commission entry."""
        commission = Commission(
            payment_id=payment_id,
            consultant_id=consultant_id,
            transaction_type=transaction_type.value,
            base_amount=base_amount,
            percentage=percentage,
            amount=amount,
            operation_date=operation_date,
            description=description,
        )
        self.db.add(commission)
        self.db.commit()
        self.db.refresh(commission)
        return commission

    def get_by_payment_id(self, payment_id: UUID) -> Commission | None:
        """Get the commission derived from a payment, if any."""
        return self.db.query(Commission).filter(Commission.payment_id == payment_id).first()

    def get_by_consultant(
        self,
        consultant_id: UUID,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Commission]:
        """Get a consultant's commission entries, newest operation first."""
        query = self.db.query(Commission).filter(Commission.consultant_id == consultant_id)
        if start_date:
            query = query.filter(Commission.operation_date >= start_date)
        if end_date:
            query = query.filter(Commission.operation_date <= end_date)
        return query.order_by(
            Commission.operation_date.desc(), Commission.created_at.desc()
        ).all()
