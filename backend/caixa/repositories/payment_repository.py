"""Payment repository for data access."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import case, func
from sqlalchemy.orm import Query, Session, selectinload

from caixa.core.sorting import apply_order_by
from caixa.models.payment import Payment, TransactionType
from caixa.schemas.payment import PaymentCreate


class PaymentRepository:
    """Repository for Payment model.

    ``create`` only flushes: a payment is never committed on its own, the
    ledger service commits it together with its installments.
    """

    def __init__(self, db: Session):
        self.db = db

    def _filtered(
        self,
        transaction_type: TransactionType | None = None,
        client_id: UUID | None = None,
        consultant_id: UUID | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Query:  # type: ignore[type-arg]
        query = self.db.query(Payment)
        if transaction_type:
            query = query.filter(Payment.transaction_type == transaction_type.value)
        if client_id:
            query = query.filter(Payment.client_id == client_id)
        if consultant_id:
            query = query.filter(Payment.consultant_id == consultant_id)
        if start_date:
            query = query.filter(Payment.transaction_date >= start_date)
        if end_date:
            query = query.filter(Payment.transaction_date <= end_date)
        return query

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        transaction_type: TransactionType | None = None,
        client_id: UUID | None = None,
        consultant_id: UUID | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        order_by: str | None = None,
    ) -> list[Payment]:
        """Get all payments with optional filters, newest transaction first."""
        query = self._filtered(transaction_type, client_id, consultant_id, start_date, end_date)
        query = apply_order_by(query, Payment, order_by, default_field="transaction_date")
        return query.offset(skip).limit(limit).all()

    def count(
        self,
        transaction_type: TransactionType | None = None,
        client_id: UUID | None = None,
        consultant_id: UUID | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> int:
        """Count payments matching the same filters as ``get_all``."""
        return self._filtered(
            transaction_type, client_id, consultant_id, start_date, end_date
        ).count()

    def get_by_id(self, payment_id: UUID) -> Payment | None:
        """Get a payment by ID."""
        return self.db.query(Payment).filter(Payment.id == payment_id).first()

    def get_with_installments(self, payment_id: UUID) -> Payment | None:
        """Get a payment by ID with its installments eagerly loaded."""
        return (
            self.db.query(Payment)
            .options(selectinload(Payment.installments))
            .filter(Payment.id == payment_id)
            .first()
        )

    def create(self, data: PaymentCreate) -> Payment:
        """Add a new payment to the open transaction and flush to assign its id."""
        payment = Payment(
            client_id=data.client_id,
            consultant_id=data.consultant_id,
            service_id=data.service_id,
            payment_method_id=data.payment_method_id,
            transaction_type=data.transaction_type.value,
            total_amount=data.total_amount,
            installment_count=data.installment_count,
            transaction_date=data.transaction_date,
            notes=data.notes,
        )
        self.db.add(payment)
        self.db.flush()
        return payment

    def delete(self, payment_id: UUID) -> bool:
        """Delete a payment; its installments and commission go with it."""
        payment = self.get_by_id(payment_id)
        if not payment:
            return False
        self.db.delete(payment)
        self.db.commit()
        return True

    def daily_totals(self, start_date: date, end_date: date) -> list[dict[str, date | Decimal | int]]:
        """Credit and debit totals per transaction date.

        Returns list of dicts with keys: date, credits, debits, count.
        """
        credit_sum = func.coalesce(
            func.sum(
                case(
                    (
                        Payment.transaction_type == TransactionType.CREDIT.value,
                        Payment.total_amount,
                    ),
                    else_=Decimal("0"),
                )
            ),
            Decimal("0"),
        )
        debit_sum = func.coalesce(
            func.sum(
                case(
                    (
                        Payment.transaction_type == TransactionType.DEBIT.value,
                        Payment.total_amount,
                    ),
                    else_=Decimal("0"),
                )
            ),
            Decimal("0"),
        )

        rows = (
            self.db.query(
                Payment.transaction_date.label("day"),
                credit_sum.label("credits"),
                debit_sum.label("debits"),
                func.count(Payment.id).label("count"),
            )
            .filter(
                Payment.transaction_date >= start_date,
                Payment.transaction_date <= end_date,
            )
            .group_by(Payment.transaction_date)
            .order_by(Payment.transaction_date.asc())
            .all()
        )

        return [
            {
                "date": row.day,
                "credits": Decimal(str(row.credits)),
                "debits": Decimal(str(row.debits)),
                "count": int(row.count),
            }
            for row in rows
        ]
