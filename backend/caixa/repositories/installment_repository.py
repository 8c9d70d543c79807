"""Installment repository: the persistence boundary of the installment ledger."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from caixa.models.installment import Installment, InstallmentStatus
from caixa.models.payment import Payment
from caixa.schemas.installment import InstallmentCreate


class InstallmentRepository:
    """Repository for Installment model."""

    def __init__(self, db: Session):
        self.db = db

    def create_all(
        self,
        payment_id: UUID,
        installments: Sequence[InstallmentCreate],
        settled_on: date | None = None,
    ) -> list[Installment]:
        """Add every installment of a payment to the open transaction.

        Only flushes; the caller commits or rolls back the whole plan. When
        ``settled_on`` is given the first installment is stored as paid on
        that date.
        """
        rows = []
        for planned in installments:
            first_settled = settled_on is not None and planned.sequence_number == 1
            row = Installment(
                payment_id=payment_id,
                sequence_number=planned.sequence_number,
                amount=planned.amount,
                due_date=planned.due_date,
                status=(
                    InstallmentStatus.PAID.value
                    if first_settled
                    else InstallmentStatus.PENDING.value
                ),
                paid_date=settled_on if first_settled else None,
            )
            self.db.add(row)
            rows.append(row)
        self.db.flush()
        return rows

    def get_by_id(self, installment_id: UUID) -> Installment | None:
        """Get an installment by ID."""
        return self.db.query(Installment).filter(Installment.id == installment_id).first()

    def list_by_payment(self, payment_id: UUID) -> list[Installment]:
        """Get all installments of a payment in sequence order."""
        return (
            self.db.query(Installment)
            .filter(Installment.payment_id == payment_id)
            .order_by(Installment.sequence_number.asc())
            .all()
        )

    def count_by_payment(self, payment_id: UUID) -> int:
        return self.db.query(Installment).filter(Installment.payment_id == payment_id).count()

    def sum_by_payment(self, payment_id: UUID) -> Decimal:
        """Sum of a payment's stored installment amounts, to the cent."""
        query = self.db.query(func.coalesce(func.sum(Installment.amount), 0)).filter(
            Installment.payment_id == payment_id
        )
        return Decimal(str(query.scalar())).quantize(Decimal("0.01"))

    def count_pending(self, payment_id: UUID) -> int:
        return (
            self.db.query(Installment)
            .filter(
                Installment.payment_id == payment_id,
                Installment.status == InstallmentStatus.PENDING.value,
            )
            .count()
        )

    def update_status(
        self,
        installment_id: UUID,
        status: InstallmentStatus,
        paid_date: date | None,
        expected_status: InstallmentStatus | None = None,
    ) -> bool:
        """Set status and paid date in a single conditional UPDATE and commit.

        With ``expected_status`` the row only changes if it is still in that
        status, so two concurrent writers cannot both apply a transition.
        Returns whether a row was changed.
        """
        stmt = (
            update(Installment)
            .where(Installment.id == installment_id)
            .values(
                status=status.value,
                paid_date=paid_date,
                version=Installment.version + 1,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        if expected_status is not None:
            stmt = stmt.where(Installment.status == expected_status.value)
        result = self.db.execute(stmt)
        self.db.commit()
        return bool(result.rowcount)

    def get_overdue(self, as_of: date, skip: int = 0, limit: int = 100) -> list[Installment]:
        """Pending installments whose due date is before ``as_of``, oldest first."""
        return (
            self.db.query(Installment)
            .filter(
                Installment.status == InstallmentStatus.PENDING.value,
                Installment.due_date < as_of,
            )
            .order_by(Installment.due_date.asc(), Installment.sequence_number.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def sum_collected_on(self, day: date) -> list[tuple[str, Decimal, int]]:
        """Paid installment totals for ``day`` grouped by the payment's transaction type."""
        rows = (
            self.db.query(
                Payment.transaction_type,
                func.coalesce(func.sum(Installment.amount), 0),
                func.count(Installment.id),
            )
            .join(Payment, Payment.id == Installment.payment_id)
            .filter(
                Installment.status == InstallmentStatus.PAID.value,
                Installment.paid_date == day,
            )
            .group_by(Payment.transaction_type)
            .all()
        )
        return [(str(t), Decimal(str(total)), int(n)) for t, total, n in rows]
