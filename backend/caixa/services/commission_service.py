"""Commission service: derives consultant commissions from settled payments."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from caixa.core.config import settings
from caixa.core.errors import NotFoundError, ValidationError
from caixa.models.commission import Commission
from caixa.models.consultant import Consultant
from caixa.models.payment import TransactionType
from caixa.repositories.commission_repository import CommissionRepository
from caixa.repositories.consultant_repository import ConsultantRepository
from caixa.repositories.installment_repository import InstallmentRepository
from caixa.repositories.payment_repository import PaymentRepository
from caixa.repositories.service_repository import ServiceRepository

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def calculate_commission(service_value: Decimal, percentage: Decimal) -> Decimal:
    """Commission owed on ``service_value`` at ``percentage`` percent, to the cent."""
    if percentage < 0 or percentage > 100:
        raise ValidationError("Commission percentage must be between 0 and 100")
    raw = Decimal(str(service_value)) * Decimal(str(percentage)) / Decimal("100")
    return raw.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class CommissionExtract:
    """A consultant's commission entries for a period with running totals."""

    consultant: Consultant
    start_date: date
    end_date: date
    entries: list[Commission]
    credits: Decimal
    debits: Decimal
    balance: Decimal


class CommissionService:
    """Service for consultant commissions.

    Commission entries mirror the payment's direction: a credit payment (a
    sale) credits the consultant, a debit payment debits them.
    """

    def __init__(self, db: Session):
        self.db = db
        self.commission_repo = CommissionRepository(db)
        self.consultant_repo = ConsultantRepository(db)
        self.payment_repo = PaymentRepository(db)
        self.installment_repo = InstallmentRepository(db)
        self.service_repo = ServiceRepository(db)

    def _get_consultant(self, consultant_id: UUID) -> Consultant:
        consultant = self.consultant_repo.get_by_id(consultant_id)
        if not consultant:
            raise NotFoundError(f"Consultant {consultant_id} not found")
        return consultant

    def derive_for_payment(self, payment_id: UUID) -> Commission:
        """Record the commission for a fully settled payment.

        Returns the existing entry when the payment already has one.

        Raises:
            NotFoundError: the payment or its consultant does not exist.
            ValidationError: the payment still has pending installments.
        """
        existing = self.commission_repo.get_by_payment_id(payment_id)
        if existing:
            return existing

        payment = self.payment_repo.get_by_id(payment_id)
        if not payment:
            raise NotFoundError(f"Payment {payment_id} not found")

        pending = self.installment_repo.count_pending(payment_id)
        if pending:
            raise ValidationError(
                f"Payment {payment_id} is not settled ({pending} installment(s) pending)"
            )

        consultant = self._get_consultant(payment.consultant_id)  # type: ignore[arg-type]
        service = self.service_repo.get_by_id(payment.service_id)  # type: ignore[arg-type]
        percentage = Decimal(str(consultant.commission_percentage))
        base_amount = Decimal(str(payment.total_amount))
        amount = calculate_commission(base_amount, percentage)

        service_name = service.name if service else "service"
        try:
            commission = self.commission_repo.create(
                consultant_id=consultant.id,  # type: ignore[arg-type]
                transaction_type=TransactionType(payment.transaction_type),
                amount=amount,
                operation_date=payment.transaction_date,  # type: ignore[arg-type]
                base_amount=base_amount,
                percentage=percentage,
                payment_id=payment_id,
                description=f"{percentage}% of {base_amount} ({service_name})",
            )
        except IntegrityError:
            # Another request derived it first.
            self.db.rollback()
            existing = self.commission_repo.get_by_payment_id(payment_id)
            if existing is None:
                raise
            return existing

        logger.info(
            "Derived %s commission %s for consultant %s from payment %s",
            commission.transaction_type,
            amount,
            consultant.id,
            payment_id,
        )
        return commission

    def record_adjustment(
        self,
        consultant_id: UUID,
        transaction_type: TransactionType,
        amount: Decimal,
        operation_date: date | None = None,
        description: str | None = None,
    ) -> Commission:
        """Record a manual credit or debit on a consultant's commissions."""
        consultant = self._get_consultant(consultant_id)
        if amount <= 0:
            raise ValidationError("Adjustment amount must be positive")
        if amount > settings.MAX_TOTAL_AMOUNT:
            raise ValidationError(
                f"Adjustment amount cannot exceed {settings.MAX_TOTAL_AMOUNT}"
            )

        commission = self.commission_repo.create(
            consultant_id=consultant.id,  # type: ignore[arg-type]
            transaction_type=transaction_type,
            amount=amount.quantize(CENT, rounding=ROUND_HALF_UP),
            operation_date=operation_date or date.today(),
            description=description,
        )
        logger.info(
            "Recorded %s commission adjustment of %s for consultant %s",
            transaction_type.value,
            amount,
            consultant_id,
        )
        return commission

    def get_extract(
        self,
        consultant_id: UUID,
        start_date: date,
        end_date: date,
    ) -> CommissionExtract:
        """Commission statement for a consultant between two dates (inclusive)."""
        if start_date > end_date:
            raise ValidationError("start_date must not be after end_date")
        consultant = self._get_consultant(consultant_id)
        entries = self.commission_repo.get_by_consultant(consultant_id, start_date, end_date)

        credits = sum(
            (
                Decimal(str(c.amount))
                for c in entries
                if c.transaction_type == TransactionType.CREDIT.value
            ),
            Decimal("0"),
        )
        debits = sum(
            (
                Decimal(str(c.amount))
                for c in entries
                if c.transaction_type == TransactionType.DEBIT.value
            ),
            Decimal("0"),
        )
        return CommissionExtract(
            consultant=consultant,
            start_date=start_date,
            end_date=end_date,
            entries=entries,
            credits=credits,
            debits=debits,
            balance=credits - debits,
        )
