"""Payment ledger service: creates payments together with their installment plan."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from caixa.core.errors import (
    ConsistencyViolation,
    NotFoundError,
    PersistenceFailure,
    ValidationError,
)
from caixa.models.client import Client
from caixa.models.consultant import Consultant
from caixa.models.installment import Installment, InstallmentStatus
from caixa.models.payment import Payment, TransactionType
from caixa.models.payment_method import PaymentMethod
from caixa.models.service import Service
from caixa.repositories.client_repository import ClientRepository
from caixa.repositories.consultant_repository import ConsultantRepository
from caixa.repositories.installment_repository import InstallmentRepository
from caixa.repositories.payment_method_repository import PaymentMethodRepository
from caixa.repositories.payment_repository import PaymentRepository
from caixa.repositories.service_repository import ServiceRepository
from caixa.schemas.installment import InstallmentCreate
from caixa.schemas.payment import PaymentCreate
from caixa.services.installment_plan import build_installment_plan

logger = logging.getLogger(__name__)


@dataclass
class ResolvedReferences:
    """Directory rows a payment points at."""

    client: Client
    consultant: Consultant
    service: Service
    payment_method: PaymentMethod


@dataclass
class PaymentSchedule:
    """Payment plus its installments, shaped for the receipt generator."""

    receipt_number: str
    payment: Payment
    client_name: str
    service_name: str
    consultant_name: str
    payment_method_name: str
    installments: list[Installment]
    amount_paid: Decimal
    amount_outstanding: Decimal
    is_settled: bool


def receipt_number_for(payment: Payment) -> str:
    """Receipt number in the ``REC-<epoch millis>`` form printed on receipts."""
    created = payment.created_at
    if created is None:
        return f"REC-{payment.id.hex[:12].upper()}"
    return f"REC-{int(created.timestamp() * 1000)}"


class PaymentLedgerService:
    """Service for the payment/installment ledger.

    ``create_payment`` is the only write path for payments: the payment row
    and all of its installments are committed as one unit or not at all.
    """

    def __init__(self, db: Session):
        self.db = db
        self.payment_repo = PaymentRepository(db)
        self.installment_repo = InstallmentRepository(db)
        self.client_repo = ClientRepository(db)
        self.consultant_repo = ConsultantRepository(db)
        self.service_repo = ServiceRepository(db)
        self.payment_method_repo = PaymentMethodRepository(db)

    def _resolve(self, label: str, ref: UUID | None, getter: Any) -> Any:
        if ref is None:
            raise ValidationError(f"{label} is required")
        entity = getter(ref)
        if entity is None:
            raise ValidationError(f"{label} {ref} not found")
        if not entity.active:
            raise ValidationError(f"{label} {ref} is inactive")
        return entity

    def _resolve_references(self, data: PaymentCreate) -> ResolvedReferences:
        """Check that every directory reference exists and is active."""
        return ResolvedReferences(
            client=self._resolve("Client", data.client_id, self.client_repo.get_by_id),
            consultant=self._resolve(
                "Consultant", data.consultant_id, self.consultant_repo.get_by_id
            ),
            service=self._resolve("Service", data.service_id, self.service_repo.get_by_id),
            payment_method=self._resolve(
                "Payment method", data.payment_method_id, self.payment_method_repo.get_by_id
            ),
        )

    @staticmethod
    def _check_plan(plan: list[InstallmentCreate], total: Decimal, count: int) -> None:
        planned_total = sum((item.amount for item in plan), Decimal("0"))
        if len(plan) != count or planned_total != total:
            logger.error(
                "Installment plan of %d entries sums to %s, expected %d summing to %s",
                len(plan),
                planned_total,
                count,
                total,
            )
            raise ConsistencyViolation(
                f"Installment plan sums to {planned_total} over {len(plan)} entries, "
                f"expected {total} over {count}"
            )

    def _check_persisted(self, payment: Payment, total: Decimal, count: int) -> None:
        persisted_count = self.installment_repo.count_by_payment(payment.id)  # type: ignore[arg-type]
        persisted_total = self.installment_repo.sum_by_payment(payment.id)  # type: ignore[arg-type]
        if persisted_count != count or persisted_total != total:
            raise ConsistencyViolation(
                f"Payment {payment.id} stored {persisted_count} installments "
                f"summing to {persisted_total}, expected {count} summing to {total}"
            )

    def create_payment(self, data: PaymentCreate) -> Payment:
        """Create a payment and its installments atomically.

        1. Validate amount, installment count and directory references
        2. Split the total and schedule the due dates
        3. Insert the payment and every installment in one transaction;
           installment 1 is settled on the transaction date
        4. Commit, or roll everything back and raise

        Raises:
            ValidationError: bad input; nothing was written.
            ConsistencyViolation: the plan does not add up; nothing was written.
            PersistenceFailure: the transaction could not commit; nothing was written.
        """
        count = data.installment_count
        plan = build_installment_plan(data.total_amount, count, data.transaction_date)
        self._check_plan(plan, data.total_amount, count)

        refs = self._resolve_references(data)
        if count > 1 and not refs.payment_method.allows_installments:
            raise ValidationError(
                f"Payment method '{refs.payment_method.name}' does not allow installments"
            )

        try:
            payment = self.payment_repo.create(data)
            self.installment_repo.create_all(
                payment.id,  # type: ignore[arg-type]
                plan,
                settled_on=data.transaction_date,
            )
            self._check_persisted(payment, data.total_amount, count)
            self.db.commit()
        except ConsistencyViolation:
            self.db.rollback()
            logger.error("Rolled back payment with inconsistent installment plan")
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Rolled back payment creation: %s", exc)
            raise PersistenceFailure("Could not store the payment; nothing was saved") from exc

        self.db.refresh(payment)
        logger.info(
            "Created %s payment %s: %s in %d installment(s)",
            payment.transaction_type,
            payment.id,
            payment.total_amount,
            count,
        )
        return payment

    def get_payment(self, payment_id: UUID) -> Payment:
        """Get a payment with its installments, or raise NotFoundError."""
        payment = self.payment_repo.get_with_installments(payment_id)
        if not payment:
            raise NotFoundError(f"Payment {payment_id} not found")
        return payment

    def list_payments(
        self,
        skip: int = 0,
        limit: int = 100,
        transaction_type: TransactionType | None = None,
        client_id: UUID | None = None,
        consultant_id: UUID | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        order_by: str | None = None,
    ) -> tuple[list[Payment], int]:
        """Get a page of payments and the total number matching the filters."""
        filters = {
            "transaction_type": transaction_type,
            "client_id": client_id,
            "consultant_id": consultant_id,
            "start_date": start_date,
            "end_date": end_date,
        }
        payments = self.payment_repo.get_all(skip=skip, limit=limit, order_by=order_by, **filters)
        return payments, self.payment_repo.count(**filters)

    def list_installments(self, payment_id: UUID) -> list[Installment]:
        """Get a payment's installments in sequence order."""
        if not self.payment_repo.get_by_id(payment_id):
            raise NotFoundError(f"Payment {payment_id} not found")
        return self.installment_repo.list_by_payment(payment_id)

    def delete_payment(self, payment_id: UUID) -> None:
        """Delete a payment together with its installments and commission."""
        try:
            deleted = self.payment_repo.delete(payment_id)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceFailure(f"Could not delete payment {payment_id}") from exc
        if not deleted:
            raise NotFoundError(f"Payment {payment_id} not found")
        logger.info("Deleted payment %s", payment_id)

    def get_schedule(self, payment_id: UUID) -> PaymentSchedule:
        """Build the receipt view of a payment's installment plan."""
        payment = self.get_payment(payment_id)
        installments = list(payment.installments)
        amount_paid = sum(
            (
                Decimal(str(i.amount))
                for i in installments
                if i.status == InstallmentStatus.PAID.value
            ),
            Decimal("0"),
        )
        total = Decimal(str(payment.total_amount))

        client = self.client_repo.get_by_id(payment.client_id)  # type: ignore[arg-type]
        service = self.service_repo.get_by_id(payment.service_id)  # type: ignore[arg-type]
        consultant = self.consultant_repo.get_by_id(payment.consultant_id)  # type: ignore[arg-type]
        method = self.payment_method_repo.get_by_id(payment.payment_method_id)  # type: ignore[arg-type]

        return PaymentSchedule(
            receipt_number=receipt_number_for(payment),
            payment=payment,
            client_name=str(client.name) if client else "",
            service_name=str(service.name) if service else "",
            consultant_name=str(consultant.name) if consultant else "",
            payment_method_name=str(method.name) if method else "",
            installments=installments,
            amount_paid=amount_paid,
            amount_outstanding=total - amount_paid,
            is_settled=all(i.status == InstallmentStatus.PAID.value for i in installments),
        )
