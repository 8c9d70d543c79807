"""Settlement tracking for installments (pending -> paid)."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from caixa.core.errors import NotFoundError, PersistenceFailure
from caixa.models.installment import (
    Installment,
    InstallmentDisplayStatus,
    InstallmentStatus,
    derive_display_status,
)
from caixa.repositories.installment_repository import InstallmentRepository
from caixa.repositories.payment_repository import PaymentRepository

logger = logging.getLogger(__name__)


def is_overdue(installment: Installment, as_of: date | None = None) -> bool:
    """Whether a pending installment's due date has passed. Never stored."""
    return display_status(installment, as_of) == InstallmentDisplayStatus.OVERDUE


def display_status(
    installment: Installment, as_of: date | None = None
) -> InstallmentDisplayStatus:
    return derive_display_status(
        str(installment.status),
        installment.due_date,  # type: ignore[arg-type]
        as_of or date.today(),
    )


class SettlementService:
    """Service for settling installments.

    ``mark_paid`` is the normal-flow transition and is idempotent. Moving a
    paid installment back to pending is only possible through ``reopen``,
    an administrative override.
    """

    def __init__(self, db: Session):
        self.db = db
        self.installment_repo = InstallmentRepository(db)
        self.payment_repo = PaymentRepository(db)

    def _get(self, installment_id: UUID) -> Installment:
        installment = self.installment_repo.get_by_id(installment_id)
        if not installment:
            raise NotFoundError(f"Installment {installment_id} not found")
        return installment

    def _transition(
        self,
        installment_id: UUID,
        status: InstallmentStatus,
        paid_date: date | None,
        expected_status: InstallmentStatus,
    ) -> bool:
        try:
            return self.installment_repo.update_status(
                installment_id, status, paid_date, expected_status=expected_status
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceFailure(
                f"Could not update installment {installment_id}"
            ) from exc

    def get_installment(self, installment_id: UUID) -> Installment:
        return self._get(installment_id)

    def mark_paid(self, installment_id: UUID, paid_date: date | None = None) -> Installment:
        """Settle an installment.

        Calling this on an installment that is already paid changes nothing
        and returns it with its original ``paid_date``. The update only
        applies while the row is still pending, so concurrent calls converge
        on a single settlement.
        """
        installment = self._get(installment_id)
        if installment.status == InstallmentStatus.PAID.value:
            logger.info("Installment %s already paid on %s", installment_id, installment.paid_date)
            return installment

        settled_on = paid_date or date.today()
        changed = self._transition(
            installment_id,
            InstallmentStatus.PAID,
            settled_on,
            expected_status=InstallmentStatus.PENDING,
        )
        if changed:
            logger.info("Installment %s marked paid on %s", installment_id, settled_on)
        else:
            logger.info("Installment %s was settled concurrently", installment_id)
        return self._get(installment_id)

    def reopen(self, installment_id: UUID) -> Installment:
        """Administrative override: move a paid installment back to pending.

        Clears ``paid_date``. A pending installment is returned unchanged.
        """
        installment = self._get(installment_id)
        if installment.status == InstallmentStatus.PENDING.value:
            return installment

        previous_paid_date = installment.paid_date
        self._transition(
            installment_id,
            InstallmentStatus.PENDING,
            None,
            expected_status=InstallmentStatus.PAID,
        )
        logger.warning(
            "Installment %s reopened by administrative override (was paid on %s)",
            installment_id,
            previous_paid_date,
        )
        return self._get(installment_id)

    def is_payment_settled(self, payment_id: UUID) -> bool:
        """Whether every installment of a payment is paid."""
        if not self.payment_repo.get_by_id(payment_id):
            raise NotFoundError(f"Payment {payment_id} not found")
        return self.installment_repo.count_pending(payment_id) == 0

    def list_overdue(
        self, as_of: date | None = None, skip: int = 0, limit: int = 100
    ) -> list[Installment]:
        """Pending installments past their due date as of ``as_of`` (default today)."""
        return self.installment_repo.get_overdue(as_of or date.today(), skip=skip, limit=limit)
