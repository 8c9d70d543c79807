"""Tests for PaymentLedgerService: atomic creation of payments and installments."""

from datetime import date
from decimal import Decimal
from unittest.mock import patch
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from caixa.core.errors import (
    ConsistencyViolation,
    NotFoundError,
    PersistenceFailure,
    ValidationError,
)
from caixa.models.commission import Commission
from caixa.models.installment import Installment, InstallmentStatus
from caixa.models.payment import Payment, TransactionType
from caixa.repositories.client_repository import ClientRepository
from caixa.repositories.consultant_repository import ConsultantRepository
from caixa.repositories.installment_repository import InstallmentRepository
from caixa.schemas.directory import ClientCreate
from caixa.schemas.installment import InstallmentCreate
from caixa.services.commission_service import CommissionService
from caixa.services.payment_ledger_service import PaymentLedgerService, receipt_number_for
from caixa.services.settlement_service import SettlementService


@pytest.fixture
def ledger(db_session):
    """Create a PaymentLedgerService instance."""
    return PaymentLedgerService(db_session)


def _row_counts(db_session) -> tuple[int, int]:
    db_session.expire_all()
    return db_session.query(Payment).count(), db_session.query(Installment).count()


class TestCreatePayment:
    """Tests for PaymentLedgerService.create_payment()."""

    def test_three_installments(self, ledger, payment_data):
        """100.00 in 3 from 2024-01-15: first settled, the rest monthly and pending."""
        payment = ledger.create_payment(payment_data("100.00", 3, date(2024, 1, 15)))

        assert payment.id is not None
        assert payment.total_amount == Decimal("100.00")
        assert payment.installment_count == 3
        assert payment.transaction_type == TransactionType.CREDIT.value

        installments = payment.installments
        assert [i.sequence_number for i in installments] == [1, 2, 3]
        assert [i.amount for i in installments] == [
            Decimal("33.34"),
            Decimal("33.33"),
            Decimal("33.33"),
        ]
        assert [i.due_date for i in installments] == [
            date(2024, 1, 15),
            date(2024, 2, 15),
            date(2024, 3, 15),
        ]
        assert [i.status for i in installments] == ["paid", "pending", "pending"]
        assert installments[0].paid_date == date(2024, 1, 15)
        assert installments[1].paid_date is None
        assert installments[2].paid_date is None
        assert sum((i.amount for i in installments), Decimal("0")) == Decimal("100.00")

    def test_single_installment_is_settled(self, ledger, payment_data):
        payment = ledger.create_payment(payment_data("50.00", 1, date(2024, 3, 10)))

        assert len(payment.installments) == 1
        only = payment.installments[0]
        assert only.amount == Decimal("50.00")
        assert only.status == InstallmentStatus.PAID.value
        assert only.paid_date == date(2024, 3, 10)
        assert only.due_date == date(2024, 3, 10)

    @pytest.mark.parametrize("count", [1, 2, 5, 12, 24])
    def test_sequence_numbers_are_contiguous(self, ledger, payment_data, count):
        payment = ledger.create_payment(payment_data("1000.00", count))
        stored = InstallmentRepository(ledger.db).list_by_payment(payment.id)
        assert [i.sequence_number for i in stored] == list(range(1, count + 1))
        assert all(i.version == 1 for i in stored)

    def test_debit_payment(self, ledger, payment_data):
        payment = ledger.create_payment(
            payment_data("75.50", 2, transaction_type=TransactionType.DEBIT)
        )
        assert payment.transaction_type == TransactionType.DEBIT.value
        assert [i.amount for i in payment.installments] == [Decimal("37.75"), Decimal("37.75")]

    def test_notes_are_stored(self, ledger, payment_data):
        payment = ledger.create_payment(payment_data(notes="Paid at the front desk"))
        assert payment.notes == "Paid at the front desk"

    def test_negative_total_rejected_without_writes(self, ledger, payment_data, db_session):
        with pytest.raises(ValidationError):
            ledger.create_payment(payment_data("-10", 2))
        assert _row_counts(db_session) == (0, 0)

    def test_zero_total_rejected(self, ledger, payment_data, db_session):
        with pytest.raises(ValidationError, match="positive"):
            ledger.create_payment(payment_data("0.00", 1))
        assert _row_counts(db_session) == (0, 0)

    def test_zero_count_rejected(self, ledger, payment_data, db_session):
        with pytest.raises(ValidationError, match="at least 1"):
            ledger.create_payment(payment_data("100.00", 0))
        assert _row_counts(db_session) == (0, 0)

    def test_sub_cent_total_rejected(self, ledger, payment_data):
        with pytest.raises(ValidationError, match="2 decimal places"):
            ledger.create_payment(payment_data("10.001", 1))

    def test_missing_reference_rejected(self, ledger, payment_data, db_session):
        with pytest.raises(ValidationError, match="Client is required"):
            ledger.create_payment(payment_data(client_id=None))
        assert _row_counts(db_session) == (0, 0)

    def test_unknown_reference_rejected(self, ledger, payment_data):
        with pytest.raises(ValidationError, match="Service .* not found"):
            ledger.create_payment(payment_data(service_id=uuid4()))

    def test_inactive_client_rejected(self, ledger, payment_data, db_session):
        inactive = ClientRepository(db_session).create(
            ClientCreate(name="Former Client", active=False)
        )
        with pytest.raises(ValidationError, match="inactive"):
            ledger.create_payment(payment_data(client_id=inactive.id))
        assert _row_counts(db_session) == (0, 0)

    def test_inactive_consultant_rejected(self, ledger, payment_data, consultant, db_session):
        ConsultantRepository(db_session).deactivate(consultant.id)
        with pytest.raises(ValidationError, match="Consultant .* inactive"):
            ledger.create_payment(payment_data())

    def test_method_without_installments_rejects_split(
        self, ledger, payment_data, cash_method, db_session
    ):
        with pytest.raises(ValidationError, match="does not allow installments"):
            ledger.create_payment(payment_data("100.00", 3, payment_method_id=cash_method.id))
        assert _row_counts(db_session) == (0, 0)

    def test_method_without_installments_accepts_single(self, ledger, payment_data, cash_method):
        payment = ledger.create_payment(
            payment_data("100.00", 1, payment_method_id=cash_method.id)
        )
        assert payment.payment_method_id == cash_method.id

    def test_installment_failure_rolls_back_payment(self, ledger, payment_data, db_session):
        """A failure after the payment row is flushed leaves nothing behind."""
        with (
            patch.object(
                InstallmentRepository,
                "create_all",
                side_effect=OperationalError("INSERT", {}, Exception("disk I/O error")),
            ),
            pytest.raises(PersistenceFailure),
        ):
            ledger.create_payment(payment_data("100.00", 3))

        assert _row_counts(db_session) == (0, 0)

    def test_service_usable_after_rollback(self, ledger, payment_data):
        with (
            patch.object(
                InstallmentRepository,
                "create_all",
                side_effect=OperationalError("INSERT", {}, Exception("locked")),
            ),
            pytest.raises(PersistenceFailure),
        ):
            ledger.create_payment(payment_data("100.00", 3))

        payment = ledger.create_payment(payment_data("100.00", 3))
        assert len(payment.installments) == 3

    def test_partial_installment_write_rolls_back(self, ledger, payment_data, db_session):
        """Storing fewer installments than planned fails the persisted check."""
        original = InstallmentRepository.create_all

        def drop_last(self, payment_id, installments, settled_on=None):
            return original(self, payment_id, installments[:-1], settled_on)

        with (
            patch.object(InstallmentRepository, "create_all", drop_last),
            pytest.raises(ConsistencyViolation, match="stored 2 installments"),
        ):
            ledger.create_payment(payment_data("100.00", 3))

        assert _row_counts(db_session) == (0, 0)

    def test_plan_not_adding_up_is_rejected(self, ledger, payment_data, db_session):
        bad_plan = [
            InstallmentCreate(
                sequence_number=n, amount=Decimal("33.33"), due_date=date(2024, n, 15)
            )
            for n in (1, 2, 3)
        ]
        with (
            patch(
                "caixa.services.payment_ledger_service.build_installment_plan",
                return_value=bad_plan,
            ),
            pytest.raises(ConsistencyViolation, match="sums to 99.99"),
        ):
            ledger.create_payment(payment_data("100.00", 3))

        assert _row_counts(db_session) == (0, 0)


class TestReadPayments:
    def test_get_payment(self, ledger, payment_data):
        created = ledger.create_payment(payment_data("100.00", 2))
        payment = ledger.get_payment(created.id)
        assert payment.id == created.id
        assert len(payment.installments) == 2

    def test_get_payment_not_found(self, ledger):
        with pytest.raises(NotFoundError):
            ledger.get_payment(uuid4())

    def test_list_installments(self, ledger, payment_data):
        created = ledger.create_payment(payment_data("100.00", 4))
        installments = ledger.list_installments(created.id)
        assert [i.sequence_number for i in installments] == [1, 2, 3, 4]

    def test_list_installments_unknown_payment(self, ledger):
        with pytest.raises(NotFoundError):
            ledger.list_installments(uuid4())

    def test_list_payments_filters_and_counts(self, ledger, payment_data):
        ledger.create_payment(payment_data("10.00", transaction_date=date(2024, 1, 1)))
        ledger.create_payment(payment_data("20.00", transaction_date=date(2024, 1, 5)))
        ledger.create_payment(
            payment_data(
                "30.00",
                transaction_date=date(2024, 2, 1),
                transaction_type=TransactionType.DEBIT,
            )
        )

        payments, total = ledger.list_payments()
        assert total == 3
        assert [p.transaction_date for p in payments] == [
            date(2024, 2, 1),
            date(2024, 1, 5),
            date(2024, 1, 1),
        ]

        credits, total = ledger.list_payments(transaction_type=TransactionType.CREDIT)
        assert total == 2
        assert {p.total_amount for p in credits} == {Decimal("10.00"), Decimal("20.00")}

        january, total = ledger.list_payments(
            start_date=date(2024, 1, 1), end_date=date(2024, 1, 31)
        )
        assert total == 2
        assert len(january) == 2

    def test_list_payments_pagination(self, ledger, payment_data):
        for day in range(1, 6):
            ledger.create_payment(payment_data("10.00", transaction_date=date(2024, 1, day)))
        page, total = ledger.list_payments(skip=1, limit=2, order_by="transaction_date:asc")
        assert total == 5
        assert [p.transaction_date for p in page] == [date(2024, 1, 2), date(2024, 1, 3)]


class TestDeletePayment:
    def test_delete_removes_installments_and_commission(
        self, ledger, payment_data, db_session
    ):
        payment = ledger.create_payment(payment_data("100.00", 1))
        CommissionService(db_session).derive_for_payment(payment.id)

        ledger.delete_payment(payment.id)

        db_session.expire_all()
        assert db_session.query(Payment).count() == 0
        assert db_session.query(Installment).count() == 0
        assert db_session.query(Commission).count() == 0

    def test_delete_not_found(self, ledger):
        with pytest.raises(NotFoundError):
            ledger.delete_payment(uuid4())


class TestGetSchedule:
    def test_schedule_totals(self, ledger, payment_data, client_record, service, consultant):
        payment = ledger.create_payment(payment_data("100.00", 3))

        schedule = ledger.get_schedule(payment.id)

        assert schedule.receipt_number.startswith("REC-")
        assert schedule.payment.id == payment.id
        assert schedule.client_name == client_record.name
        assert schedule.service_name == service.name
        assert schedule.consultant_name == consultant.name
        assert schedule.payment_method_name == "Credit card"
        assert len(schedule.installments) == 3
        assert schedule.amount_paid == Decimal("33.34")
        assert schedule.amount_outstanding == Decimal("66.66")
        assert schedule.is_settled is False

    def test_schedule_settled_after_all_paid(self, ledger, payment_data, db_session):
        payment = ledger.create_payment(payment_data("100.00", 3))
        settlement = SettlementService(db_session)
        for installment in ledger.list_installments(payment.id):
            settlement.mark_paid(installment.id, date(2024, 4, 1))

        schedule = ledger.get_schedule(payment.id)
        assert schedule.is_settled is True
        assert schedule.amount_paid == Decimal("100.00")
        assert schedule.amount_outstanding == Decimal("0.00")

    def test_schedule_not_found(self, ledger):
        with pytest.raises(NotFoundError):
            ledger.get_schedule(uuid4())


class TestReceiptNumber:
    def test_uses_creation_time_in_millis(self, ledger, payment_data):
        payment = ledger.create_payment(payment_data())
        expected = f"REC-{int(payment.created_at.timestamp() * 1000)}"
        assert receipt_number_for(payment) == expected

    def test_falls_back_to_id_before_flush(self):
        payment = Payment(id=uuid4())
        assert receipt_number_for(payment) == f"REC-{payment.id.hex[:12].upper()}"
