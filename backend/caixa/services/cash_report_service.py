"""Cash register reports built from the payment ledger."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from caixa.core.errors import ValidationError
from caixa.models.payment import TransactionType
from caixa.repositories.installment_repository import InstallmentRepository
from caixa.repositories.payment_repository import PaymentRepository

CENT = Decimal("0.01")


@dataclass
class CashReportLine:
    day: date
    credits: Decimal
    debits: Decimal
    balance: Decimal
    payment_count: int


@dataclass
class CashReport:
    start_date: date
    end_date: date
    lines: list[CashReportLine] = field(default_factory=list)
    credits: Decimal = Decimal("0.00")
    debits: Decimal = Decimal("0.00")
    balance: Decimal = Decimal("0.00")


@dataclass
class CollectedSummary:
    day: date
    credits: Decimal
    debits: Decimal
    balance: Decimal
    installment_count: int


class CashReportService:
    """Daily credit/debit/balance figures for the cash register."""

    def __init__(self, db: Session):
        self.db = db
        self.payment_repo = PaymentRepository(db)
        self.installment_repo = InstallmentRepository(db)

    def daily_report(self, start_date: date, end_date: date) -> CashReport:
        """Payments booked per day between two dates (inclusive), by direction.

        Uses each payment's full ``total_amount`` on its transaction date,
        regardless of how it is split into installments.
        """
        if start_date > end_date:
            raise ValidationError("start_date must not be after end_date")

        report = CashReport(start_date=start_date, end_date=end_date)
        for row in self.payment_repo.daily_totals(start_date, end_date):
            credits = Decimal(row["credits"]).quantize(CENT)  # type: ignore[arg-type]
            debits = Decimal(row["debits"]).quantize(CENT)  # type: ignore[arg-type]
            report.lines.append(
                CashReportLine(
                    day=row["date"],  # type: ignore[arg-type]
                    credits=credits,
                    debits=debits,
                    balance=credits - debits,
                    payment_count=int(row["count"]),  # type: ignore[arg-type]
                )
            )
            report.credits += credits
            report.debits += debits

        report.balance = report.credits - report.debits
        return report

    def collected_on(self, day: date) -> CollectedSummary:
        """Installments actually settled on ``day``, by direction."""
        credits = Decimal("0.00")
        debits = Decimal("0.00")
        count = 0
        for transaction_type, total, n in self.installment_repo.sum_collected_on(day):
            if transaction_type == TransactionType.CREDIT.value:
                credits += total.quantize(CENT)
            else:
                debits += total.quantize(CENT)
            count += n
        return CollectedSummary(
            day=day,
            credits=credits,
            debits=debits,
            balance=credits - debits,
            installment_count=count,
        )
