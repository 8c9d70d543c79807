"""Installment planning: amount splitting and due-date scheduling.

Both functions are pure; the ledger service combines them through
``build_installment_plan``.
"""

import calendar as cal
from datetime import date
from decimal import ROUND_DOWN, Decimal

from caixa.core.config import settings
from caixa.core.errors import ValidationError
from caixa.schemas.installment import InstallmentCreate

CENT = Decimal("0.01")


def _validate_count(count: int) -> None:
    if isinstance(count, bool) or not isinstance(count, int):
        raise ValidationError("Installment count must be an integer")
    if count < 1:
        raise ValidationError("Installment count must be at least 1")
    if count > settings.MAX_INSTALLMENTS:
        raise ValidationError(
            f"Installment count cannot exceed {settings.MAX_INSTALLMENTS}"
        )


def _add_months(d: date, months: int) -> date:
    """Add months to a date, clamping to last day of month."""
    month = d.month - 1 + months
    year = d.year + month // 12
    month = month % 12 + 1
    max_day = cal.monthrange(year, month)[1]
    return d.replace(year=year, month=month, day=min(d.day, max_day))


def split_amount(total: Decimal, count: int) -> list[Decimal]:
    """Split ``total`` into ``count`` installment amounts that add up exactly.

    Every installment gets ``total / count`` rounded down to the cent; the
    first one also takes the rounding remainder, so 100.00 in 3 becomes
    [33.34, 33.33, 33.33].
    """
    _validate_count(count)
    if not isinstance(total, Decimal):
        raise ValidationError("Total amount must be a Decimal")
    if not total.is_finite():
        raise ValidationError("Total amount must be a finite number")
    if total <= 0:
        raise ValidationError("Total amount must be positive")
    if total > settings.MAX_TOTAL_AMOUNT:
        raise ValidationError(
            f"Total amount cannot exceed {settings.MAX_TOTAL_AMOUNT}"
        )
    if total != total.quantize(CENT):
        raise ValidationError("Total amount cannot have more than 2 decimal places")

    base = (total / count).quantize(CENT, rounding=ROUND_DOWN)
    if base <= 0:
        raise ValidationError(
            f"Total amount {total} is too small to split into {count} installments"
        )

    first = total - base * (count - 1)
    return [first] + [base] * (count - 1)


def schedule_due_dates(start: date, count: int) -> list[date]:
    """Due date for each installment: ``start`` plus 0, 1, ... calendar months.

    Each date is offset from ``start`` itself, so a plan starting on the
    31st returns to the 31st in months that have one.
    """
    _validate_count(count)
    return [_add_months(start, offset) for offset in range(count)]


def build_installment_plan(total: Decimal, count: int, start: date) -> list[InstallmentCreate]:
    """Combine split amounts and due dates into numbered installments (1..count)."""
    amounts = split_amount(total, count)
    due_dates = schedule_due_dates(start, count)
    return [
        InstallmentCreate(sequence_number=number, amount=amount, due_date=due_date)
        for number, (amount, due_date) in enumerate(zip(amounts, due_dates, strict=True), start=1)
    ]
