"""Tests for installment amount splitting and due-date scheduling."""

from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest

from caixa.core.errors import ValidationError
from caixa.services.installment_plan import (
    _add_months,
    build_installment_plan,
    schedule_due_dates,
    split_amount,
)


class TestSplitAmount:
    def test_even_split(self):
        assert split_amount(Decimal("90.00"), 3) == [
            Decimal("30.00"),
            Decimal("30.00"),
            Decimal("30.00"),
        ]

    def test_first_installment_absorbs_remainder(self):
        assert split_amount(Decimal("100.00"), 3) == [
            Decimal("33.34"),
            Decimal("33.33"),
            Decimal("33.33"),
        ]

    def test_single_installment_is_the_total(self):
        assert split_amount(Decimal("50.00"), 1) == [Decimal("50.00")]

    def test_smallest_splittable_amount(self):
        assert split_amount(Decimal("0.03"), 3) == [
            Decimal("0.01"),
            Decimal("0.01"),
            Decimal("0.01"),
        ]

    def test_remainder_of_several_cents(self):
        amounts = split_amount(Decimal("10.00"), 7)
        assert amounts[0] == Decimal("1.48")
        assert amounts[1:] == [Decimal("1.42")] * 6

    @pytest.mark.parametrize(
        "total",
        ["0.01", "1.00", "99.99", "100.00", "1234.56", "999999.99", "1000000.00"],
    )
    @pytest.mark.parametrize("count", [1, 2, 3, 7, 12, 13, 360])
    def test_sum_always_equals_total(self, total, count):
        """Amounts add up exactly for every total and count."""
        total = Decimal(total)
        if total < Decimal("0.01") * count:
            with pytest.raises(ValidationError):
                split_amount(total, count)
            return
        amounts = split_amount(total, count)
        assert len(amounts) == count
        assert sum(amounts, Decimal("0")) == total
        assert all(a > 0 for a in amounts)
        assert all(a == a.quantize(Decimal("0.01")) for a in amounts)

    def test_amounts_differ_by_less_than_count_cents(self):
        amounts = split_amount(Decimal("1000.00"), 360)
        assert amounts[0] - amounts[-1] < Decimal("0.01") * 360

    @pytest.mark.parametrize("total", ["0", "0.00", "-10", "-0.01"])
    def test_rejects_non_positive_total(self, total):
        with pytest.raises(ValidationError, match="positive"):
            split_amount(Decimal(total), 2)

    def test_rejects_sub_cent_total(self):
        with pytest.raises(ValidationError, match="2 decimal places"):
            split_amount(Decimal("10.005"), 2)

    def test_rejects_non_finite_total(self):
        with pytest.raises(ValidationError, match="finite"):
            split_amount(Decimal("Infinity"), 2)
        with pytest.raises(ValidationError, match="finite"):
            split_amount(Decimal("NaN"), 2)

    @pytest.mark.parametrize("total", ["1e30", "123456789012345.00", "10000000000.00"])
    def test_rejects_total_wider_than_a_money_column(self, total):
        with pytest.raises(ValidationError, match="cannot exceed 9999999999.99"):
            split_amount(Decimal(total), 2)

    def test_largest_storable_total_splits(self):
        amounts = split_amount(Decimal("9999999999.99"), 3)
        assert sum(amounts) == Decimal("9999999999.99")
        assert amounts == [Decimal("3333333333.33")] * 3

    def test_rejects_float_total(self):
        with pytest.raises(ValidationError, match="Decimal"):
            split_amount(100.0, 2)  # type: ignore[arg-type]

    def test_rejects_total_too_small_for_count(self):
        with pytest.raises(ValidationError, match="too small"):
            split_amount(Decimal("0.02"), 3)

    @pytest.mark.parametrize("count", [0, -1])
    def test_rejects_count_below_one(self, count):
        with pytest.raises(ValidationError, match="at least 1"):
            split_amount(Decimal("100.00"), count)

    def test_rejects_non_integer_count(self):
        with pytest.raises(ValidationError, match="integer"):
            split_amount(Decimal("100.00"), 2.5)  # type: ignore[arg-type]
        with pytest.raises(ValidationError, match="integer"):
            split_amount(Decimal("100.00"), True)  # type: ignore[arg-type]

    def test_rejects_count_above_maximum(self):
        with pytest.raises(ValidationError, match="cannot exceed 360"):
            split_amount(Decimal("1000.00"), 361)

    def test_maximum_follows_settings(self):
        with patch("caixa.services.installment_plan.settings") as mock_settings:
            mock_settings.MAX_INSTALLMENTS = 12
            with pytest.raises(ValidationError, match="cannot exceed 12"):
                split_amount(Decimal("100.00"), 13)


class TestAddMonths:
    def test_same_day_next_month(self):
        assert _add_months(date(2024, 1, 15), 1) == date(2024, 2, 15)

    def test_clamps_to_end_of_short_month(self):
        assert _add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert _add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_crosses_year_boundary(self):
        assert _add_months(date(2024, 11, 30), 3) == date(2025, 2, 28)

    def test_zero_months(self):
        assert _add_months(date(2024, 5, 31), 0) == date(2024, 5, 31)


class TestScheduleDueDates:
    def test_monthly_from_start(self):
        assert schedule_due_dates(date(2024, 1, 15), 3) == [
            date(2024, 1, 15),
            date(2024, 2, 15),
            date(2024, 3, 15),
        ]

    def test_end_of_month_start_returns_to_31st(self):
        """Each date is offset from the start, so clamping does not accumulate."""
        assert schedule_due_dates(date(2024, 1, 31), 4) == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
            date(2024, 4, 30),
        ]

    def test_single_installment_due_on_start(self):
        assert schedule_due_dates(date(2024, 6, 1), 1) == [date(2024, 6, 1)]

    @pytest.mark.parametrize("start", [date(2024, 1, 31), date(2023, 8, 29), date(2024, 12, 15)])
    def test_dates_never_decrease(self, start):
        dates = schedule_due_dates(start, 360)
        assert len(dates) == 360
        assert all(a <= b for a, b in zip(dates, dates[1:], strict=False))

    def test_rejects_invalid_count(self):
        with pytest.raises(ValidationError):
            schedule_due_dates(date(2024, 1, 1), 0)


class TestBuildInstallmentPlan:
    def test_numbered_plan(self):
        plan = build_installment_plan(Decimal("100.00"), 3, date(2024, 1, 15))
        assert [p.sequence_number for p in plan] == [1, 2, 3]
        assert [p.amount for p in plan] == [
            Decimal("33.34"),
            Decimal("33.33"),
            Decimal("33.33"),
        ]
        assert [p.due_date for p in plan] == [
            date(2024, 1, 15),
            date(2024, 2, 15),
            date(2024, 3, 15),
        ]

    def test_invalid_total_rejected(self):
        with pytest.raises(ValidationError):
            build_installment_plan(Decimal("-10"), 2, date(2024, 1, 15))
