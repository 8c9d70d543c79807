"""Cash register report schemas."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class CashReportLine(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: date
    credits: Decimal
    debits: Decimal
    balance: Decimal
    payment_count: int


class CashReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    start_date: date
    end_date: date
    lines: list[CashReportLine]
    credits: Decimal
    debits: Decimal
    balance: Decimal


class CollectedResponse(BaseModel):
    """Installment money that actually changed hands on one day."""

    model_config = ConfigDict(from_attributes=True)

    day: date
    credits: Decimal
    debits: Decimal
    balance: Decimal
    installment_count: int
