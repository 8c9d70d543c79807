"""Commission schemas."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from caixa.core.config import settings
from caixa.models.payment import TransactionType
from caixa.schemas.directory import ConsultantSummary


class CommissionDeriveRequest(BaseModel):
    payment_id: UUID


class CommissionAdjustmentCreate(BaseModel):
    """Manual credit/debit on a consultant's commission balance."""

    consultant_id: UUID
    transaction_type: TransactionType
    amount: Decimal = Field(..., gt=0, le=settings.MAX_TOTAL_AMOUNT, decimal_places=2)
    operation_date: date = Field(default_factory=date.today)
    description: str | None = Field(default=None, max_length=2000)


class CommissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    payment_id: UUID | None = None
    consultant_id: UUID
    transaction_type: str
    base_amount: Decimal
    percentage: Decimal
    amount: Decimal
    operation_date: date
    description: str | None = None
    created_at: datetime | None = None


class CommissionExtractResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    consultant: ConsultantSummary
    start_date: date
    end_date: date
    entries: list[CommissionResponse]
    credits: Decimal
    debits: Decimal
    balance: Decimal
