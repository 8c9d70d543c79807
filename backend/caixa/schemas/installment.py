"""Installment schemas."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, computed_field

from caixa.models.installment import InstallmentDisplayStatus, derive_display_status


class InstallmentResponse(BaseModel):
    """Schema for installment response.

    ``display_status`` is computed against today's date on every read.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    payment_id: UUID
    sequence_number: int
    amount: Decimal
    due_date: date
    paid_date: date | None = None
    status: str
    version: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_status(self) -> InstallmentDisplayStatus:
        return derive_display_status(self.status, self.due_date, date.today())


class MarkPaidRequest(BaseModel):
    """Schema for settling an installment. Defaults to today."""

    paid_date: date | None = None


class InstallmentCreate(BaseModel):
    """One planned installment, as produced by the installment planner."""

    sequence_number: int
    amount: Decimal
    due_date: date
