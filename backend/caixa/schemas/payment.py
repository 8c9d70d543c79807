"""Payment schemas."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from caixa.models.payment import TransactionType
from caixa.schemas.installment import InstallmentResponse


class PaymentCreate(BaseModel):
    """Schema for creating a payment.

    Amount and installment rules are checked by the ledger service, not here,
    so that every entry point gets the same validation errors.
    """

    client_id: UUID | None = None
    consultant_id: UUID | None = None
    service_id: UUID | None = None
    payment_method_id: UUID | None = None
    transaction_type: TransactionType = TransactionType.CREDIT
    total_amount: Decimal
    installment_count: int = 1
    transaction_date: date = Field(default_factory=date.today)
    notes: str | None = Field(default=None, max_length=2000)


class PaymentResponse(BaseModel):
    """Schema for payment response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    client_id: UUID
    consultant_id: UUID
    service_id: UUID
    payment_method_id: UUID
    transaction_type: str
    total_amount: Decimal
    installment_count: int
    transaction_date: date
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PaymentDetailResponse(PaymentResponse):
    """Payment with its installment plan."""

    installments: list[InstallmentResponse] = Field(default_factory=list)


class PaymentScheduleResponse(BaseModel):
    """Read model consumed by the receipt generator."""

    model_config = ConfigDict(from_attributes=True)

    receipt_number: str
    payment: PaymentResponse
    client_name: str
    service_name: str
    consultant_name: str
    payment_method_name: str
    installments: list[InstallmentResponse]
    amount_paid: Decimal
    amount_outstanding: Decimal
    is_settled: bool
