"""Schemas for the directory records the ledger looks up."""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ClientCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    document: str | None = Field(default=None, max_length=20)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=30)
    active: bool = True


class ConsultantCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    commission_percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    active: bool = True


class ServiceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(default=Decimal("0"), ge=0)
    consultant_id: UUID | None = None
    active: bool = True


class PaymentMethodCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    position: int = Field(default=0, ge=0)
    allows_installments: bool = False
    active: bool = True


class ConsultantSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    commission_percentage: Decimal
