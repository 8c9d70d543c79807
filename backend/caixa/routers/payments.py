"""Payment API endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from caixa.core.database import get_db
from caixa.core.errors import (
    ConsistencyViolation,
    NotFoundError,
    PersistenceFailure,
    ValidationError,
)
from caixa.models.installment import Installment
from caixa.models.payment import Payment, TransactionType
from caixa.schemas.installment import InstallmentResponse
from caixa.schemas.payment import (
    PaymentCreate,
    PaymentDetailResponse,
    PaymentResponse,
    PaymentScheduleResponse,
)
from caixa.services.payment_ledger_service import PaymentLedgerService

router = APIRouter()


@router.post(
    "/",
    response_model=PaymentDetailResponse,
    status_code=201,
    summary="Create payment",
    responses={
        400: {"description": "Invalid amount, installment count or directory reference"},
        422: {"description": "Validation error"},
        500: {"description": "Installment plan failed its consistency check"},
        503: {"description": "Payment could not be stored; safe to retry"},
    },
)
async def create_payment(
    data: PaymentCreate,
    db: Session = Depends(get_db),
) -> Payment:
    """Register a payment and split it into installments.

    The first installment is settled on the transaction date; the rest
    fall due monthly after it.
    """
    service = PaymentLedgerService(db)
    try:
        return service.create_payment(data)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    except ConsistencyViolation as e:
        raise HTTPException(status_code=500, detail=str(e)) from None
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e)) from None


@router.get(
    "/",
    response_model=list[PaymentResponse],
    summary="List payments",
)
async def list_payments(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    transaction_type: TransactionType | None = None,
    client_id: UUID | None = None,
    consultant_id: UUID | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[Payment]:
    """List payments with optional filters."""
    service = PaymentLedgerService(db)
    payments, total = service.list_payments(
        skip=skip,
        limit=limit,
        transaction_type=transaction_type,
        client_id=client_id,
        consultant_id=consultant_id,
        start_date=start_date,
        end_date=end_date,
        order_by=order_by,
    )
    response.headers["X-Total-Count"] = str(total)
    return payments


@router.get(
    "/{payment_id}",
    response_model=PaymentDetailResponse,
    summary="Get payment",
    responses={404: {"description": "Payment not found"}},
)
async def get_payment(
    payment_id: UUID,
    db: Session = Depends(get_db),
) -> Payment:
    """Get a payment with its installments."""
    service = PaymentLedgerService(db)
    try:
        return service.get_payment(payment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None


@router.get(
    "/{payment_id}/installments",
    response_model=list[InstallmentResponse],
    summary="List payment installments",
    responses={404: {"description": "Payment not found"}},
)
async def list_payment_installments(
    payment_id: UUID,
    db: Session = Depends(get_db),
) -> list[Installment]:
    """List a payment's installments in sequence order."""
    service = PaymentLedgerService(db)
    try:
        return service.list_installments(payment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None


@router.get(
    "/{payment_id}/schedule",
    response_model=PaymentScheduleResponse,
    summary="Get payment schedule for a receipt",
    responses={404: {"description": "Payment not found"}},
)
async def get_payment_schedule(
    payment_id: UUID,
    db: Session = Depends(get_db),
) -> PaymentScheduleResponse:
    """Installment schedule with paid and outstanding totals, as printed on receipts."""
    service = PaymentLedgerService(db)
    try:
        schedule = service.get_schedule(payment_id)
        return PaymentScheduleResponse.model_validate(schedule)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None


@router.delete(
    "/{payment_id}",
    status_code=204,
    summary="Delete payment",
    responses={
        404: {"description": "Payment not found"},
        503: {"description": "Payment could not be deleted; safe to retry"},
    },
)
async def delete_payment(
    payment_id: UUID,
    db: Session = Depends(get_db),
) -> None:
    """Delete a payment along with its installments and derived commission."""
    service = PaymentLedgerService(db)
    try:
        service.delete_payment(payment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e)) from None
