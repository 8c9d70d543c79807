"""Commission API endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from caixa.core.database import get_db
from caixa.core.errors import NotFoundError, ValidationError
from caixa.models.commission import Commission
from caixa.schemas.commission import (
    CommissionAdjustmentCreate,
    CommissionDeriveRequest,
    CommissionExtractResponse,
    CommissionResponse,
)
from caixa.services.commission_service import CommissionService

router = APIRouter()


@router.post(
    "/derive",
    response_model=CommissionResponse,
    summary="Derive commission from a settled payment",
    responses={
        400: {"description": "Payment has pending installments"},
        404: {"description": "Payment or consultant not found"},
    },
)
async def derive_commission(
    data: CommissionDeriveRequest,
    db: Session = Depends(get_db),
) -> Commission:
    """Record the consultant commission for a payment whose installments are all paid.

    Calling it again for the same payment returns the existing entry.
    """
    service = CommissionService(db)
    try:
        return service.derive_for_payment(data.payment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


@router.post(
    "/adjustments",
    response_model=CommissionResponse,
    status_code=201,
    summary="Record a commission adjustment",
    responses={
        400: {"description": "Invalid adjustment"},
        404: {"description": "Consultant not found"},
    },
)
async def create_commission_adjustment(
    data: CommissionAdjustmentCreate,
    db: Session = Depends(get_db),
) -> Commission:
    service = CommissionService(db)
    try:
        return service.record_adjustment(
            consultant_id=data.consultant_id,
            transaction_type=data.transaction_type,
            amount=data.amount,
            operation_date=data.operation_date,
            description=data.description,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


@router.get(
    "/extract",
    response_model=CommissionExtractResponse,
    summary="Consultant commission extract",
    responses={
        400: {"description": "Invalid date range"},
        404: {"description": "Consultant not found"},
    },
)
async def get_commission_extract(
    consultant_id: UUID,
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: Session = Depends(get_db),
) -> CommissionExtractResponse:
    """Credits, debits and balance of a consultant's commissions over a date range."""
    service = CommissionService(db)
    try:
        extract = service.get_extract(consultant_id, start_date, end_date)
        return CommissionExtractResponse.model_validate(extract)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
