"""Installment settlement API endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from caixa.core.database import get_db
from caixa.core.errors import NotFoundError, PersistenceFailure
from caixa.models.installment import Installment
from caixa.schemas.installment import InstallmentResponse, MarkPaidRequest
from caixa.services.settlement_service import SettlementService

router = APIRouter()


@router.get(
    "/overdue",
    response_model=list[InstallmentResponse],
    summary="List overdue installments",
)
async def list_overdue_installments(
    as_of: date | None = None,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    db: Session = Depends(get_db),
) -> list[Installment]:
    """Pending installments whose due date is before ``as_of`` (default today)."""
    service = SettlementService(db)
    return service.list_overdue(as_of, skip=skip, limit=limit)


@router.get(
    "/{installment_id}",
    response_model=InstallmentResponse,
    summary="Get installment",
    responses={404: {"description": "Installment not found"}},
)
async def get_installment(
    installment_id: UUID,
    db: Session = Depends(get_db),
) -> Installment:
    service = SettlementService(db)
    try:
        return service.get_installment(installment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None


@router.post(
    "/{installment_id}/mark_paid",
    response_model=InstallmentResponse,
    summary="Mark installment as paid",
    responses={
        404: {"description": "Installment not found"},
        503: {"description": "Installment could not be updated; safe to retry"},
    },
)
async def mark_installment_paid(
    installment_id: UUID,
    data: MarkPaidRequest | None = None,
    db: Session = Depends(get_db),
) -> Installment:
    """Settle an installment. Repeating the call on a paid installment is a no-op."""
    service = SettlementService(db)
    try:
        return service.mark_paid(installment_id, paid_date=data.paid_date if data else None)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e)) from None


@router.post(
    "/{installment_id}/reopen",
    response_model=InstallmentResponse,
    summary="Reopen a paid installment (administrative)",
    responses={
        404: {"description": "Installment not found"},
        503: {"description": "Installment could not be updated; safe to retry"},
    },
)
async def reopen_installment(
    installment_id: UUID,
    db: Session = Depends(get_db),
) -> Installment:
    """Administrative override that moves a paid installment back to pending."""
    service = SettlementService(db)
    try:
        return service.reopen(installment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e)) from None
