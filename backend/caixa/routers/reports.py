"""Cash register report endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from caixa.core.database import get_db
from caixa.core.errors import ValidationError
from caixa.schemas.report import CashReportResponse, CollectedResponse
from caixa.services.cash_report_service import CashReportService

router = APIRouter()


@router.get(
    "/cash",
    response_model=CashReportResponse,
    summary="Daily cash report",
    responses={400: {"description": "Invalid date range"}},
)
async def get_cash_report(
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: Session = Depends(get_db),
) -> CashReportResponse:
    """Credits, debits and balance per transaction date."""
    service = CashReportService(db)
    try:
        report = service.daily_report(start_date, end_date)
        return CashReportResponse.model_validate(report)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


@router.get(
    "/collected",
    response_model=CollectedResponse,
    summary="Installments collected on a day",
)
async def get_collected(
    day: date | None = None,
    db: Session = Depends(get_db),
) -> CollectedResponse:
    """Totals of installments settled on ``day`` (default today)."""
    service = CashReportService(db)
    return CollectedResponse.model_validate(service.collected_on(day or date.today()))
