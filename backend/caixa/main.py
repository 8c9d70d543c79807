import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from caixa.core.config import settings
from caixa.routers import commissions, installments, payments, reports

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

OPENAPI_TAGS = [
    {
        "name": "Payments",
        "description": "Register cash register payments and their installment plans.",
    },
    {"name": "Installments", "description": "Settle installments and track overdue ones."},
    {"name": "Commissions", "description": "Derive and report consultant commissions."},
    {"name": "Reports", "description": "Daily cash register figures."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Cash register ledger API. Payments are split into monthly installments "
        "whose amounts always add up to the payment total."
    ),
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count"],
)

app.include_router(payments.router, prefix="/v1/payments", tags=["Payments"])
app.include_router(installments.router, prefix="/v1/installments", tags=["Installments"])
app.include_router(commissions.router, prefix="/v1/commissions", tags=["Commissions"])
app.include_router(reports.router, prefix="/v1/reports", tags=["Reports"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "status": "running",
    }
