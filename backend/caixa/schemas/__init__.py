from caixa.schemas.commission import (
    CommissionAdjustmentCreate,
    CommissionDeriveRequest,
    CommissionExtractResponse,
    CommissionResponse,
)
from caixa.schemas.directory import (
    ClientCreate,
    ConsultantCreate,
    ConsultantSummary,
    PaymentMethodCreate,
    ServiceCreate,
)
from caixa.schemas.installment import InstallmentCreate, InstallmentResponse, MarkPaidRequest
from caixa.schemas.payment import (
    PaymentCreate,
    PaymentDetailResponse,
    PaymentResponse,
    PaymentScheduleResponse,
)
from caixa.schemas.report import CashReportLine, CashReportResponse, CollectedResponse

__all__ = [
    "CashReportLine",
    "CashReportResponse",
    "ClientCreate",
    "CollectedResponse",
    "CommissionAdjustmentCreate",
    "CommissionDeriveRequest",
    "CommissionExtractResponse",
    "CommissionResponse",
    "ConsultantCreate",
    "ConsultantSummary",
    "InstallmentCreate",
    "InstallmentResponse",
    "MarkPaidRequest",
    "PaymentCreate",
    "PaymentDetailResponse",
    "PaymentMethodCreate",
    "PaymentResponse",
    "PaymentScheduleResponse",
    "ServiceCreate",
]
