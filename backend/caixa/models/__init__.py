from caixa.models.client import Client
from caixa.models.commission import Commission
from caixa.models.consultant import Consultant
from caixa.models.installment import (
    Installment,
    InstallmentDisplayStatus,
    InstallmentStatus,
    derive_display_status,
)
from caixa.models.payment import Payment, TransactionType
from caixa.models.payment_method import PaymentMethod
from caixa.models.service import Service

__all__ = [
    "Client",
    "Commission",
    "Consultant",
    "Installment",
    "InstallmentDisplayStatus",
    "InstallmentStatus",
    "Payment",
    "PaymentMethod",
    "Service",
    "TransactionType",
    "derive_display_status",
]
