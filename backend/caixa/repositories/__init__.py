from caixa.repositories.client_repository import ClientRepository
from caixa.repositories.commission_repository import CommissionRepository
from caixa.repositories.consultant_repository import ConsultantRepository
from caixa.repositories.installment_repository import InstallmentRepository
from caixa.repositories.payment_method_repository import PaymentMethodRepository
from caixa.repositories.payment_repository import PaymentRepository
from caixa.repositories.service_repository import ServiceRepository

__all__ = [
    "ClientRepository",
    "CommissionRepository",
    "ConsultantRepository",
    "InstallmentRepository",
    "PaymentMethodRepository",
    "PaymentRepository",
    "ServiceRepository",
]
