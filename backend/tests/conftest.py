"""Shared test fixtures for all test modules."""

import contextlib
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from caixa.core import database as db_module
from caixa.core.database import Base, get_db
from caixa.models.payment import TransactionType
from caixa.repositories.client_repository import ClientRepository
from caixa.repositories.consultant_repository import ConsultantRepository
from caixa.repositories.payment_method_repository import PaymentMethodRepository
from caixa.repositories.service_repository import ServiceRepository
from caixa.schemas.directory import (
    ClientCreate,
    ConsultantCreate,
    PaymentMethodCreate,
    ServiceCreate,
)
from caixa.schemas.payment import PaymentCreate

# In-memory SQLite engine with StaticPool so all connections share the
# same database state and there are no file-locking issues.
_test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and truncate all data after.

    Patches the module-level engine and SessionLocal so all application code
    uses the in-memory test database.
    """
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)

    yield
    with _test_engine.connect() as conn:
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            with contextlib.suppress(OperationalError):
                conn.execute(table.delete())
        conn.commit()
        # The pragma is ignored inside a transaction, so restore it after commit.
        conn.execute(text("PRAGMA foreign_keys = ON"))
        conn.commit()

    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture
def db_session():
    """Create a database session for direct repository testing."""
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


@pytest.fixture
def client_record(db_session):
    """Create a paying client."""
    return ClientRepository(db_session).create(
        ClientCreate(name="Maria Souza", document="12345678900", email="maria@test.com")
    )


@pytest.fixture
def consultant(db_session):
    """Create a consultant earning 10% commission."""
    return ConsultantRepository(db_session).create(
        ConsultantCreate(name="Ana Lima", commission_percentage=Decimal("10"))
    )


@pytest.fixture
def service(db_session, consultant):
    """Create a service sold by the consultant."""
    return ServiceRepository(db_session).create(
        ServiceCreate(name="Tarot Reading", price=Decimal("100.00"), consultant_id=consultant.id)
    )


@pytest.fixture
def card_method(db_session):
    """Create a payment method that allows installments."""
    return PaymentMethodRepository(db_session).create(
        PaymentMethodCreate(name="Credit card", position=1, allows_installments=True)
    )


@pytest.fixture
def cash_method(db_session):
    """Create a payment method limited to a single installment."""
    return PaymentMethodRepository(db_session).create(
        PaymentMethodCreate(name="Cash", position=0, allows_installments=False)
    )


@pytest.fixture
def payment_data(client_record, consultant, service, card_method):
    """Build PaymentCreate payloads against the directory fixtures."""

    def _build(
        total: str = "100.00",
        count: int = 1,
        transaction_date: date = date(2024, 1, 15),
        transaction_type: TransactionType = TransactionType.CREDIT,
        **overrides,
    ) -> PaymentCreate:
        fields = {
            "client_id": client_record.id,
            "consultant_id": consultant.id,
            "service_id": service.id,
            "payment_method_id": card_method.id,
            "transaction_type": transaction_type,
            "total_amount": Decimal(total),
            "installment_count": count,
            "transaction_date": transaction_date,
        }
        fields.update(overrides)
        return PaymentCreate(**fields)

    return _build
