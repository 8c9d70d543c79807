"""Client directory entry, read by the ledger for existence checks."""

from sqlalchemy import Boolean, Column, DateTime, String, func

from caixa.core.database import Base
from caixa.models.shared import UUIDType, generate_uuid


class Client(Base):
    __tablename__ = "clients"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    document = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(30), nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
