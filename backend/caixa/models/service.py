"""Service catalog entry (what is being sold at the counter)."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Numeric, String, func

from caixa.core.database import Base
from caixa.models.shared import UUIDType, generate_uuid


class Service(Base):
    __tablename__ = "services"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    consultant_id = Column(
        UUIDType, ForeignKey("consultants.id", ondelete="SET NULL"), nullable=True, index=True
    )
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
