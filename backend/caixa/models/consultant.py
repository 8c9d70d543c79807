"""Consultant directory entry, carrying the commission percentage."""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Numeric, String, func

from caixa.core.database import Base
from caixa.models.shared import UUIDType, generate_uuid


class Consultant(Base):
    __tablename__ = "consultants"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    commission_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(
            "commission_percentage >= 0 AND commission_percentage <= 100",
            name="ck_consultants_commission_percentage",
        ),
    )
