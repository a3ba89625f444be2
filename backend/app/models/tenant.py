from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, Boolean, JSON, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum

from app.core.database import Base

class TenantStatus(str, enum.Enum):
    CURRENT = "current"
    PAST = "past"
    FUTURE = "future"
    UPCOMING = "upcoming"

class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    apartment_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    entry_date = Column(DateTime(timezone=True), nullable=False)
    exit_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(Enum(TenantStatus, values_callable=lambda e: [m.value for m in e]), default=TenantStatus.CURRENT, nullable=False)
    notes = Column(Text, nullable=True)

    # Payment tracking
    receive_payment_date = Column(DateTime(timezone=True), nullable=False)
    utility_payment_date = Column(DateTime(timezone=True), nullable=True)
    internet_payment_date = Column(DateTime(timezone=True), nullable=True)
    is_paid = Column(Boolean, default=False, nullable=False)
    payment_attachment = Column(String(500), nullable=True)

    hidden = Column(Boolean, default=False, nullable=False)

    # Values of dynamic fields keyed by CustomFieldDefinition.field_id
    custom_fields = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    apartment = relationship("Property", back_populates="tenants")
