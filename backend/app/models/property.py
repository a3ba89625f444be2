from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, Boolean, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum

from app.core.database import Base

class ReadinessStatus(str, enum.Enum):
    FURNISHED = "FURNISHED"
    UNFURNISHED = "UNFURNISHED"

class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    apartment_number = Column(Integer, nullable=False)
    location = Column(String(255), nullable=False)
    rooms = Column(Integer, nullable=False)
    readiness_status = Column(Enum(ReadinessStatus), nullable=False)
    urgent_matter = Column(Text, nullable=True)
    images = Column(JSON, nullable=False, default=list)  # list of image URLs
    hidden = Column(Boolean, default=False, nullable=False)

    # Values of dynamic fields keyed by CustomFieldDefinition.field_id
    custom_fields = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    tenants = relationship("Tenant", back_populates="apartment", cascade="all, delete-orphan")
