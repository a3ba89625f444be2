from sqlalchemy import Column, Integer, String, DateTime, Enum, Index
from sqlalchemy.sql import func
import enum

from app.core.database import Base

class EntityType(str, enum.Enum):
    PROPERTY = "PROPERTY"
    TENANT = "TENANT"

class CustomFieldType(str, enum.Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"
    BOOLEAN = "boolean"

class CustomFieldDefinition(Base):
    __tablename__ = "custom_field_definitions"

    id = Column(Integer, primary_key=True, index=True)
    # Key inside every entity's custom_fields bag, unique across both entity types
    field_id = Column(String(50), unique=True, nullable=False)
    header = Column(String(100), nullable=False)
    type = Column(Enum(CustomFieldType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    entity_type = Column(Enum(EntityType), nullable=False)
    order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index('idx_custom_field_entity_order', 'entity_type', 'order'),
    )
