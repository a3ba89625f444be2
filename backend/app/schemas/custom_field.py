from datetime import datetime
from typing import Any, List, Optional
from pydantic import ConfigDict, Field

from app.models.custom_field import CustomFieldType, EntityType
from app.schemas.common import CamelModel

class CustomFieldCreate(CamelModel):
    field_id: str = Field(..., min_length=1, max_length=50)
    header: str = Field(..., min_length=1, max_length=100)
    type: CustomFieldType
    entity_type: EntityType
    # Defaults to the number of existing fields for the entity type
    order: Optional[int] = Field(None, ge=0)

class CustomFieldUpdate(CamelModel):
    # fieldId and entityType are immutable, reject them outright
    model_config = ConfigDict(extra="forbid")

    header: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[CustomFieldType] = None
    order: Optional[int] = Field(None, ge=0)

class CustomFieldResponse(CamelModel):
    id: int
    field_id: str
    header: str
    type: CustomFieldType
    entity_type: EntityType
    order: int
    created_at: datetime
    updated_at: datetime

class SyncSummary(CamelModel):
    """Outcome of a seeding or cleanup pass over the entities of one type"""
    field_id: str
    entity_type: EntityType
    action: str
    applied: int
    skipped: int
    failed_ids: List[int] = []
    partial: bool = False

class CustomFieldCreatedResponse(CustomFieldResponse):
    sync: SyncSummary

class CustomFieldDeleteResponse(CamelModel):
    success: bool = True
    cleanup: Optional[SyncSummary] = None

class CustomFieldDisplay(CamelModel):
    """Read-only rendering of one custom field value on an entity"""
    field_id: str
    header: str
    type: CustomFieldType
    value: Any = None
    display: str
