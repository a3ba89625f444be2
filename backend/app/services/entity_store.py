from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.orm import Session
from pydantic import BaseModel
import logging

from app.core.error_handlers import NotFoundError, ValidationError
from app.models.custom_field import EntityType
from app.models.property import Property
from app.models.tenant import Tenant

logger = logging.getLogger(__name__)

ENTITY_MODELS = {
    EntityType.PROPERTY: Property,
    EntityType.TENANT: Tenant,
}

def merge_custom_fields(existing: Optional[Dict[str, Any]], changes: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge changes into a custom_fields bag; a None value removes the key"""
    merged = dict(existing or {})
    for key, value in changes.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged

def split_patch(data: BaseModel) -> tuple:
    """
    Split a partial update into fixed column values and custom field changes

    Known schema fields map onto columns. Every other top-level key, plus the
    content of an explicit customFields object, is a custom field change.
    customFields itself must be an object; null is rejected like any other
    non-object value.
    """
    declared = type(data).model_fields
    fixed = {
        key: value
        for key, value in data.model_dump(exclude_unset=True).items()
        if key in declared
    }
    if "custom_fields" in fixed and fixed["custom_fields"] is None:
        raise ValidationError("customFields must be an object")
    bag_changes = dict(fixed.pop("custom_fields", None) or {})
    bag_changes.update(data.model_extra or {})
    return fixed, bag_changes

class EntityStore:
    """Reads and writes properties or tenants, one entity type per instance"""

    def __init__(self, db: Session, entity_type: EntityType):
        self.db = db
        self.entity_type = EntityType(entity_type)
        self.model = ENTITY_MODELS[self.entity_type]

    @property
    def label(self) -> str:
        return self.entity_type.value.capitalize()

    def list_entities(self) -> List[Any]:
        return self.db.query(self.model).order_by(self.model.id).all()

    def get(self, entity_id: int):
        return self.db.query(self.model).filter(self.model.id == entity_id).first()

    def get_or_404(self, entity_id: int):
        entity = self.get(entity_id)
        if not entity:
            raise NotFoundError(self.label, entity_id)
        return entity

    def save_custom_fields(self, entity, custom_fields: Dict[str, Any]):
        """Persist a whole custom_fields bag for a single entity"""
        # Assign a fresh dict so the JSON column is flagged dirty
        entity.custom_fields = dict(custom_fields)
        self.db.commit()

    def apply_patch(self, entity, data: BaseModel, required: Iterable[str] = ()):
        """Apply a partial update, merging custom field changes into the bag"""
        fixed, bag_changes = split_patch(data)

        for column in required:
            if column in fixed and fixed[column] is None:
                raise ValidationError(f"{column} cannot be null")

        for column, value in fixed.items():
            setattr(entity, column, value)

        if bag_changes:
            entity.custom_fields = merge_custom_fields(entity.custom_fields, bag_changes)

        self.db.commit()
        self.db.refresh(entity)
        logger.debug(f"Updated {self.label} {entity.id}: columns={list(fixed)}, custom_fields={list(bag_changes)}")
        return entity

    def delete(self, entity):
        self.db.delete(entity)
        self.db.commit()
