"""
Custom field registry and the seeding/cleanup passes that keep entity
attribute bags in step with it
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import func
import logging

from app.core.error_handlers import (
    DuplicateFieldError, NotFoundError, StorageError, SyncIncompleteError, ValidationError
)
from app.models.custom_field import CustomFieldDefinition, CustomFieldType, EntityType
from app.schemas.custom_field import CustomFieldCreate, CustomFieldUpdate
from app.services.entity_store import EntityStore

logger = logging.getLogger(__name__)

DEFAULT_SELECT_OPTION = "option1"

SEED = "seed"
CLEANUP = "cleanup"

def default_value_for_type(field_type: CustomFieldType, now: Optional[datetime] = None) -> Any:
    """Value written into existing entities when a field is created"""
    field_type = CustomFieldType(field_type)
    if field_type == CustomFieldType.TEXT:
        return ""
    if field_type == CustomFieldType.NUMBER:
        return 0
    if field_type == CustomFieldType.DATE:
        return (now or datetime.now(timezone.utc)).isoformat()
    if field_type == CustomFieldType.SELECT:
        return DEFAULT_SELECT_OPTION
    return False

@dataclass
class SyncOutcome:
    entity_id: int
    success: bool
    changed: bool = False
    error: Optional[str] = None

@dataclass
class SyncReport:
    field_id: str
    entity_type: EntityType
    action: str
    outcomes: List[SyncOutcome] = field(default_factory=list)

    @property
    def applied(self) -> int:
        return sum(1 for o in self.outcomes if o.success and o.changed)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.success and not o.changed)

    @property
    def failed_ids(self) -> List[int]:
        return [o.entity_id for o in self.outcomes if not o.success]

    @property
    def partial(self) -> bool:
        return bool(self.failed_ids)

    def to_summary(self) -> Dict[str, Any]:
        return {
            "field_id": self.field_id,
            "entity_type": self.entity_type,
            "action": self.action,
            "applied": self.applied,
            "skipped": self.skipped,
            "failed_ids": self.failed_ids,
            "partial": self.partial
        }

class CustomFieldService:
    def __init__(self, db: Session):
        self.db = db

    # Registry

    def list_fields(self, entity_type: Optional[EntityType] = None) -> List[CustomFieldDefinition]:
        query = self.db.query(CustomFieldDefinition)
        if entity_type:
            query = query.filter(CustomFieldDefinition.entity_type == entity_type)
        return query.order_by(
            CustomFieldDefinition.entity_type.asc(),
            CustomFieldDefinition.order.asc(),
            CustomFieldDefinition.created_at.asc(),
            CustomFieldDefinition.id.asc()
        ).all()

    def get_field(self, definition_id: int) -> CustomFieldDefinition:
        definition = self.db.query(CustomFieldDefinition).filter(
            CustomFieldDefinition.id == definition_id
        ).first()
        if not definition:
            raise NotFoundError("Custom field", definition_id)
        return definition

    def find_by_field_id(self, field_id: str) -> Optional[CustomFieldDefinition]:
        return self.db.query(CustomFieldDefinition).filter(
            CustomFieldDefinition.field_id == field_id
        ).first()

    def create_field(self, data: CustomFieldCreate) -> Tuple[CustomFieldDefinition, SyncReport]:
        """Register a new field, then seed its default into every matching entity"""
        if self.find_by_field_id(data.field_id):
            raise DuplicateFieldError(data.field_id)

        order = data.order
        if order is None:
            order = self.db.query(func.count(CustomFieldDefinition.id)).filter(
                CustomFieldDefinition.entity_type == data.entity_type
            ).scalar()

        definition = CustomFieldDefinition(
            field_id=data.field_id,
            header=data.header,
            type=data.type,
            entity_type=data.entity_type,
            order=order
        )
        self.db.add(definition)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race against a concurrent create with the same fieldId
            self.db.rollback()
            raise DuplicateFieldError(data.field_id)
        self.db.refresh(definition)
        logger.info(f"Created custom field '{definition.field_id}' ({definition.type.value}) for {definition.entity_type.value}")

        report = self.seed_field(definition)
        return definition, report

    def update_field(self, definition_id: int, data: CustomFieldUpdate) -> CustomFieldDefinition:
        definition = self.get_field(definition_id)

        changes = data.model_dump(exclude_unset=True)
        for key, value in changes.items():
            if value is None:
                raise ValidationError(f"{key} cannot be null")
            setattr(definition, key, value)

        self.db.commit()
        self.db.refresh(definition)
        logger.info(f"Updated custom field '{definition.field_id}': {list(changes)}")
        return definition

    def delete_field(self, definition_id: int, cleanup_data: bool = False) -> Optional[SyncReport]:
        """
        Remove a field definition, optionally stripping its values first

        The definition is only deleted once cleanup has succeeded for every
        entity; otherwise SyncIncompleteError is raised and it is kept so the
        delete can be retried.
        """
        definition = self.get_field(definition_id)
        field_id = definition.field_id

        report = None
        if cleanup_data:
            report = self.cleanup_field(definition)
            if report.partial:
                raise SyncIncompleteError(
                    f"Cleanup of '{field_id}' failed for {len(report.failed_ids)} entities, definition kept",
                    report.failed_ids
                )

        self.db.delete(definition)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Failed to delete custom field '{field_id}': {str(e)}")
        logger.info(f"Deleted custom field '{field_id}' (cleanup_data={cleanup_data})")
        return report

    # Sync

    def seed_field(self, definition: CustomFieldDefinition) -> SyncReport:
        """Back-fill the type default into entities that lack the key"""
        default = default_value_for_type(definition.type)
        field_id = definition.field_id

        def seed(bag: Dict[str, Any]) -> Optional[Dict[str, Any]]:
            if field_id in bag:
                return None
            return {**bag, field_id: default}

        return self._apply(definition, SEED, seed)

    def cleanup_field(self, definition: CustomFieldDefinition) -> SyncReport:
        """Remove the key from every entity that carries it"""
        field_id = definition.field_id

        def cleanup(bag: Dict[str, Any]) -> Optional[Dict[str, Any]]:
            if field_id not in bag:
                return None
            return {key: value for key, value in bag.items() if key != field_id}

        return self._apply(definition, CLEANUP, cleanup)

    def _apply(
        self,
        definition: CustomFieldDefinition,
        action: str,
        transform: Callable[[Dict[str, Any]], Optional[Dict[str, Any]]]
    ) -> SyncReport:
        """Run transform over each entity's bag, committing each entity on its own"""
        store = EntityStore(self.db, definition.entity_type)
        report = SyncReport(
            field_id=definition.field_id,
            entity_type=definition.entity_type,
            action=action
        )

        entity_ids = [entity.id for entity in store.list_entities()]
        for entity_id in entity_ids:
            try:
                entity = store.get(entity_id)
                if entity is None:
                    # Deleted while the pass was running
                    report.outcomes.append(SyncOutcome(entity_id, success=True))
                    continue

                updated = transform(dict(entity.custom_fields or {}))
                if updated is None:
                    report.outcomes.append(SyncOutcome(entity_id, success=True))
                    continue

                store.save_custom_fields(entity, updated)
                report.outcomes.append(SyncOutcome(entity_id, success=True, changed=True))
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Failed to {action} '{report.field_id}' on {store.label} {entity_id}: {str(e)}")
                report.outcomes.append(SyncOutcome(entity_id, success=False, error=str(e)))

        if report.partial:
            logger.warning(
                f"{action.capitalize()} of '{report.field_id}' partially applied: "
                f"{report.applied} updated, failed for {report.failed_ids}"
            )
        else:
            logger.info(f"{action.capitalize()} of '{report.field_id}': {report.applied} updated, {report.skipped} unchanged")
        return report
