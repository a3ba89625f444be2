"""
Property endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.core.database import get_db
from app.models.custom_field import EntityType
from app.models.property import Property
from app.schemas.custom_field import CustomFieldDisplay
from app.schemas.property import PropertyCreate, PropertyResponse, PropertyUpdate
from app.services.custom_field_display import render_custom_fields
from app.services.custom_field_service import CustomFieldService
from app.services.entity_store import EntityStore

router = APIRouter()
logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("apartment_number", "location", "rooms", "readiness_status", "images", "hidden")


@router.get("", response_model=List[PropertyResponse])
def list_properties(
    include_hidden: bool = Query(True, alias="includeHidden"),
    db: Session = Depends(get_db)
):
    query = db.query(Property)
    if not include_hidden:
        query = query.filter(Property.hidden == False)
    return query.order_by(Property.apartment_number, Property.id).all()


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
def create_property(
    data: PropertyCreate,
    db: Session = Depends(get_db)
):
    prop = Property(**data.model_dump(), custom_fields={})
    db.add(prop)
    db.commit()
    db.refresh(prop)
    logger.info(f"Created property {prop.id} (apartment {prop.apartment_number})")
    return prop


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(
    property_id: int,
    db: Session = Depends(get_db)
):
    return EntityStore(db, EntityType.PROPERTY).get_or_404(property_id)


@router.patch("/{property_id}", response_model=PropertyResponse)
def update_property(
    property_id: int,
    data: PropertyUpdate,
    db: Session = Depends(get_db)
):
    """Update fixed columns; any other key is merged into customFields (null removes it)"""
    store = EntityStore(db, EntityType.PROPERTY)
    prop = store.get_or_404(property_id)
    return store.apply_patch(prop, data, required=REQUIRED_COLUMNS)


@router.delete("/{property_id}")
def delete_property(
    property_id: int,
    db: Session = Depends(get_db)
):
    """Delete a property and its tenants"""
    store = EntityStore(db, EntityType.PROPERTY)
    store.delete(store.get_or_404(property_id))
    logger.info(f"Deleted property {property_id}")
    return {"success": True, "id": property_id}


@router.get("/{property_id}/custom-fields", response_model=List[CustomFieldDisplay])
def get_property_custom_fields(
    property_id: int,
    locale: Optional[str] = Query(None, description="Display language, e.g. en or ru"),
    db: Session = Depends(get_db)
):
    """Rendered custom field values of a property, in definition order"""
    prop = EntityStore(db, EntityType.PROPERTY).get_or_404(property_id)
    definitions = CustomFieldService(db).list_fields(EntityType.PROPERTY)
    return render_custom_fields(definitions, prop.custom_fields, locale)
