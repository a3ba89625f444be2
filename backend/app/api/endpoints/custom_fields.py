"""
Custom field definition endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.core.database import get_db
from app.models.custom_field import EntityType
from app.schemas.custom_field import (
    CustomFieldCreate, CustomFieldCreatedResponse, CustomFieldDeleteResponse,
    CustomFieldResponse, CustomFieldUpdate, SyncSummary
)
from app.services.custom_field_service import CustomFieldService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[CustomFieldResponse])
def list_custom_fields(
    entity_type: Optional[EntityType] = Query(None, alias="entityType", description="PROPERTY or TENANT"),
    db: Session = Depends(get_db)
):
    """List field definitions ordered by entity type, order and creation time"""
    return CustomFieldService(db).list_fields(entity_type)


@router.post("", response_model=CustomFieldCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_custom_field(
    data: CustomFieldCreate,
    db: Session = Depends(get_db)
):
    """Create a field definition and seed its default into existing entities"""
    definition, report = CustomFieldService(db).create_field(data)

    payload = CustomFieldResponse.model_validate(definition).model_dump()
    return CustomFieldCreatedResponse(**payload, sync=SyncSummary(**report.to_summary()))


@router.get("/{definition_id}", response_model=CustomFieldResponse)
def get_custom_field(
    definition_id: int,
    db: Session = Depends(get_db)
):
    return CustomFieldService(db).get_field(definition_id)


@router.put("/{definition_id}", response_model=CustomFieldResponse)
def update_custom_field(
    definition_id: int,
    data: CustomFieldUpdate,
    db: Session = Depends(get_db)
):
    """Update header, type or order of a field definition"""
    return CustomFieldService(db).update_field(definition_id, data)


@router.delete("/{definition_id}", response_model=CustomFieldDeleteResponse)
def delete_custom_field(
    definition_id: int,
    cleanup_data: bool = Query(False, alias="cleanupData", description="Remove stored values from entities first"),
    db: Session = Depends(get_db)
):
    """Delete a field definition, optionally removing its values from every entity"""
    report = CustomFieldService(db).delete_field(definition_id, cleanup_data=cleanup_data)

    return CustomFieldDeleteResponse(
        success=True,
        cleanup=SyncSummary(**report.to_summary()) if report else None
    )


@router.post("/{definition_id}/sync", response_model=SyncSummary)
def sync_custom_field(
    definition_id: int,
    db: Session = Depends(get_db)
):
    """Re-run seeding for a field; entities that already hold a value are untouched"""
    service = CustomFieldService(db)
    report = service.seed_field(service.get_field(definition_id))
    return SyncSummary(**report.to_summary())
