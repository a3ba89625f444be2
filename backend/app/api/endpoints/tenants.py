"""
Tenant endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List, Optional
from datetime import datetime, timezone
import logging

from app.core.database import get_db
from app.core.error_handlers import NotFoundError, OverlapError, ValidationError
from app.models.custom_field import EntityType
from app.models.property import Property
from app.models.tenant import Tenant
from app.schemas.common import to_naive_utc
from app.schemas.custom_field import CustomFieldDisplay
from app.schemas.tenant import TenantCreate, TenantResponse, TenantUpdate
from app.services.custom_field_display import render_custom_fields
from app.services.custom_field_service import CustomFieldService
from app.services.entity_store import EntityStore, split_patch

router = APIRouter()
logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("name", "apartment_id", "entry_date", "status", "receive_payment_date", "is_paid", "hidden")

# Upper bound used for tenants without an exit date
OPEN_ENDED = datetime(2999, 12, 31)


def _first_of_month() -> datetime:
    # Naive UTC, like every tenant date the schemas accept
    now = datetime.now(timezone.utc)
    return datetime(now.year, now.month, 1)


def find_overlapping_tenant(
    db: Session,
    apartment_id: int,
    entry_date: datetime,
    exit_date: Optional[datetime],
    exclude_id: Optional[int] = None
) -> Optional[Tenant]:
    """Another tenant of the apartment whose stay intersects [entry_date, exit_date]"""
    query = db.query(Tenant).filter(
        Tenant.apartment_id == apartment_id,
        Tenant.entry_date <= (exit_date or OPEN_ENDED),
        or_(Tenant.exit_date.is_(None), Tenant.exit_date >= entry_date)
    )
    if exclude_id is not None:
        query = query.filter(Tenant.id != exclude_id)
    return query.first()


def _ensure_property(db: Session, apartment_id: int):
    if not db.query(Property.id).filter(Property.id == apartment_id).first():
        raise NotFoundError("Property", apartment_id)


def _check_dates(entry_date: datetime, exit_date: Optional[datetime]):
    if exit_date is not None and exit_date < entry_date:
        raise ValidationError("exitDate must not be before entryDate")


@router.get("", response_model=List[TenantResponse])
def list_tenants(
    apartment_id: Optional[int] = Query(None, alias="apartmentId"),
    include_hidden: bool = Query(True, alias="includeHidden"),
    db: Session = Depends(get_db)
):
    query = db.query(Tenant)
    if apartment_id is not None:
        query = query.filter(Tenant.apartment_id == apartment_id)
    if not include_hidden:
        query = query.filter(Tenant.hidden == False)
    return query.order_by(Tenant.entry_date, Tenant.id).all()


@router.post("", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
def create_tenant(
    data: TenantCreate,
    db: Session = Depends(get_db)
):
    _ensure_property(db, data.apartment_id)
    _check_dates(data.entry_date, data.exit_date)

    if find_overlapping_tenant(db, data.apartment_id, data.entry_date, data.exit_date):
        raise OverlapError()

    values = data.model_dump()
    if values["receive_payment_date"] is None:
        values["receive_payment_date"] = _first_of_month()

    tenant = Tenant(**values, custom_fields={})
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    logger.info(f"Created tenant {tenant.id} for property {tenant.apartment_id}")
    return tenant


@router.get("/{tenant_id}", response_model=TenantResponse)
def get_tenant(
    tenant_id: int,
    db: Session = Depends(get_db)
):
    return EntityStore(db, EntityType.TENANT).get_or_404(tenant_id)


@router.patch("/{tenant_id}", response_model=TenantResponse)
def update_tenant(
    tenant_id: int,
    data: TenantUpdate,
    db: Session = Depends(get_db)
):
    """Update fixed columns; any other key is merged into customFields (null removes it)"""
    store = EntityStore(db, EntityType.TENANT)
    tenant = store.get_or_404(tenant_id)

    fixed, _ = split_patch(data)
    if {"apartment_id", "entry_date", "exit_date"} & set(fixed):
        apartment_id = fixed.get("apartment_id") or tenant.apartment_id
        entry_date = fixed.get("entry_date") or to_naive_utc(tenant.entry_date)
        exit_date = fixed["exit_date"] if "exit_date" in fixed else to_naive_utc(tenant.exit_date)

        if "apartment_id" in fixed and fixed["apartment_id"] is not None:
            _ensure_property(db, apartment_id)
        _check_dates(entry_date, exit_date)
        if find_overlapping_tenant(db, apartment_id, entry_date, exit_date, exclude_id=tenant.id):
            raise OverlapError()

    return store.apply_patch(tenant, data, required=REQUIRED_COLUMNS)


@router.delete("/{tenant_id}")
def delete_tenant(
    tenant_id: int,
    db: Session = Depends(get_db)
):
    store = EntityStore(db, EntityType.TENANT)
    store.delete(store.get_or_404(tenant_id))
    logger.info(f"Deleted tenant {tenant_id}")
    return {"success": True, "id": tenant_id}


@router.get("/{tenant_id}/custom-fields", response_model=List[CustomFieldDisplay])
def get_tenant_custom_fields(
    tenant_id: int,
    locale: Optional[str] = Query(None, description="Display language, e.g. en or ru"),
    db: Session = Depends(get_db)
):
    """Rendered custom field values of a tenant, in definition order"""
    tenant = EntityStore(db, EntityType.TENANT).get_or_404(tenant_id)
    definitions = CustomFieldService(db).list_fields(EntityType.TENANT)
    return render_custom_fields(definitions, tenant.custom_fields, locale)
