"""
Notification feed endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
import logging

from app.core.database import get_db
from app.core.error_handlers import NotFoundError, ValidationError
from app.models.update import Update
from app.schemas.update import UpdateCreate, UpdateEdit, UpdateResponse

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_update(db: Session, update_id: int) -> Update:
    update = db.query(Update).filter(Update.id == update_id).first()
    if not update:
        raise NotFoundError("Update", update_id)
    return update


@router.get("", response_model=List[UpdateResponse])
def list_updates(db: Session = Depends(get_db)):
    """Newest first"""
    return db.query(Update).order_by(Update.date.desc(), Update.id.desc()).all()


@router.post("", response_model=UpdateResponse, status_code=status.HTTP_201_CREATED)
def create_update(
    data: UpdateCreate,
    db: Session = Depends(get_db)
):
    update = Update(**data.model_dump())
    db.add(update)
    db.commit()
    db.refresh(update)
    return update


@router.put("/{update_id}", response_model=UpdateResponse)
def edit_update(
    update_id: int,
    data: UpdateEdit,
    db: Session = Depends(get_db)
):
    update = _get_update(db, update_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is None:
            raise ValidationError(f"{key} cannot be null")
        setattr(update, key, value)
    db.commit()
    db.refresh(update)
    return update


@router.delete("/{update_id}")
def delete_update(
    update_id: int,
    db: Session = Depends(get_db)
):
    update = _get_update(db, update_id)
    db.delete(update)
    db.commit()
    return {"success": True, "id": update_id}
