from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import ConfigDict, Field, field_validator

from app.models.tenant import TenantStatus
from app.schemas.common import CamelModel, to_naive_utc

DATE_FIELDS = ("entry_date", "exit_date", "receive_payment_date", "utility_payment_date", "internet_payment_date")

class TenantCreate(CamelModel):
    name: str = Field(..., min_length=1)
    apartment_id: int
    entry_date: datetime
    exit_date: Optional[datetime] = None
    status: TenantStatus = TenantStatus.CURRENT
    notes: Optional[str] = None
    # Defaults to the first day of the current month
    receive_payment_date: Optional[datetime] = None
    utility_payment_date: Optional[datetime] = None
    internet_payment_date: Optional[datetime] = None
    is_paid: bool = False
    payment_attachment: Optional[str] = None
    hidden: bool = False

    @field_validator(*DATE_FIELDS)
    @classmethod
    def normalize_dates(cls, v):
        return to_naive_utc(v)

class TenantUpdate(CamelModel):
    """Partial update; unknown top-level keys are custom field values"""
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, min_length=1)
    apartment_id: Optional[int] = None
    entry_date: Optional[datetime] = None
    exit_date: Optional[datetime] = None
    status: Optional[TenantStatus] = None
    notes: Optional[str] = None
    receive_payment_date: Optional[datetime] = None
    utility_payment_date: Optional[datetime] = None
    internet_payment_date: Optional[datetime] = None
    is_paid: Optional[bool] = None
    payment_attachment: Optional[str] = None
    hidden: Optional[bool] = None
    custom_fields: Optional[Dict[str, Any]] = None

    @field_validator(*DATE_FIELDS)
    @classmethod
    def normalize_dates(cls, v):
        return to_naive_utc(v)

class TenantResponse(CamelModel):
    id: int
    name: str
    apartment_id: int
    entry_date: datetime
    exit_date: Optional[datetime] = None
    status: TenantStatus
    notes: Optional[str] = None
    receive_payment_date: datetime
    utility_payment_date: Optional[datetime] = None
    internet_payment_date: Optional[datetime] = None
    is_paid: bool = False
    payment_attachment: Optional[str] = None
    hidden: bool = False
    custom_fields: Dict[str, Any] = {}
    created_at: datetime
    updated_at: datetime
