from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import ConfigDict, Field

from app.models.property import ReadinessStatus
from app.schemas.common import CamelModel

class PropertyCreate(CamelModel):
    apartment_number: int = Field(..., ge=1)
    location: str = Field(..., min_length=1)
    rooms: int = Field(..., ge=1, le=10)
    readiness_status: ReadinessStatus
    urgent_matter: Optional[str] = None
    images: List[str] = []
    hidden: bool = False

class PropertyUpdate(CamelModel):
    """Partial update; unknown top-level keys are custom field values"""
    model_config = ConfigDict(extra="allow")

    apartment_number: Optional[int] = Field(None, ge=1)
    location: Optional[str] = Field(None, min_length=1)
    rooms: Optional[int] = Field(None, ge=1, le=10)
    readiness_status: Optional[ReadinessStatus] = None
    urgent_matter: Optional[str] = None
    images: Optional[List[str]] = None
    hidden: Optional[bool] = None
    custom_fields: Optional[Dict[str, Any]] = None

class PropertyResponse(CamelModel):
    id: int
    apartment_number: int
    location: str
    rooms: int
    readiness_status: ReadinessStatus
    urgent_matter: Optional[str] = None
    images: List[str] = []
    hidden: bool = False
    custom_fields: Dict[str, Any] = {}
    created_at: datetime
    updated_at: datetime
