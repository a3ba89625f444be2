from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from app.schemas.common import CamelModel, to_naive_utc

class UpdateCreate(CamelModel):
    author: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    date: datetime

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v):
        return to_naive_utc(v)

class UpdateEdit(CamelModel):
    author: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    date: Optional[datetime] = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v):
        return to_naive_utc(v)

class UpdateResponse(CamelModel):
    id: int
    author: str
    content: str
    date: datetime
    created_at: datetime
