from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """Base schema speaking camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

class SuccessResponse(CamelModel):
    success: bool = True

def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Offset-bearing datetimes are stored as naive UTC; naive input is taken as UTC already"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
