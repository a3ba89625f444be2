from app.core.database import Base
from app.models.property import Property, ReadinessStatus
from app.models.tenant import Tenant, TenantStatus
from app.models.custom_field import CustomFieldDefinition, CustomFieldType, EntityType
from app.models.update import Update

__all__ = [
    "Base",
    "Property",
    "ReadinessStatus",
    "Tenant",
    "TenantStatus",
    "CustomFieldDefinition",
    "CustomFieldType",
    "EntityType",
    "Update"
]
