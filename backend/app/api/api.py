from fastapi import APIRouter

from app.api.endpoints import custom_fields, properties, tenants, updates, images

api_router = APIRouter()

api_router.include_router(custom_fields.router, prefix="/custom-fields", tags=["custom-fields"])
api_router.include_router(properties.router, prefix="/properties", tags=["properties"])
api_router.include_router(tenants.router, prefix="/tenants", tags=["tenants"])
api_router.include_router(updates.router, prefix="/updates", tags=["updates"])
api_router.include_router(images.router, prefix="/images", tags=["images"])
