"""
Property image maintenance endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from app.core.database import get_db
from app.services.image_deduplication import ImageDeduplicationService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/duplicates")
def get_duplicate_stats(db: Session = Depends(get_db)):
    """Duplicate image statistics across all properties"""
    return {
        "success": True,
        "stats": ImageDeduplicationService(db).collect_stats()
    }


@router.post("/cleanup-duplicates")
def cleanup_duplicate_images(db: Session = Depends(get_db)):
    """Remove duplicate images (same content hash) from every property"""
    stats = ImageDeduplicationService(db).cleanup_duplicates()
    return {
        "success": True,
        "message": f"Cleaned up {stats['totalDuplicatesRemoved']} duplicate images from {stats['propertiesUpdated']} properties",
        "stats": stats
    }
