"""
Removal of duplicate entries from property image lists, keyed by the
content hash embedded in each image filename
"""
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
import logging
import re

from app.models.property import Property

logger = logging.getLogger(__name__)

# {propertyId}_{hash}_{timestamp}.{ext}, hash is 12 hex chars of the SHA-256
_HASH_IN_NAME = re.compile(r"_([a-f0-9]{12})_")

def extract_hash_from_filename(filename: str) -> Optional[str]:
    match = _HASH_IN_NAME.search(filename)
    return match.group(1) if match else None

def deduplicate_images(image_urls: List[str]) -> Dict[str, List[str]]:
    """Keep the first image per content hash; names without a hash are always kept"""
    seen = set()
    unique_images = []
    duplicates = []

    for url in image_urls:
        image_hash = extract_hash_from_filename(url)
        if not image_hash:
            unique_images.append(url)
            continue
        if image_hash in seen:
            duplicates.append(url)
        else:
            seen.add(image_hash)
            unique_images.append(url)

    return {"unique_images": unique_images, "duplicates": duplicates}

def clean_property_images(images: Any) -> List[str]:
    if not images:
        return []
    if not isinstance(images, list):
        logger.warning(f"Images is not a list: {images!r}")
        return []
    string_images = [img for img in images if isinstance(img, str)]
    return deduplicate_images(string_images)["unique_images"]

def get_deduplication_stats(images: Optional[List[str]]) -> Dict[str, Any]:
    if not images or not isinstance(images, list):
        return {"total": 0, "unique": 0, "duplicates": 0, "duplicate_percentage": 0.0}

    result = deduplicate_images(images)
    duplicates = len(result["duplicates"])
    return {
        "total": len(images),
        "unique": len(result["unique_images"]),
        "duplicates": duplicates,
        "duplicate_percentage": duplicates / len(images) * 100
    }

class ImageDeduplicationService:
    def __init__(self, db: Session):
        self.db = db

    def collect_stats(self) -> Dict[str, Any]:
        properties = self.db.query(Property).order_by(Property.id).all()

        total_images = 0
        total_duplicates = 0
        property_stats = []

        for prop in properties:
            if not isinstance(prop.images, list):
                continue
            stats = get_deduplication_stats(prop.images)
            total_images += stats["total"]
            total_duplicates += stats["duplicates"]

            if stats["duplicates"] > 0:
                property_stats.append({
                    "propertyId": prop.id,
                    "totalImages": stats["total"],
                    "uniqueImages": stats["unique"],
                    "duplicates": stats["duplicates"],
                    "duplicatePercentage": stats["duplicate_percentage"]
                })

        return {
            "totalProperties": len(properties),
            "totalImages": total_images,
            "totalDuplicates": total_duplicates,
            "duplicatePercentage": (total_duplicates / total_images * 100) if total_images > 0 else 0.0,
            "propertiesWithDuplicates": len(property_stats),
            "propertyStats": property_stats
        }

    def cleanup_duplicates(self) -> Dict[str, Any]:
        """Rewrite each property's image list without duplicate hashes"""
        properties = self.db.query(Property).order_by(Property.id).all()

        total_cleaned = 0
        cleanup_stats = []

        for prop in properties:
            if not isinstance(prop.images, list):
                continue
            stats = get_deduplication_stats(prop.images)
            if stats["duplicates"] == 0:
                continue

            prop.images = clean_property_images(prop.images)
            self.db.commit()

            total_cleaned += stats["duplicates"]
            cleanup_stats.append({
                "propertyId": prop.id,
                "before": stats["total"],
                "after": stats["unique"],
                "duplicates": stats["duplicates"]
            })
            logger.info(f"Property {prop.id}: cleaned {stats['duplicates']} duplicate images")

        logger.info(f"Duplicate cleanup completed: {total_cleaned} removed from {len(cleanup_stats)} properties")
        return {
            "totalDuplicatesRemoved": total_cleaned,
            "propertiesUpdated": len(cleanup_stats),
            "cleanupStats": cleanup_stats
        }
