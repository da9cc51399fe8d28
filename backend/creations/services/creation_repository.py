"""
NPU Creations — Creation Record Writer
========================================

What:  Writes a creation record (plus a zero score map) to DynamoDB.
Why:   Keeps item layout and put_item error handling in one place.
How:   build_item() maps the Creation onto a plain dict; the boto3 Table
       resource serializes str → S, list → L, dict → M and Decimal → N.
Who:   Called by CreationService after both images are in S3.

Persisted item:
    {
        "creation_id":   "8f0c...",        # partition key
        "user_id":       "u1",
        "element_name":  "sword",
        "title":         "Flaming Sword",
        "description":   "",
        "image_key":     "images/8f0c....jpg",
        "thumbnail_key": "thumbnails/8f0c....jpg",
        "creation_date": "2024-01-15T12:00:00Z",
        "tags":          ["fire", "weapon"],   # omitted when empty
        "scores":        {"total_score": 0, "vote_count": 0}
    }
"""

import logging
from decimal import Decimal
from typing import Any, Dict

from creations.models.creation import Creation

logger = logging.getLogger(__name__)


def build_item(creation: Creation) -> Dict[str, Any]:
    """Map a Creation onto a DynamoDB item. image_data is never included."""
    item: Dict[str, Any] = {
        "creation_id": creation.creation_id,
        "user_id": creation.user_id,
        "element_name": creation.element_name,
        "title": creation.title,
        "description": creation.description,
        "image_key": creation.image_key,
        "thumbnail_key": creation.thumbnail_key,
        "creation_date": creation.creation_date,
    }

    # Omitted entirely when empty, never written as []
    if creation.tags:
        item["tags"] = list(creation.tags)

    item["scores"] = {
        "total_score": Decimal(0),
        "vote_count": Decimal(0),
    }
    return item


class CreationRepository:
    """
    Record writer for the creations table.

    save_creation() never raises: failures are logged and reported as False,
    and the caller decides whether to compensate.
    """

    def __init__(self, table):
        self.table = table

    def save_creation(self, creation: Creation) -> bool:
        # Same required-field check the orchestrator already ran
        if not creation.is_valid():
            logger.error("Invalid creation data for ID: %s", creation.creation_id)
            return False

        try:
            self.table.put_item(Item=build_item(creation))
        except Exception as e:
            logger.error("Failed to save creation %s: %s", creation.creation_id, str(e))
            return False

        logger.info("Successfully saved creation with ID: %s", creation.creation_id)
        return True
