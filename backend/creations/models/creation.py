"""
NPU Creations — Creation Domain Model
=======================================

What:  The one domain entity: a user-submitted image plus its metadata.
Why:   Both the orchestrator and the record writer check the same required
       fields, so the check lives on the record itself.
How:   Pydantic model, mutated in place as it moves through the workflow:
       request body → identity assigned → storage keys set → persisted.

Lifecycle:
    ┌──────────┐   generate_id()   ┌──────────┐   upload   ┌──────────┐
    │  parsed  │──────────────────▶│ identity │───────────▶│   keys   │──▶ DynamoDB
    └──────────┘                   └──────────┘            └──────────┘

The score sub-record is not modelled here; it is only written, always as zeros,
by CreationRepository.
"""

import uuid
from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field

ISO_8601_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class Creation(BaseModel):
    """
    A creation moving through the create workflow.

    Attributes:
        creation_id:   UUID4 string, assigned by generate_id() (never client-supplied)
        user_id:       Owner, trusted from the request body
        element_name:  Kind/name of the element, free text
        title:         Display title
        description:   Optional free text
        image_data:    Base64 image from the request; never persisted
        image_key:     S3 key of the original image, set after upload
        thumbnail_key: S3 key of the thumbnail, set after upload
        tags:          Ordered tag list
        creation_date: ISO-8601 UTC timestamp, assigned by generate_id()
    """

    creation_id: str = ""
    user_id: str = ""
    element_name: str = ""
    title: str = ""
    description: str = ""
    image_data: str = Field(default="", repr=False)
    image_key: str = ""
    thumbnail_key: str = ""
    tags: List[str] = Field(default_factory=list)
    creation_date: str = ""

    model_config = {"validate_assignment": True}

    def is_valid(self) -> bool:
        """True iff element_name, title, image_data and user_id are all non-empty."""
        return bool(self.element_name and self.title and self.image_data and self.user_id)

    def generate_id(self) -> None:
        """
        Assign creation_id and creation_date.

        Idempotent within a request: an existing identity is never regenerated.
        """
        if self.creation_id:
            return
        self.creation_id = str(uuid.uuid4())
        self.creation_date = datetime.now(timezone.utc).strftime(ISO_8601_FORMAT)
