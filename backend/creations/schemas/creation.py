"""
NPU Creations — Pydantic Request/Response Schemas
===================================================

What:  Pydantic models defining the contract between API Gateway clients and the function.
Why:   Strict input validation and predictable JSON serialization.
How:   CreateCreationRequest validates the decoded `body`; CreationResponse and
       ErrorResponse are dumped into the proxy response body.

Design Decision:
    Schemas are separate from the Creation model because:
    1. The request never carries creation_id, keys or timestamp
    2. The response exposes URLs, not storage keys
    3. image_data must never appear in a response
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from creations.models.creation import Creation


# ══════════════════════════════════════════════════════════════════════════
# Request Model — the JSON object inside event["body"]
# ══════════════════════════════════════════════════════════════════════════


class CreateCreationRequest(BaseModel):
    """
    What:  Body of a create-creation request.

    Required keys must be present; empty strings still pass here and are
    rejected by the orchestrator's validation step, which has no side effects.
    A null description or tags list is read the same as an absent one.
    """

    element_name: str = Field(description="Kind/name of the created element")
    title: str = Field(description="Display title")
    image_data: str = Field(description="Base64 image, optionally with a data: URL prefix")
    user_id: str = Field(description="Owner ID (trusted, no authentication)")
    description: Optional[str] = Field(default="", description="Optional free text")
    tags: Optional[List[str]] = Field(default_factory=list, description="Optional ordered tags")

    model_config = {"extra": "ignore"}

    @field_validator("description", mode="before")
    @classmethod
    def null_description_is_empty(cls, v):
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags_are_empty(cls, v):
        return [] if v is None else v

    def to_creation(self) -> Creation:
        """Build an unidentified Creation from the request fields."""
        return Creation(
            element_name=self.element_name,
            title=self.title,
            image_data=self.image_data,
            user_id=self.user_id,
            description=self.description,
            tags=list(self.tags),
        )


# ══════════════════════════════════════════════════════════════════════════
# Response Models — what the function returns in the proxy response body
# ══════════════════════════════════════════════════════════════════════════


class CreationResponse(BaseModel):
    """
    What:  Representation of a successfully stored creation.

    `tags` is None (and omitted on dump) when the creation has no tags.
    """

    creation_id: str
    element_name: str
    title: str
    image_url: str
    thumbnail_url: str
    creation_date: str
    tags: Optional[List[str]] = None

    @classmethod
    def from_creation(cls, creation: Creation, base_url: str) -> "CreationResponse":
        return cls(
            creation_id=creation.creation_id,
            element_name=creation.element_name,
            title=creation.title,
            image_url=base_url + creation.image_key,
            thumbnail_url=base_url + creation.thumbnail_key,
            creation_date=creation.creation_date,
            tags=list(creation.tags) if creation.tags else None,
        )

    def to_body(self) -> dict:
        return self.model_dump(exclude_none=True)


class ErrorResponse(BaseModel):
    """
    What:  Standard error response format.

    Example:
        {
            "error": "ValidationError",
            "message": "Invalid creation data",
            "request_id": "8f0c2a1e-..."
        }
    """

    error: str = Field(description="Error kind tag")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Lambda request ID for support")

    def to_body(self) -> dict:
        return self.model_dump(exclude_none=True)
