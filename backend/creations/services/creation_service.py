"""
NPU Creations — Creation Service (Business Logic Orchestrator)
================================================================

What:  Coordinates validate → assign identity → upload → persist → respond.
Why:   S3 and DynamoDB have no shared transaction. This is the one place that
       knows the order of the two writes and how to undo the first one.
How:   Composes ImageService and CreationRepository; every outcome is returned
       as a CreationResult, never raised.
Who:   Called by the Lambda handler once the request body has been parsed.

Orchestration Flow:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌──────────┐
    │ Validate │───▶│ Identity │───▶│  Upload  │───▶│ Persist  │───▶│ Respond  │
    └──────────┘    └──────────┘    │   (S3)   │    │ (Dynamo) │    └──────────┘
         │                          └──────────┘    └──────────┘
         ▼                               │               │
    ValidationError                 UploadError     delete both blobs (best effort)
    (no side effects)               (no cleanup)    → DatabaseError

    Anything else → InternalError.

Consistency gap:
    There is no durable record of the compensation intent. If the process dies
    between upload and persist, the blobs stay in S3 with no record.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from creations.exceptions import (
    CreationsError,
    DatabaseError,
    ErrorKind,
    UploadError,
    ValidationError,
)
from creations.models.creation import Creation
from creations.schemas.creation import CreationResponse
from creations.services.creation_repository import CreationRepository
from creations.services.image_service import ImageService

logger = logging.getLogger(__name__)


class CreationResult(BaseModel):
    """
    Tagged outcome of create_creation().

    Exactly one of `response` or `error_kind` is set.
    """

    response: Optional[CreationResponse] = None
    error_kind: Optional[ErrorKind] = None
    message: str = ""
    status_code: int = 201

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, response: CreationResponse) -> "CreationResult":
        return cls(response=response, status_code=201)

    @classmethod
    def failure(
        cls, kind: ErrorKind, message: str, status_code: int = 500
    ) -> "CreationResult":
        return cls(error_kind=kind, message=message, status_code=status_code)

    @classmethod
    def from_error(cls, exc: CreationsError) -> "CreationResult":
        return cls.failure(exc.kind, exc.message, exc.status_code)


class CreationService:
    """
    Orchestrates the two-store write for a single creation.

    Args:
        image_service: S3 uploader/deleter
        repository:    DynamoDB record writer
        base_url:      Public URL prefix for response URLs (ends with '/')

    Holds no per-request state; one instance serves every warm invocation.
    """

    def __init__(
        self,
        image_service: ImageService,
        repository: CreationRepository,
        base_url: str,
    ):
        self.image_service = image_service
        self.repository = repository
        self.base_url = base_url

    def create_creation(self, creation: Creation) -> CreationResult:
        """
        Store a creation in S3 and DynamoDB.

        Error Recovery:
            Validate fails → ValidationError (400), nothing written
            Upload fails   → UploadError (400 for bad image data, else 500), no cleanup
            Persist fails  → delete both blobs once, DatabaseError (500)
            Anything else  → InternalError (500)

        Returns:
            CreationResult; never raises.
        """
        logger.info("Processing creation request")

        try:
            # ── Step 1: Validate ──────────────────────────────────────────
            if not creation.is_valid():
                logger.warning("Rejected creation with missing required fields")
                return CreationResult.from_error(ValidationError("Invalid creation data"))

            # ── Step 2: Assign identity ───────────────────────────────────
            creation.generate_id()

            # ── Step 3: Upload image + thumbnail ──────────────────────────
            try:
                upload = self.image_service.upload_creation_image(
                    creation.creation_id, creation.image_data
                )
            except Exception as e:
                logger.error("Image upload failed for %s: %s", creation.creation_id, str(e))
                return self._upload_failure(e)

            creation.image_key = upload.image_key
            creation.thumbnail_key = upload.thumbnail_key

            # ── Step 4: Persist record ────────────────────────────────────
            try:
                saved = self.repository.save_creation(creation)
            except Exception as e:
                logger.error("Database exception for %s: %s", creation.creation_id, str(e))
                saved = False

            if not saved:
                self._compensate(creation)
                return CreationResult.from_error(DatabaseError())

            # ── Step 5: Respond ───────────────────────────────────────────
            response = CreationResponse.from_creation(creation, self.base_url)
            logger.info("Successfully created creation with ID: %s", creation.creation_id)
            return CreationResult.success(response)

        except Exception as e:
            logger.error("Unhandled exception in create_creation: %s", str(e), exc_info=True)
            return CreationResult.failure(
                ErrorKind.INTERNAL, "An unexpected error occurred", 500
            )

    def _upload_failure(self, exc: Exception) -> CreationResult:
        message = UploadError().message
        if isinstance(exc, UploadError):
            message = exc.message
        elif isinstance(exc, CreationsError):
            message = f"{message}: {exc.message}"
        # Bad image data is the client's fault even though the kind is UploadError
        status_code = 400 if isinstance(exc, ValidationError) else UploadError.status_code
        return CreationResult.failure(ErrorKind.UPLOAD, message, status_code)

    def _compensate(self, creation: Creation) -> None:
        """Best-effort delete of both blobs; failures are logged, never raised."""
        logger.warning(
            "Record write failed for %s; deleting uploaded images", creation.creation_id
        )
        try:
            self.image_service.delete_images(creation.image_key, creation.thumbnail_key)
        except Exception as e:
            logger.warning(
                "Failed to cleanup S3 after DynamoDB error for %s: %s",
                creation.creation_id,
                str(e),
            )
