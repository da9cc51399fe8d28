"""
NPU Creations — Custom Exception Hierarchy
============================================

What:  Application-specific exceptions and the public error-kind tags.
Why:   The client only ever sees one of four kinds (ValidationError, UploadError,
       DatabaseError, InternalError). Each exception knows its kind and HTTP
       status, so translating a failure into a response is a lookup.
How:   Each exception class carries a message and optional context dict.
       The orchestrator turns them into a CreationResult; the Lambda handler
       turns anything left over into InternalError.
Who:   Raised by services; caught by CreationService and the handler.

Exception Hierarchy:
    CreationsError (base)        → InternalError / 500
    ├── ValidationError          → ValidationError / 400 (client can fix)
    │   └── InvalidImageDataError   empty or undecodable base64 image
    ├── UploadError              → UploadError / 500
    ├── DatabaseError            → DatabaseError / 500
    ├── StorageCleanupError      → InternalError / 500 (compensation only logs it)
    └── ConfigurationError       → InternalError / 500
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Error tags returned to callers in the `error` field."""

    VALIDATION = "ValidationError"
    UPLOAD = "UploadError"
    DATABASE = "DatabaseError"
    INTERNAL = "InternalError"


class CreationsError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CreationsError):
    """
    Raised when client input fails validation.

    When:    Missing body, malformed JSON, missing or empty required fields.
    Effect:  Nothing has been written to either store.
    """

    kind = ErrorKind.VALIDATION
    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidImageDataError(ValidationError):
    """
    Raised by ImageService when image_data is empty or is not valid base64.

    Always raised before the first put_object, so no blob exists yet.
    """

    def __init__(
        self,
        message: str = "Invalid image data format",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, field="image_data", context=context)


class UploadError(CreationsError):
    """
    Raised when the object store rejects an upload.

    Recovery:
        None needed by the caller. If the original landed but the thumbnail
        did not, the original is left behind (no compensation at this stage).
    """

    kind = ErrorKind.UPLOAD
    status_code = 500

    def __init__(
        self,
        message: str = "Failed to upload image",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(CreationsError):
    """
    Raised when the creation record could not be written.

    The message returned to the client is generic; the DynamoDB error is
    logged server-side only.
    """

    kind = ErrorKind.DATABASE
    status_code = 500

    def __init__(
        self,
        message: str = "Failed to save creation",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageCleanupError(CreationsError):
    """
    Raised by ImageService.delete_images when an object could not be deleted.

    Attributes:
        key: The object key whose deletion failed
    """

    def __init__(
        self,
        message: str = "Failed to delete uploaded image",
        key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if key:
            ctx["key"] = key
        super().__init__(message=message, context=ctx)
        self.key = key


class ConfigurationError(CreationsError):
    """Raised when required environment configuration is missing or invalid."""

    def __init__(
        self,
        message: str = "Required environment variables not set",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
