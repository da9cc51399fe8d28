"""
NPU Creations — Lambda Entry Point
====================================

What:  `lambda_handler(event, context)` for the create-creation function.
Why:   Keeps AWS event shapes out of the service layer: this module parses the
       API Gateway proxy event, runs CreationService, and builds the proxy response.
How:   Services are built once per execution environment (get_creation_service
       is cached) and reused by every warm invocation.
When:  Configured as the function handler: `creations.handler.lambda_handler`.

Request Flow:
    1. Bind aws_request_id to the logging context
    2. Parse event["body"] into CreateCreationRequest (ValidationError → 400)
    3. CreationService.create_creation() → CreationResult
    4. Serialize result into {"statusCode", "headers", "body"}

Any exception that escapes steps 1-4 (including missing configuration) is
reported as InternalError with status 500.
"""

import base64
import binascii
import json
import logging
from functools import lru_cache
from typing import Any, Dict, Optional

import pydantic

from creations.aws import get_dynamodb_table, get_s3_client
from creations.config import get_settings
from creations.exceptions import ConfigurationError, ErrorKind, ValidationError
from creations.logging_config import bind_request_id, request_id_var, setup_logging
from creations.schemas.creation import CreateCreationRequest, ErrorResponse
from creations.services.creation_repository import CreationRepository
from creations.services.creation_service import CreationResult, CreationService
from creations.services.image_service import ImageService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Cold Start
# ══════════════════════════════════════════════════════════════════════════

@lru_cache
def get_creation_service() -> CreationService:
    """
    Build logging, AWS clients and services once per execution environment.

    Raises:
        ConfigurationError: BUCKET_NAME, TABLE_NAME or AWS_REGION missing/invalid
    """
    try:
        settings = get_settings()
    except pydantic.ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ConfigurationError(
            message="Required environment variables not set",
            context={"fields": missing},
        )

    setup_logging(settings.log_level)

    service = CreationService(
        image_service=ImageService(get_s3_client(), settings.bucket_name),
        repository=CreationRepository(get_dynamodb_table()),
        base_url=settings.base_url,
    )
    logger.info(
        "Initialized AWS services (bucket=%s, table=%s, region=%s)",
        settings.bucket_name,
        settings.table_name,
        settings.aws_region,
    )
    return service


# ══════════════════════════════════════════════════════════════════════════
# Request Parsing
# ══════════════════════════════════════════════════════════════════════════

def parse_request(event: Dict[str, Any]) -> CreateCreationRequest:
    """
    Extract and validate the creation body from an API Gateway proxy event.

    Accepts `body` as a JSON string (the normal proxy shape), a base64 JSON
    string when isBase64Encoded is set, or an already-decoded dict (direct
    invocation).

    Raises:
        ValidationError: missing body, malformed JSON, or missing/invalid fields
    """
    if not isinstance(event, dict) or event.get("body") is None:
        raise ValidationError("Missing 'body' in request", field="body")

    body = event["body"]
    if isinstance(body, str):
        if event.get("isBase64Encoded"):
            try:
                body = base64.b64decode(body).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError):
                raise ValidationError("Failed to decode base64 body", field="body")
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            raise ValidationError("Failed to parse body JSON", field="body")

    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object", field="body")

    try:
        request = CreateCreationRequest.model_validate(body)
    except pydantic.ValidationError as e:
        errors = e.errors()
        fields = sorted({str(err["loc"][0]) for err in errors if err["loc"]})
        missing = any(err["type"] == "missing" for err in errors)
        raise ValidationError(
            message="Missing required fields" if missing else "Invalid field types",
            context={"fields": fields},
        )

    logger.info(
        "Parsed creation request: element_name=%s, tags=%d, image_data=%d chars",
        request.element_name,
        len(request.tags),
        len(request.image_data),
    )
    return request


# ══════════════════════════════════════════════════════════════════════════
# Response Building
# ══════════════════════════════════════════════════════════════════════════

def _proxy_response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
            "X-Request-ID": request_id_var.get(),
        },
        "body": json.dumps(body),
    }


def error_response(kind: ErrorKind, message: str, status_code: int) -> Dict[str, Any]:
    rid = request_id_var.get()
    body = ErrorResponse(error=kind.value, message=message, request_id=rid)
    return _proxy_response(status_code, body.to_body())


def result_response(result: CreationResult) -> Dict[str, Any]:
    if result.ok:
        return _proxy_response(result.status_code, result.response.to_body())
    return error_response(result.error_kind, result.message, result.status_code)


# ══════════════════════════════════════════════════════════════════════════
# Handler
# ══════════════════════════════════════════════════════════════════════════

def lambda_handler(event: Dict[str, Any], context: Optional[Any] = None) -> Dict[str, Any]:
    """
    Handle one create-creation invocation.

    Returns:
        API Gateway proxy response. 201 with CreationResponse on success,
        otherwise ErrorResponse with the error kind and matching status.
    """
    bind_request_id(getattr(context, "aws_request_id", "") or "")

    try:
        service = get_creation_service()
        logger.info("Handling create-creation request")

        try:
            request = parse_request(event)
        except ValidationError as e:
            logger.warning("Validation error: %s | Context: %s", e.message, e.context)
            return error_response(e.kind, e.message, e.status_code)

        result = service.create_creation(request.to_creation())
        if not result.ok:
            logger.warning("Creation failed: %s: %s", result.error_kind.value, result.message)
        return result_response(result)

    except ConfigurationError as e:
        logger.error("Configuration error: %s | Context: %s", e.message, e.context)
        return error_response(ErrorKind.INTERNAL, e.message, 500)
    except Exception as e:
        logger.error("Fatal error: %s", str(e), exc_info=True)
        return error_response(
            ErrorKind.INTERNAL, "An unexpected error occurred. Please try again.", 500
        )
