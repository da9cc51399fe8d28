"""
NPU Creations — Logging Setup and Request Correlation
=======================================================

What:  Configures the root logger and tags every record with the Lambda request ID.
Why:   CloudWatch interleaves output from warm containers; the request ID is the
       only reliable way to group the lines of one invocation.
How:   A ContextVar holds the current aws_request_id. RequestIDFilter copies it
       onto each LogRecord so the format string can reference %(request_id)s.
When:  setup_logging() runs once per execution environment; bind_request_id()
       runs at the start of every invocation.

What we log vs what we DON'T log (privacy):
    ✅ Log: creation_id, object keys, decoded byte counts, error kinds
    ❌ Don't log: request body, base64 image data
"""

import logging
import sys
from contextvars import ContextVar

# "-" outside an invocation (cold start, tests)
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s"


class RequestIDFilter(logging.Filter):
    """Injects the current request ID into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def bind_request_id(request_id: str) -> None:
    """Set the request ID used by log records for the rest of this invocation."""
    request_id_var.set(request_id or "-")


def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire function.

    What:    Root logger → stdout with request-ID-aware format.
    Why:     Lambda forwards stdout to CloudWatch Logs.
    When:    Called once during cold start, before services are built.

    The Lambda Python runtime installs its own handler on the root logger;
    force=True replaces it so there is exactly one format.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDFilter())

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # botocore logs every request at DEBUG/INFO
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
