"""
NPU Creations — AWS Client Factory
====================================

What:  Builds the boto3 S3 client and DynamoDB table handle used by the services.
Why:   Client construction is the slowest part of a cold start. Building the
       clients once and reusing them across warm invocations keeps latency flat.
How:   lru_cache on each factory; a shared botocore Config fixes timeouts and
       disables SDK retries (every external call is attempted exactly once).
Who:   Called by handler.get_creation_service() during cold start.

The returned objects are never mutated after construction.
"""

from functools import lru_cache

import boto3
from botocore.config import Config

from creations.config import Settings, get_settings


def build_client_config(settings: Settings) -> Config:
    """Shared botocore config: fixed timeouts, single attempt."""
    return Config(
        region_name=settings.aws_region,
        connect_timeout=settings.aws_connect_timeout,
        read_timeout=settings.aws_read_timeout,
        retries={"max_attempts": 1, "mode": "standard"},
    )


@lru_cache
def get_s3_client():
    """Cached S3 client for the configured region."""
    settings = get_settings()
    return boto3.client("s3", config=build_client_config(settings))


@lru_cache
def get_dynamodb_table():
    """Cached DynamoDB Table resource for the configured table."""
    settings = get_settings()
    dynamodb = boto3.resource("dynamodb", config=build_client_config(settings))
    return dynamodb.Table(settings.table_name)
