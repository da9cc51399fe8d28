"""
NPU Creations — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (mocked S3/DynamoDB, sample payloads).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── clear_caches: Resets cached settings, clients and services
    ├── mock_s3_client: MagicMock standing in for the boto3 S3 client
    ├── mock_table: MagicMock standing in for the DynamoDB Table resource
    ├── sample_image_bytes / sample_image_b64: Tiny JPEG payload
    └── valid_body: Request body with every field populated
"""

import base64
import os
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any settings are loaded
os.environ["BUCKET_NAME"] = "test-creations-bucket"
os.environ["TABLE_NAME"] = "test-creations-table"
os.environ["AWS_REGION"] = "us-east-1"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests


def make_client_error(operation: str, code: str = "AccessDenied") -> ClientError:
    """Build a botocore ClientError like the one S3/DynamoDB raise."""
    return ClientError(
        {"Error": {"Code": code, "Message": f"{operation} was denied"}},
        operation,
    )


@pytest.fixture
def client_error():
    """Factory fixture: client_error("PutObject") → botocore ClientError."""
    return make_client_error


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture(autouse=True)
def clear_caches():
    """
    Drop every lru_cache'd singleton before and after each test.

    Why: Tests patch environment variables and client factories; a cached
    instance from a previous test would hide those patches.
    """
    from creations import aws, config, handler

    def _clear():
        config.get_settings.cache_clear()
        aws.get_s3_client.cache_clear()
        aws.get_dynamodb_table.cache_clear()
        handler.get_creation_service.cache_clear()

    _clear()
    yield
    _clear()


@pytest.fixture
def mock_s3_client():
    """S3 client whose put_object/delete_object succeed unless told otherwise."""
    client = MagicMock()
    client.put_object.return_value = {"ETag": '"abc"'}
    client.delete_object.return_value = {}
    return client


@pytest.fixture
def mock_table():
    """DynamoDB Table whose put_item succeeds unless told otherwise."""
    table = MagicMock()
    table.put_item.return_value = {}
    return table


@pytest.fixture
def sample_image_bytes():
    """
    Minimal JPEG: Start of Image (FFD8) + JFIF marker + End of Image (FFD9).

    Not a real photograph; nothing in the function inspects image content.
    """
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def sample_image_b64(sample_image_bytes):
    return base64.b64encode(sample_image_bytes).decode("ascii")


@pytest.fixture
def valid_body(sample_image_b64):
    return {
        "element_name": "sword",
        "title": "Flaming Sword",
        "description": "A sword that is on fire",
        "image_data": sample_image_b64,
        "user_id": "u1",
        "tags": ["fire", "weapon"],
    }
