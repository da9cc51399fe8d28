"""
NPU Creations — Application Configuration
==========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on cold start.
       Fails fast if the bucket, table or region is missing.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and get_settings() caches a single instance.
Who:   Imported by the AWS client factory, the services and the handler.
When:  Loaded once per Lambda execution environment (first invocation).

Design Decision:
    get_settings() is cached instead of a module-level `settings = Settings()`
    because BUCKET_NAME, TABLE_NAME and AWS_REGION have no defaults. A module-level
    instance would make importing any module fail outside a configured Lambda.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The three storage settings are required. Everything else has a default that
    matches the deployed function.
    """

    # ── Storage ───────────────────────────────────────────────────────────
    # What: S3 bucket that receives images/ and thumbnails/ objects
    bucket_name: str = Field(min_length=1, description="S3 bucket for creation images")

    # What: DynamoDB table keyed by creation_id
    table_name: str = Field(min_length=1, description="DynamoDB table for creation records")

    # What: Region for both clients and for the public object URL
    # Lambda sets AWS_REGION automatically; it is still required here so that
    # local runs fail loudly instead of talking to the wrong region.
    aws_region: str = Field(min_length=1, description="AWS region of bucket and table")

    # What: Prefix for image_url / thumbnail_url in responses
    # Default: https://{bucket}.s3.{region}.amazonaws.com/
    public_base_url: Optional[str] = Field(default=None)

    # ── AWS client timeouts (seconds) ─────────────────────────────────────
    # Fixed per process; not configurable per call.
    aws_connect_timeout: int = Field(default=5, ge=1, le=60)
    aws_read_timeout: int = Field(default=10, ge=1, le=300)

    # ── Logging ───────────────────────────────────────────────────────────
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # BUCKET_NAME and bucket_name both work
        extra="ignore",
    )

    @property
    def base_url(self) -> str:
        """
        What: Public URL prefix joined with object keys in responses.
        Why:  Always ends with '/', so callers can append `images/{id}.jpg` directly.
        """
        url = self.public_base_url or (
            f"https://{self.bucket_name}.s3.{self.aws_region}.amazonaws.com/"
        )
        return url if url.endswith("/") else url + "/"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
