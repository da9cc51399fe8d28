"""
NPU Creations — Image Storage Service
=======================================

What:  Decodes the base64 image, stores it and its thumbnail in S3, and deletes
       both during compensation.
Why:   Centralizes all object-store operations behind one small interface.
How:   Strict base64 decode, then two put_object calls with deterministic keys.
Who:   Called by CreationService during the upload and compensation steps.

Object layout:
    s3://<bucket>/
    ├── images/
    │   └── <creation_id>.jpg
    └── thumbnails/
        └── <creation_id>.jpg

Validation happens before the first put_object: an empty or undecodable
payload never produces a blob.
"""

import base64
import binascii
import logging
from typing import NamedTuple

from botocore.exceptions import BotoCoreError, ClientError

from creations.exceptions import (
    InvalidImageDataError,
    StorageCleanupError,
    UploadError,
)

logger = logging.getLogger(__name__)

IMAGE_CONTENT_TYPE = "image/jpeg"
IMAGE_PREFIX = "images/"
THUMBNAIL_PREFIX = "thumbnails/"


class UploadResult(NamedTuple):
    image_key: str
    thumbnail_key: str


def image_key_for(creation_id: str) -> str:
    return f"{IMAGE_PREFIX}{creation_id}.jpg"


def thumbnail_key_for(creation_id: str) -> str:
    return f"{THUMBNAIL_PREFIX}{creation_id}.jpg"


def decode_image_data(image_data: str) -> bytes:
    """
    Decode a base64 image, stripping an optional `data:...;base64,` prefix.

    Raises:
        InvalidImageDataError: empty input, invalid base64, or empty result
    """
    if not image_data:
        raise InvalidImageDataError()

    # Everything up to the first comma is the data URL header
    _, sep, payload = image_data.partition(",")
    if not sep:
        payload = image_data

    # Line-wrapped (MIME-style) base64 is accepted; whitespace is not data
    payload = "".join(payload.split())

    try:
        decoded = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageDataError(
            message="Failed to decode base64 image data",
            context={"error": str(e)},
        )

    if not decoded:
        raise InvalidImageDataError(message="Failed to decode base64 image data")
    return decoded


class ImageService:
    """
    Manages the S3 side of a creation.

    Args:
        s3_client:   boto3 S3 client (shared, never mutated)
        bucket_name: Target bucket
    """

    def __init__(self, s3_client, bucket_name: str):
        self.s3_client = s3_client
        self.bucket_name = bucket_name

    def upload_creation_image(self, creation_id: str, image_data: str) -> UploadResult:
        """
        Upload the original image and its thumbnail.

        Steps:
            1. Decode base64 once (InvalidImageDataError, nothing uploaded)
            2. put images/<id>.jpg
            3. put thumbnails/<id>.jpg with create_thumbnail() bytes

        Raises:
            InvalidImageDataError: image_data empty or not base64
            UploadError: S3 rejected either put
        """
        image_bytes = decode_image_data(image_data)
        logger.info("Decoded image size: %d bytes", len(image_bytes))

        image_key = image_key_for(creation_id)
        thumbnail_key = thumbnail_key_for(creation_id)

        self.upload_image(image_key, image_bytes)
        self.upload_image(thumbnail_key, self.create_thumbnail(image_bytes))

        return UploadResult(image_key=image_key, thumbnail_key=thumbnail_key)

    def upload_image(self, key: str, body: bytes) -> str:
        """Put one object. Returns the key; raises UploadError on S3 failure."""
        if not key or not body:
            raise InvalidImageDataError(message="Empty key or image data")

        logger.info("Uploading image with key: %s", key)
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=body,
                ContentType=IMAGE_CONTENT_TYPE,
                ContentLength=len(body),
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to upload %s: %s", key, str(e))
            raise UploadError(
                message="Failed to upload image",
                context={"key": key, "bucket": self.bucket_name, "error": str(e)},
            )

        logger.info("Successfully uploaded image to: %s", key)
        return key

    def create_thumbnail(self, image_bytes: bytes) -> bytes:
        # TODO: resize once an image library is added to the deployment package
        return image_bytes

    def delete_images(self, image_key: str, thumbnail_key: str) -> None:
        """
        Delete the original image, then the thumbnail.

        Stops at the first failure; if the main image cannot be deleted the
        thumbnail is not attempted.

        Raises:
            StorageCleanupError: naming the key that could not be deleted
        """
        for label, key in (("main image", image_key), ("thumbnail", thumbnail_key)):
            try:
                self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
            except (ClientError, BotoCoreError) as e:
                raise StorageCleanupError(
                    message=f"Failed to delete {label}: {e}",
                    key=key,
                )
            logger.info("Deleted %s: %s", label, key)
