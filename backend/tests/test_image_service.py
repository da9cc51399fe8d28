"""
NPU Creations — Image Service Unit Tests
==========================================

What:  Tests for ImageService (decode, upload, thumbnail stub, delete).
How:   The boto3 S3 client is a MagicMock; no network calls.

Test Strategy:
    ✅ Base64 decoding with and without a data URL prefix
    ✅ Empty / undecodable payloads rejected before any put_object
    ✅ Deterministic key scheme and content type
    ✅ S3 failures surface as UploadError
    ✅ delete_images ordering and failure reporting
"""

import base64

import pytest

from creations.exceptions import (
    InvalidImageDataError,
    StorageCleanupError,
    UploadError,
    ValidationError,
)
from creations.services.image_service import (
    ImageService,
    UploadResult,
    decode_image_data,
)

BUCKET = "test-creations-bucket"


class TestDecodeImageData:
    """Tests for decode_image_data()."""

    def test_plain_base64(self, sample_image_bytes, sample_image_b64):
        assert decode_image_data(sample_image_b64) == sample_image_bytes

    def test_data_url_prefix_stripped(self, sample_image_bytes, sample_image_b64):
        data_url = f"data:image/jpeg;base64,{sample_image_b64}"
        assert decode_image_data(data_url) == sample_image_bytes

    def test_line_wrapped_base64_accepted(self, sample_image_bytes):
        """MIME-style base64 with embedded newlines decodes to the same bytes."""
        payload = sample_image_bytes * 10
        wrapped = base64.encodebytes(payload).decode()
        assert "\n" in wrapped.strip()

        assert decode_image_data(wrapped) == payload
        assert decode_image_data(f"data:image/jpeg;base64,{wrapped}") == payload

    def test_empty_rejected(self):
        with pytest.raises(InvalidImageDataError):
            decode_image_data("")

    def test_invalid_base64_rejected(self):
        with pytest.raises(InvalidImageDataError, match="decode"):
            decode_image_data("not base64 at all!!")

    def test_prefix_only_rejected(self):
        """A data URL header with no payload decodes to nothing."""
        with pytest.raises(InvalidImageDataError):
            decode_image_data("data:image/jpeg;base64,")

    def test_invalid_image_data_is_validation_error(self):
        with pytest.raises(ValidationError):
            decode_image_data("%%%")


class TestUploadCreationImage:
    """Tests for ImageService.upload_creation_image()."""

    @pytest.fixture(autouse=True)
    def _service(self, mock_s3_client):
        self.s3 = mock_s3_client
        self.service = ImageService(mock_s3_client, BUCKET)

    def test_uploads_image_then_thumbnail(self, sample_image_bytes, sample_image_b64):
        result = self.service.upload_creation_image("abc-123", sample_image_b64)

        assert result == UploadResult(
            image_key="images/abc-123.jpg",
            thumbnail_key="thumbnails/abc-123.jpg",
        )
        assert self.s3.put_object.call_count == 2

        first, second = self.s3.put_object.call_args_list
        assert first.kwargs["Key"] == "images/abc-123.jpg"
        assert second.kwargs["Key"] == "thumbnails/abc-123.jpg"
        for call in (first, second):
            assert call.kwargs["Bucket"] == BUCKET
            assert call.kwargs["ContentType"] == "image/jpeg"
            assert call.kwargs["Body"] == sample_image_bytes

    def test_thumbnail_is_copy_of_original(self, sample_image_bytes):
        assert self.service.create_thumbnail(sample_image_bytes) == sample_image_bytes

    def test_invalid_data_uploads_nothing(self):
        with pytest.raises(InvalidImageDataError):
            self.service.upload_creation_image("abc-123", "!!!not-base64!!!")
        self.s3.put_object.assert_not_called()

    def test_empty_data_uploads_nothing(self):
        with pytest.raises(InvalidImageDataError):
            self.service.upload_creation_image("abc-123", "")
        self.s3.put_object.assert_not_called()

    def test_s3_failure_raises_upload_error(self, sample_image_b64, client_error):
        self.s3.put_object.side_effect = client_error("PutObject")

        with pytest.raises(UploadError) as exc_info:
            self.service.upload_creation_image("abc-123", sample_image_b64)

        assert exc_info.value.context["key"] == "images/abc-123.jpg"
        # Thumbnail never attempted after the original failed
        assert self.s3.put_object.call_count == 1

    def test_thumbnail_failure_raises_upload_error(self, sample_image_b64, client_error):
        self.s3.put_object.side_effect = [{}, client_error("PutObject")]

        with pytest.raises(UploadError):
            self.service.upload_creation_image("abc-123", sample_image_b64)

        assert self.s3.put_object.call_count == 2


class TestDeleteImages:
    """Tests for ImageService.delete_images()."""

    @pytest.fixture(autouse=True)
    def _service(self, mock_s3_client):
        self.s3 = mock_s3_client
        self.service = ImageService(mock_s3_client, BUCKET)

    def test_deletes_main_image_then_thumbnail(self):
        self.service.delete_images("images/a.jpg", "thumbnails/a.jpg")

        keys = [c.kwargs["Key"] for c in self.s3.delete_object.call_args_list]
        assert keys == ["images/a.jpg", "thumbnails/a.jpg"]
        for call in self.s3.delete_object.call_args_list:
            assert call.kwargs["Bucket"] == BUCKET

    def test_main_image_failure_reported(self, client_error):
        self.s3.delete_object.side_effect = client_error("DeleteObject")

        with pytest.raises(StorageCleanupError, match="main image") as exc_info:
            self.service.delete_images("images/a.jpg", "thumbnails/a.jpg")

        assert exc_info.value.key == "images/a.jpg"
        assert self.s3.delete_object.call_count == 1

    def test_thumbnail_failure_reported(self, client_error):
        self.s3.delete_object.side_effect = [{}, client_error("DeleteObject")]

        with pytest.raises(StorageCleanupError, match="thumbnail") as exc_info:
            self.service.delete_images("images/a.jpg", "thumbnails/a.jpg")

        assert exc_info.value.key == "thumbnails/a.jpg"


def test_round_trip_of_large_payload(mock_s3_client):
    """Payloads well beyond a single base64 line still decode in one piece."""
    payload = bytes(range(256)) * 64
    service = ImageService(mock_s3_client, BUCKET)

    service.upload_creation_image("big", base64.b64encode(payload).decode())

    assert mock_s3_client.put_object.call_args_list[0].kwargs["Body"] == payload
