"""
Unit tests for the R2 storage service.
"""

import pytest
from unittest.mock import Mock
from botocore.exceptions import ClientError
from app.config import Settings
from app.domain.models.base import ExternalServiceError
from app.infrastructure.storage.storage_service import StorageService


def r2_settings(**overrides):
    data = dict(
        cloudflare_r2_account_id="acct",
        cloudflare_r2_access_key_id="key",
        cloudflare_r2_secret_access_key="secret",
        cloudflare_r2_bucket_name="blytz-uploads",
    )
    data.update(overrides)
    return Settings(**data)


class TestStorageService:

    def setup_method(self):
        self.client = Mock()
        self.service = StorageService(r2_settings(), client=self.client)

    def test_requires_configuration(self):
        with pytest.raises(ExternalServiceError):
            StorageService(Settings(cloudflare_r2_account_id=None, cloudflare_r2_bucket_name=None))

    def test_generate_upload_url(self):
        self.client.generate_presigned_url.return_value = "https://signed"

        url = self.service.generate_upload_url("va_resume/u1/1-cv.pdf", "application/pdf", 3600)

        assert url == "https://signed"
        self.client.generate_presigned_url.assert_called_once_with(
            "put_object",
            Params={"Bucket": "blytz-uploads", "Key": "va_resume/u1/1-cv.pdf", "ContentType": "application/pdf"},
            ExpiresIn=3600,
        )

    def test_head_object(self):
        self.client.head_object.return_value = {
            "ContentLength": 2048, "ETag": '"abc123"', "ContentType": "application/pdf"
        }

        stored = self.service.head_object("va_resume/u1/1-cv.pdf")

        assert stored.size == 2048
        assert stored.etag == "abc123"
        assert stored.content_type == "application/pdf"

    def test_head_missing_object(self):
        self.client.head_object.side_effect = ClientError({"Error": {"Code": "404"}}, "HeadObject")
        assert self.service.head_object("missing") is None

    def test_head_object_other_error(self):
        self.client.head_object.side_effect = ClientError({"Error": {"Code": "403"}}, "HeadObject")
        with pytest.raises(ExternalServiceError):
            self.service.head_object("forbidden")

    def test_delete_object(self):
        self.service.delete_object("va_resume/u1/1-cv.pdf")
        self.client.delete_object.assert_called_once_with(Bucket="blytz-uploads", Key="va_resume/u1/1-cv.pdf")

    def test_public_url_prefers_cdn(self):
        service = StorageService(r2_settings(cloudflare_r2_public_url="https://cdn.blytz.work/"), client=self.client)
        assert service.public_url("a/b/c.png") == "https://cdn.blytz.work/a/b/c.png"

    def test_public_url_falls_back_to_endpoint(self):
        assert self.service.public_url("a/b/c.png") == (
            "https://acct.r2.cloudflarestorage.com/blytz-uploads/a/b/c.png"
        )
