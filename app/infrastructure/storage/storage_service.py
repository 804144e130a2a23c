"""
Cloudflare R2 storage service.
R2 speaks the S3 API, so uploads go through presigned PUT URLs issued by boto3.
"""

import logging
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.config import Settings, get_settings
from app.domain.models.base import ExternalServiceError
from app.domain.services.gateways import FileStorage, StoredObject


logger = logging.getLogger(__name__)


class StorageService(FileStorage):
    """Service for managing file storage in an R2 bucket."""

    def __init__(self, settings: Optional[Settings] = None, client=None):
        self.settings = settings or get_settings()
        if client is None and not self.settings.storage_configured:
            raise ExternalServiceError("storage", "File storage is not configured")

        self.bucket = self.settings.cloudflare_r2_bucket_name
        self.client = client or boto3.client(
            "s3",
            endpoint_url=self.settings.r2_endpoint_url,
            aws_access_key_id=self.settings.cloudflare_r2_access_key_id,
            aws_secret_access_key=self.settings.cloudflare_r2_secret_access_key,
            region_name="auto",
            config=Config(signature_version="s3v4"),
        )

    def generate_upload_url(self, key: str, content_type: str, expires_in: int) -> str:
        try:
            return self.client.generate_presigned_url(
                "put_object",
                Params={"Bucket": self.bucket, "Key": key, "ContentType": content_type},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to presign upload for {key}: {e}")
            raise ExternalServiceError("storage", "Failed to generate upload URL")

    def head_object(self, key: str) -> Optional[StoredObject]:
        try:
            response = self.client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in ("404", "NoSuchKey", "NotFound"):
                return None
            logger.error(f"Failed to read metadata for {key}: {e}")
            raise ExternalServiceError("storage", "Failed to read file metadata")

        return StoredObject(
            key=key,
            size=response.get("ContentLength", 0),
            etag=(response.get("ETag") or "").strip('"') or None,
            content_type=response.get("ContentType"),
        )

    def delete_object(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to delete {key}: {e}")
            raise ExternalServiceError("storage", "Failed to delete file")

    def public_url(self, key: str) -> str:
        base = self.settings.cloudflare_r2_public_url
        if base:
            return f"{base.rstrip('/')}/{key}"
        return f"{self.settings.r2_endpoint_url}/{self.bucket}/{key}"
