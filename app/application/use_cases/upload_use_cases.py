"""
Upload use cases for the application layer.
Implements presigned uploads to object storage scoped to the uploading user.
"""

import logging
from datetime import datetime, timedelta, timezone

from app.application.use_cases.base_use_case import (
    AuthorizedUseCase, CommandUseCase, QueryUseCase
)
from app.application.dto.upload_dto import (
    PresignedUrlRequestDTO, ConfirmUploadRequestDTO, PresignedUrlResponseDTO,
    UploadedFileResponseDTO, DeleteFileResponseDTO
)
from app.domain.models.base import EntityNotFoundError
from app.domain.services.gateways import FileStorage
from app.domain.services.upload_policy import UploadPolicy


logger = logging.getLogger(__name__)


class GeneratePresignedUrlUseCase(AuthorizedUseCase, CommandUseCase[PresignedUrlRequestDTO, PresignedUrlResponseDTO]):
    """Validate an upload and hand out a short-lived PUT URL for it."""

    def __init__(self, storage: FileStorage, expires_in: int = 3600):
        super().__init__()
        self.storage = storage
        self.expires_in = expires_in
        self.policy = UploadPolicy()

    async def _execute_command_logic(self, request: PresignedUrlRequestDTO) -> PresignedUrlResponseDTO:
        self.policy.validate(request.upload_type, request.file_type, request.file_size)
        key = self.policy.build_key(request.upload_type, self.current_user_id, request.file_name)
        upload_url = self.storage.generate_upload_url(key, request.file_type, self.expires_in)
        logger.info(f"Presigned upload URL issued for {key}")

        return PresignedUrlResponseDTO(
            upload_url=upload_url,
            key=key,
            public_url=self.storage.public_url(key),
            expires_at=datetime.now(timezone.utc) + timedelta(seconds=self.expires_in),
            max_size=self.policy.max_size_for(request.upload_type),
        )


class ConfirmUploadUseCase(AuthorizedUseCase, QueryUseCase[ConfirmUploadRequestDTO, UploadedFileResponseDTO]):

    def __init__(self, storage: FileStorage):
        super().__init__()
        self.storage = storage
        self.policy = UploadPolicy()

    async def _execute_query_logic(self, request: ConfirmUploadRequestDTO) -> UploadedFileResponseDTO:
        self.policy.ensure_owner(request.key, self.current_user_id)
        stored = self.storage.head_object(request.key)
        if stored is None:
            raise EntityNotFoundError("File")
        return UploadedFileResponseDTO(
            key=stored.key,
            size=stored.size,
            etag=stored.etag,
            content_type=stored.content_type,
            url=self.storage.public_url(stored.key),
        )


class DeleteFileUseCase(AuthorizedUseCase, CommandUseCase[str, DeleteFileResponseDTO]):

    def __init__(self, storage: FileStorage):
        super().__init__()
        self.storage = storage
        self.policy = UploadPolicy()

    async def _execute_command_logic(self, key: str) -> DeleteFileResponseDTO:
        self.policy.ensure_owner(key, self.current_user_id)
        self.storage.delete_object(key)
        logger.info(f"Deleted file {key}")
        return DeleteFileResponseDTO(key=key)
