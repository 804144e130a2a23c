"""
Upload DTOs for the application layer.
Files go straight from the client to object storage through presigned URLs.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field

from .base_dto import BaseDTO, RequestDTO


class PresignedUrlRequestDTO(RequestDTO):
    """DTO for presigned upload URL requests."""

    file_name: str = Field(min_length=1, max_length=255, description="Original file name")
    file_type: str = Field(min_length=1, max_length=100, description="MIME type")
    file_size: int = Field(gt=0, description="File size in bytes")
    upload_type: str = Field(description="va_portfolio, va_resume, va_video, company_logo or profile_picture")


class ConfirmUploadRequestDTO(RequestDTO):
    key: str = Field(min_length=1, max_length=1024, description="Object key returned with the presigned URL")


class PresignedUrlResponseDTO(BaseDTO):
    upload_url: str
    key: str
    public_url: str
    expires_at: datetime
    max_size: int


class UploadedFileResponseDTO(BaseDTO):
    key: str
    size: int
    etag: Optional[str] = None
    content_type: Optional[str] = None
    url: str


class DeleteFileResponseDTO(BaseDTO):
    key: str
    deleted: bool = True
