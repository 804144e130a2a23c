"""
File upload router.
Files go straight from the client to R2 through presigned URLs.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.application.dto.upload_dto import PresignedUrlRequestDTO, ConfirmUploadRequestDTO
from app.application.use_cases.upload_use_cases import (
    GeneratePresignedUrlUseCase,
    ConfirmUploadUseCase,
    DeleteFileUseCase,
)
from app.config import Settings
from app.domain.services.gateways import FileStorage
from app.infrastructure.auth import CurrentUser
from app.infrastructure.rate_limiting import upload_rate_limit
from app.infrastructure.web.dependencies import get_app_settings, get_file_storage
from app.infrastructure.web.responses import success_response, unwrap_result


router = APIRouter()

Storage = Annotated[FileStorage, Depends(get_file_storage)]


@router.post("/presigned-url")
async def create_presigned_url(
    request: PresignedUrlRequestDTO,
    user: CurrentUser,
    storage: Storage,
    settings: Annotated[Settings, Depends(get_app_settings)],
    _: None = Depends(upload_rate_limit)
):
    """
    Get a presigned PUT URL for one file.

    - **uploadType**: va_portfolio, va_resume, va_video, company_logo or profile_picture
    - **fileType** and **fileSize** are checked against the upload type's limits
    """
    use_case = GeneratePresignedUrlUseCase(storage, expires_in=settings.upload_url_expiry_seconds)
    return success_response(unwrap_result(await use_case.set_current_user(user).execute(request)))


@router.post("/confirm")
async def confirm_upload(request: ConfirmUploadRequestDTO, user: CurrentUser, storage: Storage):
    """Check that an uploaded file landed in storage."""
    use_case = ConfirmUploadUseCase(storage).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(request)), "Upload confirmed")


@router.delete("/{key:path}")
async def delete_file(key: str, user: CurrentUser, storage: Storage):
    """Delete one of the caller's files."""
    use_case = DeleteFileUseCase(storage).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(key)), "File deleted successfully")
