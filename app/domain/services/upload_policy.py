"""Upload rules: which files each upload slot accepts and where they are stored.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from app.domain.models.base import ValidationError, PermissionDeniedError


MB = 1024 * 1024

ALLOWED_TYPES: Dict[str, List[str]] = {
    "va_portfolio": ["image/jpeg", "image/png", "image/gif", "application/pdf", "video/mp4"],
    "va_resume": [
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ],
    "va_video": ["video/mp4", "video/webm", "video/quicktime"],
    "company_logo": ["image/jpeg", "image/png", "image/gif", "image/svg+xml"],
    "profile_picture": ["image/jpeg", "image/png", "image/gif"],
}

MAX_SIZES: Dict[str, int] = {
    "va_portfolio": 50 * MB,
    "va_resume": 10 * MB,
    "va_video": 500 * MB,
    "company_logo": 5 * MB,
    "profile_picture": 5 * MB,
}

DEFAULT_MAX_SIZE = 10 * MB
REQUEST_MAX_SIZE = 100 * MB

_SAFE_CHARS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-"


class UploadPolicy:
    """
    Domain service validating uploads and building object keys.
    """

    def max_size_for(self, upload_type: str) -> int:
        return MAX_SIZES.get(upload_type, DEFAULT_MAX_SIZE)

    def validate(self, upload_type: str, file_type: str, file_size: int) -> None:
        if upload_type not in ALLOWED_TYPES:
            raise ValidationError(
                f"Invalid upload type. Allowed: {', '.join(ALLOWED_TYPES)}", "upload_type"
            )
        allowed = ALLOWED_TYPES[upload_type]
        if file_type not in allowed:
            raise ValidationError(
                f"File type not allowed for {upload_type}. Allowed types: {', '.join(allowed)}",
                "file_type",
            )
        if file_size <= 0:
            raise ValidationError("File size must be positive", "file_size")
        max_size = min(self.max_size_for(upload_type), REQUEST_MAX_SIZE)
        if file_size > max_size:
            raise ValidationError(
                f"File too large. Maximum size: {max_size / MB:.0f}MB", "file_size"
            )

    @staticmethod
    def sanitize_file_name(file_name: str) -> str:
        safe_name = "".join(c if c in _SAFE_CHARS else "_" for c in file_name)
        if len(safe_name) > 200:
            path = Path(safe_name)
            safe_name = f"{path.stem[:180]}{path.suffix}"
        return safe_name

    def build_key(self, upload_type: str, user_id: str, file_name: str,
                  now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        timestamp = int(now.timestamp() * 1000)
        return f"{upload_type}/{user_id}/{timestamp}-{self.sanitize_file_name(file_name)}"

    @staticmethod
    def ensure_owner(key: str, user_id: str) -> None:
        """Keys are scoped as {upload_type}/{user_id}/...; only the owner may touch them."""
        parts = key.split("/")
        if len(parts) < 3 or parts[1] != user_id or ".." in parts:
            raise PermissionDeniedError("Access denied to this file")
