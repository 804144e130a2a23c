"""
Unit tests for UploadPolicy.
"""

import pytest
from datetime import datetime, timezone
from app.domain.models.base import ValidationError, PermissionDeniedError
from app.domain.services.upload_policy import UploadPolicy, MB


class TestUploadPolicy:

    def setup_method(self):
        self.policy = UploadPolicy()

    def test_valid_upload(self):
        self.policy.validate("va_resume", "application/pdf", 2 * MB)

    def test_unknown_upload_type(self):
        with pytest.raises(ValidationError) as exc:
            self.policy.validate("memes", "image/png", 10)
        assert exc.value.field == "upload_type"

    def test_type_not_allowed_for_slot(self):
        with pytest.raises(ValidationError) as exc:
            self.policy.validate("company_logo", "application/pdf", 10)
        assert exc.value.field == "file_type"

    def test_too_large(self):
        with pytest.raises(ValidationError) as exc:
            self.policy.validate("company_logo", "image/png", 6 * MB)
        assert exc.value.field == "file_size"

    def test_request_cap_applies_to_video(self):
        """Videos allow 500MB per slot but requests are capped at 100MB."""
        with pytest.raises(ValidationError):
            self.policy.validate("va_video", "video/mp4", 101 * MB)

    def test_non_positive_size(self):
        with pytest.raises(ValidationError):
            self.policy.validate("va_resume", "application/pdf", 0)

    def test_build_key(self):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        key = self.policy.build_key("va_resume", "user-1", "my resume (final).pdf", now=now)
        assert key == f"va_resume/user-1/{int(now.timestamp() * 1000)}-my_resume__final_.pdf"

    def test_long_file_name_truncated(self):
        name = "a" * 300 + ".pdf"
        safe = self.policy.sanitize_file_name(name)
        assert len(safe) == 184
        assert safe.endswith(".pdf")

    def test_ensure_owner(self):
        self.policy.ensure_owner("va_resume/user-1/123-cv.pdf", "user-1")

    @pytest.mark.parametrize("key", [
        "va_resume/user-2/123-cv.pdf",
        "cv.pdf",
        "va_resume/user-1/../user-2/cv.pdf",
    ])
    def test_ensure_owner_denied(self, key):
        with pytest.raises(PermissionDeniedError):
            self.policy.ensure_owner(key, "user-1")
