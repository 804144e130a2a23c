"""
Unit tests for ProfileCompletionService.
"""

from app.domain.models.profile import VAProfile, Company
from app.domain.services.profile_completion import ProfileCompletionService


class TestProfileCompletionService:

    def setup_method(self):
        self.service = ProfileCompletionService()

    def test_missing_profiles_score_zero(self):
        assert self.service.va_completion(None) == 0
        assert self.service.company_completion(None) == 0

    def test_minimal_va_profile(self):
        profile = VAProfile(
            user_id="u1", name="Maria Santos", country="Philippines",
            hourly_rate=12, skills=["Data Entry"],
        )
        # name, country, rate and skills: 4 of 11
        assert self.service.va_completion(profile) == 36

    def test_full_va_profile(self):
        profile = VAProfile(
            user_id="u1",
            name="Maria Santos",
            country="Philippines",
            hourly_rate=12,
            skills=["Data Entry"],
            bio="Experienced virtual assistant.",
            email="maria@example.com",
            phone="+63 900 000 0000",
            timezone="Asia/Manila",
            avatar_url="https://cdn.example.com/a.png",
            resume_url="https://cdn.example.com/r.pdf",
            video_intro_url="https://cdn.example.com/v.mp4",
        )
        assert self.service.va_completion(profile) == 100

    def test_minimal_company(self):
        company = Company(user_id="u2", name="Acme Inc", country="USA")
        # name and country: 2 of 11
        assert self.service.company_completion(company) == 18
