"""Profile completion scoring.
Each profile kind is scored over eleven equally weighted checks.
"""

from typing import Any, List, Optional

from app.domain.models.profile import VAProfile, Company


def _filled(value: Any, longer_than: int = 0) -> bool:
    return bool(value) and len(value) > longer_than


class ProfileCompletionService:
    """
    Domain service computing how complete a profile is, as a rounded percentage.
    """

    @staticmethod
    def _score(checks: List[bool]) -> int:
        return round(sum(1 for check in checks if check) / len(checks) * 100)

    def va_completion(self, profile: Optional[VAProfile]) -> int:
        if profile is None:
            return 0
        return self._score([
            _filled(profile.name),
            _filled(profile.bio, 10),
            _filled(profile.country),
            (profile.hourly_rate or 0) > 0,
            _filled(profile.skills),
            _filled(profile.email),
            _filled(profile.phone),
            _filled(profile.timezone),
            _filled(profile.avatar_url),
            _filled(profile.resume_url),
            _filled(profile.video_intro_url),
        ])

    def company_completion(self, company: Optional[Company]) -> int:
        if company is None:
            return 0
        return self._score([
            _filled(company.name),
            _filled(company.bio, 10),
            _filled(company.country),
            _filled(company.industry),
            _filled(company.company_size),
            _filled(company.website),
            _filled(company.email),
            _filled(company.phone),
            _filled(company.logo_url),
            _filled(company.description, 20),
            _filled(company.mission, 5),
        ])
