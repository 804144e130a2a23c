"""
Unit tests for VA and company profiles.
"""

import pytest
from app.domain.models.base import ValidationError
from app.domain.models.profile import VAProfile, Company


def make_va(**overrides):
    data = dict(
        user_id="u1",
        name="Maria Santos",
        country="Philippines",
        hourly_rate=12.5,
        skills=["Data Entry", "Customer Support"],
    )
    data.update(overrides)
    return VAProfile(**data)


class TestVAProfile:

    def test_create_profile(self):
        profile = make_va()
        assert profile.availability is True
        assert profile.profile_views == 0
        assert profile.total_reviews == 0

    @pytest.mark.parametrize("rate", [0, 0.5, 200.01, 500])
    def test_hourly_rate_bounds(self, rate):
        with pytest.raises(ValidationError) as exc:
            make_va(hourly_rate=rate)
        assert exc.value.field == "hourly_rate"

    def test_rate_limits_are_inclusive(self):
        assert make_va(hourly_rate=1).hourly_rate == 1
        assert make_va(hourly_rate=200).hourly_rate == 200

    def test_requires_skill(self):
        with pytest.raises(ValidationError):
            make_va(skills=[])

    def test_short_name_rejected(self):
        with pytest.raises(ValidationError):
            make_va(name="M")

    def test_short_bio_rejected(self):
        with pytest.raises(ValidationError):
            make_va(bio="Too short")

    def test_update_ignores_none_values(self):
        profile = make_va()
        profile.update(name=None, country="Colombia")
        assert profile.name == "Maria Santos"
        assert profile.country == "Colombia"

    def test_update_revalidates(self):
        profile = make_va()
        with pytest.raises(ValidationError):
            profile.update(hourly_rate=1000)

    def test_record_view(self):
        profile = make_va()
        profile.record_view()
        profile.record_view()
        assert profile.profile_views == 2


class TestCompany:

    def test_create_company(self):
        company = Company(user_id="u2", name="Acme Inc", country="USA", company_size="11-50")
        assert company.verification_level == "basic"
        assert company.values == []

    def test_invalid_company_size(self):
        with pytest.raises(ValidationError):
            Company(user_id="u2", name="Acme Inc", country="USA", company_size="huge")

    def test_blank_website_normalized(self):
        company = Company(user_id="u2", name="Acme Inc", country="USA", website="  ")
        assert company.website is None

    def test_founded_year_in_future_rejected(self):
        with pytest.raises(ValidationError):
            Company(user_id="u2", name="Acme Inc", country="USA", founded_year=3000)

    def test_short_description_rejected(self):
        with pytest.raises(ValidationError):
            Company(user_id="u2", name="Acme Inc", country="USA", description="Small")
