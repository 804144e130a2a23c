"""
Profile entities: the VA side and the company side of the marketplace.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from .base import AggregateRoot, ValidationError, check_length


COMPANY_SIZES = ("1-10", "11-50", "51-200", "201+")


@dataclass(kw_only=True, eq=False)
class VAProfile(AggregateRoot):
    """Virtual assistant profile, one per user."""

    user_id: str
    name: str
    country: str
    hourly_rate: float
    skills: List[str] = field(default_factory=list)
    bio: Optional[str] = None
    availability: bool = True
    email: Optional[str] = None
    phone: Optional[str] = None
    timezone: Optional[str] = None
    languages: Optional[Any] = None
    work_experience: Optional[Any] = None
    education: Optional[Any] = None
    avatar_url: Optional[str] = None
    resume_url: Optional[str] = None
    video_intro_url: Optional[str] = None
    profile_views: int = 0
    average_rating: Optional[float] = None
    total_reviews: int = 0

    def __post_init__(self):
        super().__post_init__()
        self.validate()

    def validate(self) -> None:
        if not self.user_id:
            raise ValidationError("User ID is required", "user_id")
        check_length(self.name, "name", "Name", 2, 100)
        check_length(self.country, "country", "Country", 2, 50)
        if self.hourly_rate is None or self.hourly_rate < 1:
            raise ValidationError("Hourly rate must be at least $1", "hourly_rate")
        if self.hourly_rate > 200:
            raise ValidationError("Hourly rate must be at most $200", "hourly_rate")
        if not self.skills:
            raise ValidationError("At least one skill is required", "skills")
        check_length(self.bio, "bio", "Bio", 10)

    def update(self, **changes: Any) -> None:
        """Apply a partial update and re-validate."""
        self.apply_changes(changes)
        self.validate()
        self.mark_as_updated()

    def record_view(self) -> None:
        self.profile_views += 1


@dataclass(kw_only=True, eq=False)
class Company(AggregateRoot):
    """Hiring company profile, one per user."""

    user_id: str
    name: str
    country: str
    industry: Optional[str] = None
    bio: Optional[str] = None
    website: Optional[str] = None
    company_size: Optional[str] = None
    founded_year: Optional[int] = None
    description: Optional[str] = None
    mission: Optional[str] = None
    values: List[str] = field(default_factory=list)
    benefits: List[str] = field(default_factory=list)
    email: Optional[str] = None
    phone: Optional[str] = None
    logo_url: Optional[str] = None
    social_links: Optional[Dict[str, str]] = None
    tech_stack: List[str] = field(default_factory=list)
    verification_level: str = "basic"

    def __post_init__(self):
        super().__post_init__()
        if self.website is not None and not self.website.strip():
            self.website = None
        self.validate()

    def validate(self) -> None:
        if not self.user_id:
            raise ValidationError("User ID is required", "user_id")
        check_length(self.name, "name", "Company name", 2, 100)
        check_length(self.country, "country", "Country", 2, 50)
        check_length(self.industry, "industry", "Industry", 2)
        check_length(self.bio, "bio", "Bio", 10)
        check_length(self.description, "description", "Description", 20)
        check_length(self.mission, "mission", "Mission statement", 10)
        if self.company_size is not None and self.company_size not in COMPANY_SIZES:
            raise ValidationError(
                f"Company size must be one of: {', '.join(COMPANY_SIZES)}", "company_size"
            )
        if self.founded_year is not None:
            if self.founded_year < 1800 or self.founded_year > date.today().year:
                raise ValidationError("Founded year is out of range", "founded_year")

    def update(self, **changes: Any) -> None:
        """Apply a partial update and re-validate."""
        self.apply_changes(changes)
        if self.website is not None and not self.website.strip():
            self.website = None
        self.validate()
        self.mark_as_updated()
