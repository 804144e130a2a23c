"""
Profile DTOs for the application layer.
Covers VA profiles and company profiles.
"""

from typing import Any, Dict, List, Optional
from pydantic import Field, validator

from .base_dto import BaseDTO, CreateRequestDTO, UpdateRequestDTO, ListRequestDTO, ResponseDTO


def _clean_list(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return None
    return [value.strip() for value in values if value and value.strip()]


# VA profile
class CreateVAProfileRequestDTO(CreateRequestDTO):
    """DTO for VA profile creation."""

    name: str = Field(min_length=2, max_length=100, description="Display name")
    country: str = Field(min_length=2, max_length=50, description="Country")
    hourly_rate: float = Field(ge=1, le=200, description="Hourly rate in USD")
    skills: List[str] = Field(min_length=1, description="Skills")
    bio: Optional[str] = Field(default=None, min_length=10, max_length=2000, description="Biography")
    availability: bool = Field(default=True, description="Open to new work")
    email: Optional[str] = Field(default=None, max_length=255, description="Public contact email")
    phone: Optional[str] = Field(default=None, max_length=50)
    timezone: Optional[str] = Field(default=None, max_length=50)
    languages: Optional[Any] = None
    work_experience: Optional[Any] = None
    education: Optional[Any] = None
    avatar_url: Optional[str] = Field(default=None, max_length=500)
    resume_url: Optional[str] = Field(default=None, max_length=500)
    video_intro_url: Optional[str] = Field(default=None, max_length=500)

    @validator('skills')
    def validate_skills(cls, v):
        v = _clean_list(v)
        if not v:
            raise ValueError('At least one skill is required')
        return v


class UpdateVAProfileRequestDTO(UpdateRequestDTO):
    """DTO for partial VA profile updates."""

    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    country: Optional[str] = Field(default=None, min_length=2, max_length=50)
    hourly_rate: Optional[float] = Field(default=None, ge=1, le=200)
    skills: Optional[List[str]] = None
    bio: Optional[str] = Field(default=None, min_length=10, max_length=2000)
    availability: Optional[bool] = None
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    timezone: Optional[str] = Field(default=None, max_length=50)
    languages: Optional[Any] = None
    work_experience: Optional[Any] = None
    education: Optional[Any] = None
    avatar_url: Optional[str] = Field(default=None, max_length=500)
    resume_url: Optional[str] = Field(default=None, max_length=500)
    video_intro_url: Optional[str] = Field(default=None, max_length=500)

    @validator('skills')
    def validate_skills(cls, v):
        if v is None:
            return v
        v = _clean_list(v)
        if not v:
            raise ValueError('At least one skill is required')
        return v


class SearchVAProfilesRequestDTO(ListRequestDTO):
    """DTO for the public VA search."""

    query: Optional[str] = Field(default=None, max_length=255, description="Free-text search")
    country: Optional[str] = Field(default=None, max_length=50)
    min_rate: Optional[float] = Field(default=None, ge=0)
    max_rate: Optional[float] = Field(default=None, ge=0)
    skills: List[str] = Field(default_factory=list)
    availability: Optional[bool] = None


class VAProfileResponseDTO(ResponseDTO):
    """Public VA profile."""

    user_id: str
    name: str
    bio: Optional[str] = None
    country: str
    hourly_rate: float
    skills: List[str] = Field(default_factory=list)
    availability: bool = True
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


class OwnVAProfileResponseDTO(VAProfileResponseDTO):
    """The owner's view: contact fields and completion."""

    email: Optional[str] = None
    phone: Optional[str] = None
    completion_percentage: int = 0


# Company profile
class CreateCompanyRequestDTO(CreateRequestDTO):
    """DTO for company profile creation."""

    name: str = Field(min_length=2, max_length=100, description="Company name")
    country: str = Field(min_length=2, max_length=50, description="Country")
    industry: Optional[str] = Field(default=None, min_length=2, max_length=100)
    bio: Optional[str] = Field(default=None, min_length=10, max_length=2000)
    website: Optional[str] = Field(default=None, max_length=500)
    company_size: Optional[str] = Field(default=None, description="1-10, 11-50, 51-200 or 201+")
    founded_year: Optional[int] = None
    description: Optional[str] = Field(default=None, min_length=20, max_length=5000)
    mission: Optional[str] = Field(default=None, min_length=10, max_length=2000)
    values: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    logo_url: Optional[str] = Field(default=None, max_length=500)
    social_links: Optional[Dict[str, str]] = None
    tech_stack: List[str] = Field(default_factory=list)


class UpdateCompanyRequestDTO(UpdateRequestDTO):
    """DTO for partial company profile updates."""

    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    country: Optional[str] = Field(default=None, min_length=2, max_length=50)
    industry: Optional[str] = Field(default=None, min_length=2, max_length=100)
    bio: Optional[str] = Field(default=None, min_length=10, max_length=2000)
    website: Optional[str] = Field(default=None, max_length=500)
    company_size: Optional[str] = None
    founded_year: Optional[int] = None
    description: Optional[str] = Field(default=None, min_length=20, max_length=5000)
    mission: Optional[str] = Field(default=None, min_length=10, max_length=2000)
    values: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    logo_url: Optional[str] = Field(default=None, max_length=500)
    social_links: Optional[Dict[str, str]] = None
    tech_stack: Optional[List[str]] = None


class CompanyResponseDTO(ResponseDTO):
    """Public company profile."""

    user_id: str
    name: str
    bio: Optional[str] = None
    country: str
    website: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    founded_year: Optional[int] = None
    description: Optional[str] = None
    mission: Optional[str] = None
    values: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    logo_url: Optional[str] = None
    social_links: Optional[Dict[str, str]] = None
    tech_stack: List[str] = Field(default_factory=list)
    verification_level: str = "basic"


class OwnCompanyResponseDTO(CompanyResponseDTO):
    email: Optional[str] = None
    phone: Optional[str] = None
    completion_percentage: int = 0


class CompanySummaryDTO(BaseDTO):
    """Short company block embedded in job postings and matches."""

    id: int
    name: str
    country: Optional[str] = None
    industry: Optional[str] = None
    logo_url: Optional[str] = None
