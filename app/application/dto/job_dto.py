"""
Job marketplace DTOs for the application layer.
Covers job postings and proposals.
"""

from typing import Any, List, Optional
from pydantic import Field, validator

from app.domain.models.job import (
    JobPostingStatus, BidType, ProposalStatus, ExperienceLevel, EmploymentType, Urgency
)
from .base_dto import CreateRequestDTO, UpdateRequestDTO, ListRequestDTO, ResponseDTO
from .profile_dto import CompanySummaryDTO, VAProfileResponseDTO


# Job postings
class CreateJobPostingRequestDTO(CreateRequestDTO):
    """DTO for job posting creation."""

    title: str = Field(min_length=5, max_length=200, description="Job title")
    description: str = Field(min_length=20, max_length=2000, description="Job description")
    rate_range: str = Field(min_length=3, max_length=50, description="e.g. $10-20/hr")
    skills_required: List[str] = Field(description="Required skills")
    requirements: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    budget: Optional[float] = Field(default=None, ge=0)
    location: Optional[str] = Field(default=None, max_length=100)
    remote: bool = True
    category: Optional[str] = Field(default=None, max_length=100)
    experience_level: Optional[ExperienceLevel] = None
    employment_type: Optional[EmploymentType] = None
    job_type: BidType = BidType.FIXED
    duration: Optional[str] = Field(default=None, max_length=100)
    urgency: Urgency = Urgency.MEDIUM
    featured: bool = False

    @validator('skills_required')
    def validate_skills(cls, v):
        v = [skill.strip() for skill in v if skill and skill.strip()]
        if not v:
            raise ValueError('At least one skill is required')
        return v


class UpdateJobPostingRequestDTO(UpdateRequestDTO):
    """DTO for partial job posting updates."""

    title: Optional[str] = Field(default=None, min_length=5, max_length=200)
    description: Optional[str] = Field(default=None, min_length=20, max_length=2000)
    rate_range: Optional[str] = Field(default=None, min_length=3, max_length=50)
    skills_required: Optional[List[str]] = None
    requirements: Optional[List[str]] = None
    responsibilities: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    budget: Optional[float] = Field(default=None, ge=0)
    location: Optional[str] = Field(default=None, max_length=100)
    remote: Optional[bool] = None
    category: Optional[str] = Field(default=None, max_length=100)
    experience_level: Optional[ExperienceLevel] = None
    employment_type: Optional[EmploymentType] = None
    job_type: Optional[BidType] = None
    duration: Optional[str] = Field(default=None, max_length=100)
    urgency: Optional[Urgency] = None
    featured: Optional[bool] = None
    status: Optional[JobPostingStatus] = None


class ListJobPostingsRequestDTO(ListRequestDTO):
    """Filters for the open job posting listing."""

    search: Optional[str] = Field(default=None, max_length=255)
    category: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    experience_level: Optional[ExperienceLevel] = None
    employment_type: Optional[EmploymentType] = None
    job_type: Optional[BidType] = None
    remote: Optional[bool] = None


class JobPostingResponseDTO(ResponseDTO):
    """DTO for job posting responses."""

    company_id: int
    title: str
    description: str
    rate_range: str
    skills_required: List[str] = Field(default_factory=list)
    requirements: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    budget: Optional[float] = None
    location: Optional[str] = None
    remote: bool = True
    category: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None
    employment_type: Optional[EmploymentType] = None
    job_type: BidType = BidType.FIXED
    duration: Optional[str] = None
    urgency: Urgency = Urgency.MEDIUM
    featured: bool = False
    status: JobPostingStatus
    views: int = 0
    proposal_count: int = 0
    company: Optional[CompanySummaryDTO] = None


# Proposals
class SubmitProposalRequestDTO(CreateRequestDTO):
    """DTO for proposal submission."""

    job_posting_id: int = Field(description="Job posting to bid on")
    cover_letter: str = Field(min_length=10, max_length=5000)
    bid_amount: float = Field(ge=1, description="Bid amount in USD")
    delivery_time: str = Field(min_length=1, max_length=100)
    bid_type: BidType = BidType.FIXED
    hourly_rate: Optional[float] = Field(default=None, ge=1)
    estimated_hours: Optional[float] = Field(default=None, ge=1)
    attachments: List[Any] = Field(default_factory=list)


class UpdateProposalRequestDTO(UpdateRequestDTO):

    cover_letter: Optional[str] = Field(default=None, min_length=10, max_length=5000)
    bid_amount: Optional[float] = Field(default=None, ge=1)
    delivery_time: Optional[str] = Field(default=None, min_length=1, max_length=100)
    bid_type: Optional[BidType] = None
    hourly_rate: Optional[float] = Field(default=None, ge=1)
    estimated_hours: Optional[float] = Field(default=None, ge=1)
    attachments: Optional[List[Any]] = None


class ProposalResponseDTO(ResponseDTO):
    """DTO for proposal responses."""

    job_posting_id: int
    va_profile_id: int
    cover_letter: str
    bid_amount: float
    bid_type: BidType
    hourly_rate: Optional[float] = None
    estimated_hours: Optional[float] = None
    delivery_time: str
    attachments: List[Any] = Field(default_factory=list)
    status: ProposalStatus
    job_posting: Optional[JobPostingResponseDTO] = None
    va_profile: Optional[VAProfileResponseDTO] = None
