"""
Job marketplace entities: postings and the proposals VAs send to them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from .base import AggregateRoot, ValidationError, BusinessRuleViolation, check_length


class JobPostingStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    FILLED = "filled"


class BidType(str, Enum):
    """Pricing model of a proposal or contract."""
    FIXED = "fixed"
    HOURLY = "hourly"


class ProposalStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class ExperienceLevel(str, Enum):
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    EXECUTIVE = "executive"


class EmploymentType(str, Enum):
    FULLTIME = "fulltime"
    PARTTIME = "parttime"
    CONTRACT = "contract"
    FREELANCE = "freelance"


class Urgency(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(kw_only=True, eq=False)
class JobPosting(AggregateRoot):
    """A job a company publishes on the marketplace."""

    company_id: int
    title: str
    description: str
    rate_range: str
    skills_required: List[str] = field(default_factory=list)
    requirements: List[str] = field(default_factory=list)
    responsibilities: List[str] = field(default_factory=list)
    benefits: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
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
    status: JobPostingStatus = JobPostingStatus.OPEN
    views: int = 0
    proposal_count: int = 0

    def __post_init__(self):
        super().__post_init__()
        self.status = JobPostingStatus(self.status)
        self.job_type = BidType(self.job_type)
        self.urgency = Urgency(self.urgency)
        if self.experience_level is not None:
            self.experience_level = ExperienceLevel(self.experience_level)
        if self.employment_type is not None:
            self.employment_type = EmploymentType(self.employment_type)
        self.validate()

    def validate(self) -> None:
        if not self.company_id:
            raise ValidationError("Company ID is required", "company_id")
        if self.title is None:
            raise ValidationError("Title is required", "title")
        check_length(self.title, "title", "Title", 5, 200)
        if self.description is None:
            raise ValidationError("Description is required", "description")
        check_length(self.description, "description", "Description", 20, 2000)
        if self.rate_range is None:
            raise ValidationError("Rate range is required", "rate_range")
        check_length(self.rate_range, "rate_range", "Rate range", 3, 50)
        if not self.skills_required:
            raise ValidationError("At least one skill is required", "skills_required")
        if self.budget is not None and self.budget < 0:
            raise ValidationError("Budget cannot be negative", "budget")

    @property
    def is_open(self) -> bool:
        return self.status == JobPostingStatus.OPEN

    def update(self, **changes: Any) -> None:
        self.apply_changes(changes)
        self.validate()
        self.mark_as_updated()

    def record_view(self) -> None:
        self.views += 1

    def register_proposal(self) -> None:
        if not self.is_open:
            raise BusinessRuleViolation("Job posting is not open for proposals")
        self.proposal_count += 1

    def mark_filled(self) -> None:
        self.status = JobPostingStatus.FILLED
        self.mark_as_updated()


@dataclass(kw_only=True, eq=False)
class Proposal(AggregateRoot):
    """A VA's bid on a job posting."""

    job_posting_id: int
    va_profile_id: int
    cover_letter: str
    bid_amount: float
    delivery_time: str
    bid_type: BidType = BidType.FIXED
    hourly_rate: Optional[float] = None
    estimated_hours: Optional[float] = None
    attachments: List[Any] = field(default_factory=list)
    status: ProposalStatus = ProposalStatus.PENDING

    def __post_init__(self):
        super().__post_init__()
        self.status = ProposalStatus(self.status)
        self.bid_type = BidType(self.bid_type)
        self.validate()

    def validate(self) -> None:
        check_length(self.cover_letter, "cover_letter", "Cover letter", 10)
        if self.bid_amount is None or self.bid_amount < 1:
            raise ValidationError("Bid amount is required", "bid_amount")
        if not self.delivery_time:
            raise ValidationError("Delivery time is required", "delivery_time")
        if self.hourly_rate is not None and self.hourly_rate < 1:
            raise ValidationError("Hourly rate must be at least 1", "hourly_rate")
        if self.estimated_hours is not None and self.estimated_hours < 1:
            raise ValidationError("Estimated hours must be at least 1", "estimated_hours")

    @property
    def is_pending(self) -> bool:
        return self.status == ProposalStatus.PENDING

    def update(self, **changes: Any) -> None:
        if not self.is_pending:
            raise BusinessRuleViolation("Only pending proposals can be edited")
        self.apply_changes(changes)
        self.validate()
        self.mark_as_updated()

    def accept(self) -> None:
        if not self.is_pending:
            raise BusinessRuleViolation("Only pending proposals can be accepted")
        self.status = ProposalStatus.ACCEPTED
        self.mark_as_updated()
