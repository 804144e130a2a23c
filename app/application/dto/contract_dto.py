"""
Contract DTOs for the application layer.
Covers contracts, milestones and timesheets.
"""

from datetime import date, datetime
from typing import Literal, Optional
from pydantic import Field, model_validator

from app.domain.models.contract import ContractStatus, MilestoneStatus, TimesheetStatus
from app.domain.models.job import BidType
from .base_dto import BaseDTO, CreateRequestDTO, UpdateRequestDTO, ListRequestDTO, ResponseDTO
from .profile_dto import CompanySummaryDTO, VAProfileResponseDTO
from .job_dto import JobPostingResponseDTO


# Contracts
class CreateContractRequestDTO(CreateRequestDTO):
    """Accept a proposal and turn it into a contract."""

    proposal_id: int = Field(description="Proposal being accepted")
    terms: Optional[str] = Field(default=None, max_length=10000)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class UpdateContractRequestDTO(UpdateRequestDTO):
    status: Optional[ContractStatus] = None
    terms: Optional[str] = Field(default=None, max_length=10000)
    end_date: Optional[datetime] = None


class ListContractsRequestDTO(ListRequestDTO):
    type: Literal["active", "completed", "all"] = "active"


class ContractMetricsDTO(BaseDTO):
    total_milestones: int = 0
    completed_milestones: int = 0
    approved_milestones: int = 0
    milestone_progress: int = 0
    total_hours: float = 0.0
    total_paid: float = 0.0
    amount_remaining: float = 0.0


class ContractResponseDTO(ResponseDTO):
    """DTO for contract responses."""

    company_id: int
    va_profile_id: int
    job_posting_id: int
    proposal_id: Optional[int] = None
    contract_type: BidType
    amount: float
    hourly_rate: Optional[float] = None
    currency: str = "USD"
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: ContractStatus
    terms: Optional[str] = None
    company: Optional[CompanySummaryDTO] = None
    va_profile: Optional[VAProfileResponseDTO] = None
    job_posting: Optional[JobPostingResponseDTO] = None
    metrics: Optional[ContractMetricsDTO] = None


# Milestones
class CreateMilestoneRequestDTO(CreateRequestDTO):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=5000)
    amount: float = Field(ge=0)
    due_date: datetime


class UpdateMilestoneRequestDTO(UpdateRequestDTO):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=5000)
    amount: Optional[float] = Field(default=None, ge=0)
    due_date: Optional[datetime] = None
    status: Optional[MilestoneStatus] = None


class MilestoneResponseDTO(ResponseDTO):
    contract_id: int
    title: str
    description: Optional[str] = None
    amount: float
    due_date: datetime
    status: MilestoneStatus
    completed_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None


# Timesheets
class SubmitTimesheetRequestDTO(CreateRequestDTO):
    """Hours worked on one day."""

    date: date
    start_time: datetime
    end_time: datetime
    description: Optional[str] = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def check_times(self):
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class TimesheetResponseDTO(ResponseDTO):
    contract_id: int
    va_profile_id: int
    date: date
    start_time: datetime
    end_time: datetime
    total_hours: float
    description: Optional[str] = None
    status: TimesheetStatus
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
