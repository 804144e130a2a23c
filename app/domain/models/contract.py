"""
Contract aggregate and the work records attached to it.
A contract is created when a company accepts a proposal; milestones and
timesheets track the work done under it.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from .base import AggregateRoot, ValidationError, BusinessRuleViolation, check_length, utcnow
from .job import BidType


class ContractStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


CONTRACT_TRANSITIONS: Dict[ContractStatus, FrozenSet[ContractStatus]] = {
    ContractStatus.PENDING: frozenset({ContractStatus.ACTIVE, ContractStatus.CANCELLED}),
    ContractStatus.ACTIVE: frozenset({
        ContractStatus.PAUSED, ContractStatus.COMPLETED, ContractStatus.CANCELLED
    }),
    ContractStatus.PAUSED: frozenset({ContractStatus.ACTIVE, ContractStatus.CANCELLED}),
    ContractStatus.COMPLETED: frozenset(),
    ContractStatus.CANCELLED: frozenset(),
}


class MilestoneStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    APPROVED = "approved"


class TimesheetStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(kw_only=True, eq=False)
class Contract(AggregateRoot):
    """Agreement between a company and a VA for one job posting."""

    company_id: int
    va_profile_id: int
    job_posting_id: int
    proposal_id: Optional[int] = None
    contract_type: BidType = BidType.FIXED
    amount: float = 0.0
    hourly_rate: Optional[float] = None
    currency: str = "USD"
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: ContractStatus = ContractStatus.ACTIVE
    terms: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        if isinstance(self.status, str):
            self.status = ContractStatus(self.status)
        if isinstance(self.contract_type, str):
            self.contract_type = BidType(self.contract_type)
        if self.start_date is None:
            self.start_date = self.created_at
        self.validate()

    def validate(self) -> None:
        if self.amount is None or self.amount < 0:
            raise ValidationError("Contract amount cannot be negative", "amount")
        if self.contract_type == BidType.HOURLY and self.hourly_rate is None:
            raise ValidationError("Hourly contracts need an hourly rate", "hourly_rate")
        if self.end_date and self.start_date and self.end_date < self.start_date:
            raise ValidationError("End date must be after start date", "end_date")

    @property
    def is_open(self) -> bool:
        return self.status in (ContractStatus.ACTIVE, ContractStatus.PAUSED)

    def can_transition_to(self, new_status: ContractStatus) -> bool:
        return new_status in CONTRACT_TRANSITIONS[self.status]

    def change_status(self, new_status: ContractStatus | str) -> ContractStatus:
        """Move to a new status and return the previous one."""
        try:
            new_status = ContractStatus(new_status)
        except ValueError:
            raise ValidationError("Invalid contract status", "status")
        if new_status == self.status:
            return self.status
        if not self.can_transition_to(new_status):
            raise BusinessRuleViolation(
                f"Cannot change contract status from {self.status.value} to {new_status.value}"
            )
        previous = self.status
        self.status = new_status
        if new_status in (ContractStatus.COMPLETED, ContractStatus.CANCELLED):
            self.end_date = utcnow()
        self.mark_as_updated()
        return previous


@dataclass(kw_only=True, eq=False)
class Milestone(AggregateRoot):
    """Deliverable with its own amount and due date."""

    contract_id: int
    title: str
    amount: float
    due_date: datetime
    description: Optional[str] = None
    status: MilestoneStatus = MilestoneStatus.PENDING
    completed_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None

    def __post_init__(self):
        super().__post_init__()
        if isinstance(self.status, str):
            self.status = MilestoneStatus(self.status)
        self.validate()

    def validate(self) -> None:
        if self.title is None:
            raise ValidationError("Title is required", "title")
        check_length(self.title, "title", "Title", 1, 200)
        if self.amount is None or self.amount < 0:
            raise ValidationError("Milestone amount cannot be negative", "amount")
        if self.due_date is None:
            raise ValidationError("Due date is required", "due_date")

    @property
    def is_locked(self) -> bool:
        """Completed and approved milestones can no longer be removed."""
        return self.status in (MilestoneStatus.COMPLETED, MilestoneStatus.APPROVED)

    def update(self, **changes: Any) -> None:
        status = changes.pop("status", None)
        self.apply_changes(changes)
        if status is not None:
            self.change_status(status)
        self.validate()
        self.mark_as_updated()

    def change_status(self, new_status: MilestoneStatus | str) -> None:
        new_status = MilestoneStatus(new_status)
        if new_status == MilestoneStatus.APPROVED:
            self.approve()
            return
        self.status = new_status
        if new_status == MilestoneStatus.COMPLETED:
            self.completed_at = utcnow()
        self.mark_as_updated()

    def approve(self) -> None:
        if self.status != MilestoneStatus.COMPLETED:
            raise BusinessRuleViolation("Only completed milestones can be approved")
        self.status = MilestoneStatus.APPROVED
        self.approved_at = utcnow()
        self.mark_as_updated()

    def ensure_deletable(self) -> None:
        if self.is_locked:
            raise BusinessRuleViolation("Cannot delete completed or approved milestone")


@dataclass(kw_only=True, eq=False)
class Timesheet(AggregateRoot):
    """Hours a VA logged against an hourly contract on one day."""

    contract_id: int
    va_profile_id: int
    date: date
    start_time: datetime
    end_time: datetime
    description: Optional[str] = None
    total_hours: float = 0.0
    status: TimesheetStatus = TimesheetStatus.PENDING
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None

    def __post_init__(self):
        super().__post_init__()
        if isinstance(self.status, str):
            self.status = TimesheetStatus(self.status)
        self.validate()
        if not self.total_hours:
            self.total_hours = self.compute_hours(self.start_time, self.end_time)

    @staticmethod
    def compute_hours(start_time: datetime, end_time: datetime) -> float:
        return round((end_time - start_time).total_seconds() / 3600, 2)

    def validate(self) -> None:
        if self.date is None:
            raise ValidationError("Date is required", "date")
        if self.start_time is None or self.end_time is None:
            raise ValidationError("Start and end time are required", "start_time")
        if self.end_time <= self.start_time:
            raise ValidationError("End time must be after start time", "end_time")

    @property
    def is_pending(self) -> bool:
        return self.status == TimesheetStatus.PENDING

    def approve(self, approved_by: str) -> None:
        if not self.is_pending:
            raise BusinessRuleViolation("Only pending timesheets can be approved")
        self.status = TimesheetStatus.APPROVED
        self.approved_by = approved_by
        self.approved_at = utcnow()
        self.mark_as_updated()

    def reject(self, rejected_by: str) -> None:
        if not self.is_pending:
            raise BusinessRuleViolation("Only pending timesheets can be rejected")
        self.status = TimesheetStatus.REJECTED
        self.approved_by = rejected_by
        self.approved_at = utcnow()
        self.mark_as_updated()

    def ensure_deletable(self) -> None:
        if self.status == TimesheetStatus.APPROVED:
            raise BusinessRuleViolation("Cannot delete approved timesheet")
