"""
Unit tests for contracts, milestones and timesheets.
"""

import pytest
from datetime import date, datetime, timedelta
from app.domain.models.base import ValidationError, BusinessRuleViolation
from app.domain.models.contract import (
    Contract,
    ContractStatus,
    Milestone,
    MilestoneStatus,
    Timesheet,
    TimesheetStatus,
)
from app.domain.models.job import BidType


def make_contract(**overrides):
    data = dict(company_id=1, va_profile_id=2, job_posting_id=3, amount=1000.0)
    data.update(overrides)
    return Contract(**data)


class TestContract:

    def test_defaults(self):
        contract = make_contract()
        assert contract.status == ContractStatus.ACTIVE
        assert contract.start_date == contract.created_at
        assert contract.currency == "USD"

    def test_hourly_requires_rate(self):
        with pytest.raises(ValidationError):
            make_contract(contract_type=BidType.HOURLY)

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            make_contract(amount=-1)

    def test_pause_and_resume(self):
        contract = make_contract()
        assert contract.change_status("paused") == ContractStatus.ACTIVE
        contract.change_status(ContractStatus.ACTIVE)
        assert contract.status == ContractStatus.ACTIVE

    def test_complete_sets_end_date(self):
        contract = make_contract()
        contract.change_status(ContractStatus.COMPLETED)
        assert contract.end_date is not None
        assert not contract.is_open

    def test_terminal_status_is_final(self):
        contract = make_contract()
        contract.change_status(ContractStatus.CANCELLED)
        with pytest.raises(BusinessRuleViolation):
            contract.change_status(ContractStatus.ACTIVE)

    def test_unknown_status(self):
        with pytest.raises(ValidationError):
            make_contract().change_status("archived")


class TestMilestone:

    def setup_method(self):
        self.milestone = Milestone(
            contract_id=1,
            title="First draft",
            amount=250.0,
            due_date=datetime(2026, 1, 15),
        )

    def test_defaults(self):
        assert self.milestone.status == MilestoneStatus.PENDING
        assert self.milestone.completed_at is None

    def test_complete_sets_timestamp(self):
        self.milestone.change_status(MilestoneStatus.COMPLETED)
        assert self.milestone.completed_at is not None
        assert self.milestone.is_locked

    def test_approve_requires_completed(self):
        with pytest.raises(BusinessRuleViolation):
            self.milestone.approve()

    def test_approve(self):
        self.milestone.change_status("completed")
        self.milestone.approve()
        assert self.milestone.status == MilestoneStatus.APPROVED
        assert self.milestone.approved_at is not None

    def test_locked_milestone_cannot_be_deleted(self):
        self.milestone.change_status("completed")
        with pytest.raises(BusinessRuleViolation):
            self.milestone.ensure_deletable()

    def test_pending_milestone_can_be_deleted(self):
        self.milestone.ensure_deletable()

    def test_update_fields(self):
        self.milestone.update(title="Second draft", status="in_progress")
        assert self.milestone.title == "Second draft"
        assert self.milestone.status == MilestoneStatus.IN_PROGRESS


class TestTimesheet:

    def make_timesheet(self, hours=3.5):
        start = datetime(2026, 1, 10, 9, 0)
        return Timesheet(
            contract_id=1,
            va_profile_id=2,
            date=date(2026, 1, 10),
            start_time=start,
            end_time=start + timedelta(hours=hours),
        )

    def test_hours_computed(self):
        assert self.make_timesheet().total_hours == 3.5

    def test_end_before_start_rejected(self):
        start = datetime(2026, 1, 10, 9, 0)
        with pytest.raises(ValidationError):
            Timesheet(
                contract_id=1,
                va_profile_id=2,
                date=date(2026, 1, 10),
                start_time=start,
                end_time=start,
            )

    def test_approve(self):
        timesheet = self.make_timesheet()
        timesheet.approve("company-user")
        assert timesheet.status == TimesheetStatus.APPROVED
        assert timesheet.approved_by == "company-user"

    def test_reject_after_approve_rejected(self):
        timesheet = self.make_timesheet()
        timesheet.approve("company-user")
        with pytest.raises(BusinessRuleViolation):
            timesheet.reject("company-user")

    def test_approved_timesheet_cannot_be_deleted(self):
        timesheet = self.make_timesheet()
        timesheet.approve("company-user")
        with pytest.raises(BusinessRuleViolation):
            timesheet.ensure_deletable()

    def test_rejected_timesheet_can_be_deleted(self):
        timesheet = self.make_timesheet()
        timesheet.reject("company-user")
        timesheet.ensure_deletable()
