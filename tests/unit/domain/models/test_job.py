"""
Unit tests for job postings and proposals.
"""

import pytest
from app.domain.models.base import ValidationError, BusinessRuleViolation
from app.domain.models.job import (
    JobPosting,
    JobPostingStatus,
    Proposal,
    ProposalStatus,
    BidType,
    Urgency,
)


def make_job(**overrides):
    data = dict(
        company_id=1,
        title="Executive Assistant",
        description="Manage calendars, inboxes and travel for our founders.",
        rate_range="$10-15/hr",
        skills_required=["Calendar Management"],
    )
    data.update(overrides)
    return JobPosting(**data)


def make_proposal(**overrides):
    data = dict(
        job_posting_id=1,
        va_profile_id=2,
        cover_letter="I have five years of experience as an EA.",
        bid_amount=500,
        delivery_time="2 weeks",
    )
    data.update(overrides)
    return Proposal(**data)


class TestJobPosting:

    def test_defaults(self):
        job = make_job()
        assert job.status == JobPostingStatus.OPEN
        assert job.job_type == BidType.FIXED
        assert job.urgency == Urgency.MEDIUM
        assert job.remote is True
        assert job.proposal_count == 0

    def test_short_title_rejected(self):
        with pytest.raises(ValidationError):
            make_job(title="EA")

    def test_short_description_rejected(self):
        with pytest.raises(ValidationError):
            make_job(description="Too short")

    def test_requires_skill(self):
        with pytest.raises(ValidationError):
            make_job(skills_required=[])

    def test_register_proposal_increments_count(self):
        job = make_job()
        job.register_proposal()
        assert job.proposal_count == 1

    def test_closed_posting_rejects_proposals(self):
        job = make_job(status="closed")
        with pytest.raises(BusinessRuleViolation):
            job.register_proposal()

    def test_mark_filled(self):
        job = make_job()
        job.mark_filled()
        assert job.status == JobPostingStatus.FILLED
        assert not job.is_open


class TestProposal:

    def test_create(self):
        proposal = make_proposal()
        assert proposal.status == ProposalStatus.PENDING
        assert proposal.bid_type == BidType.FIXED

    def test_bid_amount_required(self):
        with pytest.raises(ValidationError):
            make_proposal(bid_amount=0)

    def test_short_cover_letter_rejected(self):
        with pytest.raises(ValidationError):
            make_proposal(cover_letter="Hire me")

    def test_accept(self):
        proposal = make_proposal()
        proposal.accept()
        assert proposal.status == ProposalStatus.ACCEPTED

    def test_only_pending_can_be_edited(self):
        proposal = make_proposal(status="rejected")
        with pytest.raises(BusinessRuleViolation):
            proposal.update(bid_amount=600)

    def test_accept_twice_rejected(self):
        proposal = make_proposal()
        proposal.accept()
        with pytest.raises(BusinessRuleViolation):
            proposal.accept()
