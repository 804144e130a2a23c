"""
Job posting and proposal mappers.
"""

from app.domain.models.job import JobPosting, Proposal
from app.infrastructure.db.models import JobPostingModel, ProposalModel
from .base_mapper import BaseMapper, to_float


class JobPostingMapper(BaseMapper):
    """Maps between JobPosting and JobPostingModel."""

    def domain_to_model(self, job: JobPosting) -> JobPostingModel:
        return JobPostingModel(
            id=job.id,
            company_id=job.company_id,
            title=job.title,
            description=job.description,
            requirements=list(job.requirements),
            responsibilities=list(job.responsibilities),
            benefits=list(job.benefits),
            skills_required=list(job.skills_required),
            tags=list(job.tags),
            rate_range=job.rate_range,
            budget=job.budget,
            location=job.location,
            remote=job.remote,
            category=job.category,
            experience_level=job.experience_level,
            employment_type=job.employment_type,
            job_type=job.job_type,
            duration=job.duration,
            urgency=job.urgency,
            status=job.status,
            featured=job.featured,
            views=job.views,
            proposal_count=job.proposal_count,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )

    def model_to_domain(self, model: JobPostingModel) -> JobPosting:
        return JobPosting(
            id=model.id,
            company_id=model.company_id,
            title=model.title,
            description=model.description,
            requirements=list(model.requirements or []),
            responsibilities=list(model.responsibilities or []),
            benefits=list(model.benefits or []),
            skills_required=list(model.skills_required or []),
            tags=list(model.tags or []),
            rate_range=model.rate_range,
            budget=to_float(model.budget),
            location=model.location,
            remote=bool(model.remote),
            category=model.category,
            experience_level=model.experience_level,
            employment_type=model.employment_type,
            job_type=model.job_type,
            duration=model.duration,
            urgency=model.urgency,
            status=model.status,
            featured=bool(model.featured),
            views=model.views or 0,
            proposal_count=model.proposal_count or 0,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class ProposalMapper(BaseMapper):
    """Maps between Proposal and ProposalModel."""

    def domain_to_model(self, proposal: Proposal) -> ProposalModel:
        return ProposalModel(
            id=proposal.id,
            job_posting_id=proposal.job_posting_id,
            va_profile_id=proposal.va_profile_id,
            cover_letter=proposal.cover_letter,
            bid_amount=proposal.bid_amount,
            bid_type=proposal.bid_type,
            hourly_rate=proposal.hourly_rate,
            estimated_hours=proposal.estimated_hours,
            delivery_time=proposal.delivery_time,
            attachments=list(proposal.attachments),
            status=proposal.status,
            created_at=proposal.created_at,
            updated_at=proposal.updated_at,
        )

    def model_to_domain(self, model: ProposalModel) -> Proposal:
        return Proposal(
            id=model.id,
            job_posting_id=model.job_posting_id,
            va_profile_id=model.va_profile_id,
            cover_letter=model.cover_letter,
            bid_amount=to_float(model.bid_amount),
            bid_type=model.bid_type,
            hourly_rate=to_float(model.hourly_rate),
            estimated_hours=to_float(model.estimated_hours),
            delivery_time=model.delivery_time,
            attachments=list(model.attachments or []),
            status=model.status,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
