"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Boolean,
    Numeric, Date, ForeignKey, JSON, Enum as SQLEnum,
    Index, UniqueConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.domain.models.user import Role
from app.domain.models.job import (
    JobPostingStatus, ProposalStatus, BidType, ExperienceLevel, EmploymentType, Urgency
)
from app.domain.models.contract import ContractStatus, MilestoneStatus, TimesheetStatus
from app.domain.models.payment import PaymentStatus, PaymentType, PaymentMethod
from app.domain.models.notification import NotificationPriority

from .database import Base


def _enum(enum_cls, name: str) -> SQLEnum:
    """Store enum values (not member names) in the column."""
    return SQLEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [member.value for member in members],
    )


class UserModel(Base):
    """Users table - one row per Firebase identity"""
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True)
    email = Column(String(255), nullable=False, unique=True)
    firebase_uid = Column(String(128), unique=True)
    role = Column(_enum(Role, 'user_role'), nullable=False, default=Role.VA)
    profile_complete = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    va_profile = relationship("VAProfileModel", back_populates="user", uselist=False)
    company = relationship("CompanyModel", back_populates="user", uselist=False)
    notifications = relationship("NotificationModel", back_populates="user")


class VAProfileModel(Base):
    """VA profile table"""
    __tablename__ = 'va_profiles'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False, unique=True)
    name = Column(String(100), nullable=False)
    bio = Column(Text)
    country = Column(String(50), nullable=False)
    hourly_rate = Column(Numeric(10, 2), nullable=False)
    skills = Column(JSON, nullable=False, default=list)
    availability = Column(Boolean, nullable=False, default=True)

    # Contact
    email = Column(String(255))
    phone = Column(String(50))
    timezone = Column(String(50))

    # Background
    languages = Column(JSON)
    work_experience = Column(JSON)
    education = Column(JSON)

    # Media
    avatar_url = Column(String(500))
    resume_url = Column(String(500))
    video_intro_url = Column(String(500))

    # Stats
    profile_views = Column(Integer, nullable=False, default=0)
    average_rating = Column(Numeric(3, 2))
    total_reviews = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("UserModel", back_populates="va_profile")
    proposals = relationship("ProposalModel", back_populates="va_profile")
    match_votes = relationship("MatchVoteModel", back_populates="va_profile")
    matches = relationship("MatchModel", back_populates="va_profile")

    __table_args__ = (
        Index('idx_va_profiles_discovery', 'availability', 'country', 'hourly_rate'),
    )


class CompanyModel(Base):
    """Company profile table"""
    __tablename__ = 'companies'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False, unique=True)
    name = Column(String(100), nullable=False)
    bio = Column(Text)
    country = Column(String(50), nullable=False)
    website = Column(String(500))
    industry = Column(String(100))
    company_size = Column(String(20))
    founded_year = Column(Integer)
    description = Column(Text)
    mission = Column(Text)
    values = Column(JSON)
    benefits = Column(JSON)

    # Contact
    email = Column(String(255))
    phone = Column(String(50))
    logo_url = Column(String(500))
    social_links = Column(JSON)
    tech_stack = Column(JSON)
    verification_level = Column(String(20), nullable=False, default='basic')

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("UserModel", back_populates="company")
    job_postings = relationship("JobPostingModel", back_populates="company")
    contracts = relationship("ContractModel", back_populates="company")


class JobPostingModel(Base):
    """Job posting table"""
    __tablename__ = 'job_postings'

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey('companies.id'), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(JSON)
    responsibilities = Column(JSON)
    benefits = Column(JSON)
    skills_required = Column(JSON, nullable=False, default=list)
    tags = Column(JSON)

    # Terms
    rate_range = Column(String(50), nullable=False)
    budget = Column(Numeric(12, 2))
    location = Column(String(255))
    remote = Column(Boolean, nullable=False, default=True)
    category = Column(String(100))
    experience_level = Column(_enum(ExperienceLevel, 'experience_level'))
    employment_type = Column(_enum(EmploymentType, 'employment_type'))
    job_type = Column(_enum(BidType, 'job_type'), nullable=False, default=BidType.FIXED)
    duration = Column(String(100))
    urgency = Column(_enum(Urgency, 'job_urgency'), nullable=False, default=Urgency.MEDIUM)

    # State
    status = Column(_enum(JobPostingStatus, 'job_posting_status'), nullable=False,
                    default=JobPostingStatus.OPEN)
    featured = Column(Boolean, nullable=False, default=False)
    views = Column(Integer, nullable=False, default=0)
    proposal_count = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    company = relationship("CompanyModel", back_populates="job_postings")
    proposals = relationship("ProposalModel", back_populates="job_posting")

    __table_args__ = (
        Index('idx_job_postings_status_created', 'status', 'created_at'),
        Index('idx_job_postings_company', 'company_id'),
    )


class ProposalModel(Base):
    """Proposal table"""
    __tablename__ = 'proposals'

    id = Column(Integer, primary_key=True, autoincrement=True)
    job_posting_id = Column(Integer, ForeignKey('job_postings.id'), nullable=False)
    va_profile_id = Column(Integer, ForeignKey('va_profiles.id'), nullable=False)
    cover_letter = Column(Text, nullable=False)
    bid_amount = Column(Numeric(12, 2), nullable=False)
    bid_type = Column(_enum(BidType, 'bid_type'), nullable=False, default=BidType.FIXED)
    hourly_rate = Column(Numeric(10, 2))
    estimated_hours = Column(Numeric(8, 2))
    delivery_time = Column(String(100), nullable=False)
    attachments = Column(JSON)
    status = Column(_enum(ProposalStatus, 'proposal_status'), nullable=False,
                    default=ProposalStatus.PENDING)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    job_posting = relationship("JobPostingModel", back_populates="proposals")
    va_profile = relationship("VAProfileModel", back_populates="proposals")

    __table_args__ = (
        UniqueConstraint('job_posting_id', 'va_profile_id', name='unique_proposal_per_va'),
    )


class ContractModel(Base):
    """Contract table"""
    __tablename__ = 'contracts'

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey('companies.id'), nullable=False)
    va_profile_id = Column(Integer, ForeignKey('va_profiles.id'), nullable=False)
    job_posting_id = Column(Integer, ForeignKey('job_postings.id'), nullable=False)
    proposal_id = Column(Integer, ForeignKey('proposals.id'))
    contract_type = Column(_enum(BidType, 'contract_type'), nullable=False, default=BidType.FIXED)
    amount = Column(Numeric(12, 2), nullable=False)
    hourly_rate = Column(Numeric(10, 2))
    currency = Column(String(3), nullable=False, default='USD')
    start_date = Column(DateTime)
    end_date = Column(DateTime)
    status = Column(_enum(ContractStatus, 'contract_status'), nullable=False,
                    default=ContractStatus.ACTIVE)
    terms = Column(Text)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    company = relationship("CompanyModel", back_populates="contracts")
    milestones = relationship("MilestoneModel", back_populates="contract")
    timesheets = relationship("TimesheetModel", back_populates="contract")

    __table_args__ = (
        Index('idx_contracts_company_status', 'company_id', 'status'),
        Index('idx_contracts_va_status', 'va_profile_id', 'status'),
    )


class MilestoneModel(Base):
    """Contract milestone table"""
    __tablename__ = 'milestones'

    id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(Integer, ForeignKey('contracts.id'), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    amount = Column(Numeric(12, 2), nullable=False)
    due_date = Column(DateTime, nullable=False)
    status = Column(_enum(MilestoneStatus, 'milestone_status'), nullable=False,
                    default=MilestoneStatus.PENDING)
    completed_at = Column(DateTime)
    approved_at = Column(DateTime)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    contract = relationship("ContractModel", back_populates="milestones")


class TimesheetModel(Base):
    """Timesheet table"""
    __tablename__ = 'timesheets'

    id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(Integer, ForeignKey('contracts.id'), nullable=False)
    va_profile_id = Column(Integer, ForeignKey('va_profiles.id'), nullable=False)
    date = Column(Date, nullable=False)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    total_hours = Column(Numeric(6, 2), nullable=False)
    description = Column(Text)
    status = Column(_enum(TimesheetStatus, 'timesheet_status'), nullable=False,
                    default=TimesheetStatus.PENDING)
    approved_by = Column(String(36), ForeignKey('users.id'))
    approved_at = Column(DateTime)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    contract = relationship("ContractModel", back_populates="timesheets")


class MatchVoteModel(Base):
    """Both sides' votes on one job posting / VA profile pair"""
    __tablename__ = 'match_votes'

    id = Column(Integer, primary_key=True, autoincrement=True)
    job_posting_id = Column(Integer, ForeignKey('job_postings.id'), nullable=False)
    va_profile_id = Column(Integer, ForeignKey('va_profiles.id'), nullable=False)
    vote_by_company = Column(Boolean)
    vote_by_va = Column(Boolean)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    va_profile = relationship("VAProfileModel", back_populates="match_votes")

    __table_args__ = (
        UniqueConstraint('job_posting_id', 'va_profile_id', name='unique_match_vote_pair'),
    )


class MatchModel(Base):
    """Mutual match table"""
    __tablename__ = 'matches'

    id = Column(Integer, primary_key=True, autoincrement=True)
    job_posting_id = Column(Integer, ForeignKey('job_postings.id'), nullable=False)
    va_profile_id = Column(Integer, ForeignKey('va_profiles.id'), nullable=False)
    company_id = Column(Integer, ForeignKey('companies.id'), nullable=False)
    contact_unlocked = Column(Boolean, nullable=False, default=False)
    unlocked_at = Column(DateTime)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    va_profile = relationship("VAProfileModel", back_populates="matches")

    __table_args__ = (
        UniqueConstraint('job_posting_id', 'va_profile_id', name='unique_match_pair'),
        Index('idx_matches_company', 'company_id'),
    )


class PaymentModel(Base):
    """Payment table - amounts in cents"""
    __tablename__ = 'payments'

    id = Column(Integer, primary_key=True, autoincrement=True)
    payer_id = Column(String(36), ForeignKey('users.id'), nullable=False)
    receiver_id = Column(String(36), ForeignKey('users.id'))

    # What the payment is for
    match_id = Column(Integer, ForeignKey('matches.id'))
    contract_id = Column(Integer, ForeignKey('contracts.id'))
    milestone_id = Column(Integer, ForeignKey('milestones.id'))

    # Amounts
    amount = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False, default='usd')
    platform_fee = Column(Integer, nullable=False, default=0)
    stripe_fee = Column(Integer, nullable=False, default=0)
    net_amount = Column(Integer, nullable=False)

    # State
    status = Column(_enum(PaymentStatus, 'payment_status'), nullable=False,
                    default=PaymentStatus.PENDING)
    payment_type = Column(_enum(PaymentType, 'payment_type'), nullable=False,
                          default=PaymentType.PAYMENT)
    payment_method = Column(_enum(PaymentMethod, 'payment_method'), nullable=False,
                            default=PaymentMethod.CARD)
    stripe_payment_intent_id = Column(String(255), nullable=False, unique=True)
    description = Column(Text)
    payment_metadata = Column('metadata', JSON)

    # Refunds
    refund_amount = Column(Integer)
    refunded_at = Column(DateTime)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_payments_payer', 'payer_id'),
        Index('idx_payments_receiver', 'receiver_id'),
        Index('idx_payments_match_status', 'match_id', 'status'),
    )


class NotificationModel(Base):
    """In-app notification table"""
    __tablename__ = 'notifications'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False)
    type = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    data = Column(JSON)
    read = Column(Boolean, nullable=False, default=False)
    priority = Column(_enum(NotificationPriority, 'notification_priority'), nullable=False,
                      default=NotificationPriority.NORMAL)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("UserModel", back_populates="notifications")

    __table_args__ = (
        Index('idx_notifications_user_read', 'user_id', 'read'),
    )
