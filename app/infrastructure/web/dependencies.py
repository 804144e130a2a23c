"""
Shared FastAPI dependency providers.
Repositories and the event dispatcher are bound to the request's session;
gateways are process-wide and overridable in tests.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.domain.events.base import EventDispatcher
from app.domain.services.gateways import FileStorage, PaymentGateway
from app.infrastructure.db.database import get_db
from app.infrastructure.events.event_setup import build_event_dispatcher
from app.infrastructure.repositories import (
    SQLAlchemyUserRepository,
    SQLAlchemyVAProfileRepository,
    SQLAlchemyCompanyRepository,
    SQLAlchemyJobPostingRepository,
    SQLAlchemyProposalRepository,
    SQLAlchemyContractRepository,
    SQLAlchemyMilestoneRepository,
    SQLAlchemyTimesheetRepository,
    SQLAlchemyMatchVoteRepository,
    SQLAlchemyMatchRepository,
    SQLAlchemyPaymentRepository,
    SQLAlchemyNotificationRepository,
)


def get_app_settings() -> Settings:
    return get_settings()


@lru_cache()
def get_payment_gateway() -> PaymentGateway:
    """Dependency to get the payment gateway."""
    from app.infrastructure.payments.stripe_gateway import StripePaymentGateway
    return StripePaymentGateway()


@lru_cache()
def get_file_storage() -> FileStorage:
    """Dependency to get the object storage service."""
    from app.infrastructure.storage.storage_service import StorageService
    return StorageService()


def get_event_dispatcher(session: Session = Depends(get_db)) -> EventDispatcher:
    """Dependency to get an event dispatcher writing into the request's session."""
    return build_event_dispatcher(session)


def get_user_repository(session: Session = Depends(get_db)):
    return SQLAlchemyUserRepository(session)


def get_va_profile_repository(session: Session = Depends(get_db)):
    return SQLAlchemyVAProfileRepository(session)


def get_company_repository(session: Session = Depends(get_db)):
    return SQLAlchemyCompanyRepository(session)


def get_job_repository(session: Session = Depends(get_db)):
    return SQLAlchemyJobPostingRepository(session)


def get_proposal_repository(session: Session = Depends(get_db)):
    return SQLAlchemyProposalRepository(session)


def get_contract_repository(session: Session = Depends(get_db)):
    return SQLAlchemyContractRepository(session)


def get_milestone_repository(session: Session = Depends(get_db)):
    return SQLAlchemyMilestoneRepository(session)


def get_timesheet_repository(session: Session = Depends(get_db)):
    return SQLAlchemyTimesheetRepository(session)


def get_vote_repository(session: Session = Depends(get_db)):
    return SQLAlchemyMatchVoteRepository(session)


def get_match_repository(session: Session = Depends(get_db)):
    return SQLAlchemyMatchRepository(session)


def get_payment_repository(session: Session = Depends(get_db)):
    return SQLAlchemyPaymentRepository(session)


def get_notification_repository(session: Session = Depends(get_db)):
    return SQLAlchemyNotificationRepository(session)
