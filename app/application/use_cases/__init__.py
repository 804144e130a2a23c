"""
Application layer use cases.
Business logic for the BlytzWork marketplace.
"""

from .base_use_case import (
    BaseUseCase,
    QueryUseCase,
    CommandUseCase,
    AuthorizedUseCase,
    UseCaseResult,
)
from .auth_use_cases import *
from .profile_use_cases import *
from .job_use_cases import *
from .contract_use_cases import *
from .matching_use_cases import *
from .payment_use_cases import *
from .notification_use_cases import *
from .upload_use_cases import *

__all__ = [
    # Base Use Cases
    "BaseUseCase",
    "QueryUseCase",
    "CommandUseCase",
    "AuthorizedUseCase",
    "UseCaseResult",

    # Auth
    "SyncUserUseCase",
    "GetCurrentUserUseCase",
    "UpdateUserUseCase",
    "UpdateRoleUseCase",
    "RequestPasswordResetUseCase",
    "CreateCustomTokenUseCase",

    # Profiles
    "CreateVAProfileUseCase",
    "GetOwnVAProfileUseCase",
    "UpdateVAProfileUseCase",
    "ViewVAProfileUseCase",
    "SearchVAProfilesUseCase",
    "CreateCompanyUseCase",
    "GetOwnCompanyUseCase",
    "UpdateCompanyUseCase",
    "ViewCompanyUseCase",

    # Job marketplace
    "CreateJobPostingUseCase",
    "ListJobPostingsUseCase",
    "GetJobPostingUseCase",
    "UpdateJobPostingUseCase",
    "ListJobProposalsUseCase",
    "SubmitProposalUseCase",
    "ListOwnProposalsUseCase",
    "UpdateProposalUseCase",

    # Contracts
    "CreateContractUseCase",
    "ListContractsUseCase",
    "GetContractUseCase",
    "UpdateContractUseCase",
    "CreateMilestoneUseCase",
    "ListMilestonesUseCase",
    "UpdateMilestoneUseCase",
    "DeleteMilestoneUseCase",
    "ApproveMilestoneUseCase",
    "SubmitTimesheetUseCase",
    "ListTimesheetsUseCase",
    "ReviewTimesheetUseCase",
    "DeleteTimesheetUseCase",

    # Matching
    "RecordVoteUseCase",
    "ListMatchesUseCase",
    "GetMatchUseCase",
    "UnlockContactUseCase",
    "DiscoverVAsUseCase",
    "DiscoverJobsUseCase",

    # Payments
    "CreateUnlockIntentUseCase",
    "ConfirmPaymentUseCase",
    "GetMatchPaymentUseCase",
    "CreateContractPaymentUseCase",
    "ListPaymentsUseCase",
    "GetPaymentUseCase",
    "RefundPaymentUseCase",
    "HandleWebhookUseCase",

    # Notifications
    "ListNotificationsUseCase",
    "MarkNotificationReadUseCase",
    "MarkAllNotificationsReadUseCase",

    # Uploads
    "GeneratePresignedUrlUseCase",
    "ConfirmUploadUseCase",
    "DeleteFileUseCase",
]
