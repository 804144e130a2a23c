"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import (
    BaseDTO,
    RequestDTO,
    ResponseDTO,
    CreateRequestDTO,
    UpdateRequestDTO,
    ListRequestDTO,
    PaginationDTO,
    PageDTO,
    HealthCheckResponseDTO,
)
from .user_dto import *
from .profile_dto import *
from .job_dto import *
from .contract_dto import *
from .matching_dto import *
from .payment_dto import *
from .notification_dto import *
from .upload_dto import *

__all__ = [
    # Base DTOs
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "CreateRequestDTO",
    "UpdateRequestDTO",
    "ListRequestDTO",
    "PaginationDTO",
    "PageDTO",
    "HealthCheckResponseDTO",

    # Auth DTOs
    "SyncUserRequestDTO",
    "UpdateUserRequestDTO",
    "UpdateRoleRequestDTO",
    "ForgotPasswordRequestDTO",
    "UserResponseDTO",
    "SyncUserResponseDTO",
    "CustomTokenResponseDTO",

    # Profile DTOs
    "CreateVAProfileRequestDTO",
    "UpdateVAProfileRequestDTO",
    "SearchVAProfilesRequestDTO",
    "VAProfileResponseDTO",
    "OwnVAProfileResponseDTO",
    "CreateCompanyRequestDTO",
    "UpdateCompanyRequestDTO",
    "CompanyResponseDTO",
    "OwnCompanyResponseDTO",
    "CompanySummaryDTO",

    # Job DTOs
    "CreateJobPostingRequestDTO",
    "UpdateJobPostingRequestDTO",
    "ListJobPostingsRequestDTO",
    "JobPostingResponseDTO",
    "SubmitProposalRequestDTO",
    "UpdateProposalRequestDTO",
    "ProposalResponseDTO",

    # Contract DTOs
    "CreateContractRequestDTO",
    "UpdateContractRequestDTO",
    "ListContractsRequestDTO",
    "ContractResponseDTO",
    "ContractMetricsDTO",
    "CreateMilestoneRequestDTO",
    "UpdateMilestoneRequestDTO",
    "MilestoneResponseDTO",
    "SubmitTimesheetRequestDTO",
    "TimesheetResponseDTO",

    # Matching DTOs
    "VoteRequestDTO",
    "DiscoverVAsRequestDTO",
    "MatchVoteResponseDTO",
    "ContactInfoDTO",
    "MatchResponseDTO",
    "VoteResultDTO",

    # Payment DTOs
    "CreateUnlockIntentRequestDTO",
    "ConfirmPaymentRequestDTO",
    "ContractPaymentRequestDTO",
    "ListPaymentsRequestDTO",
    "RefundPaymentRequestDTO",
    "PaymentResponseDTO",
    "PaymentIntentResponseDTO",
    "ConfirmPaymentResultDTO",
    "WebhookResultDTO",

    # Notification DTOs
    "ListNotificationsRequestDTO",
    "NotificationResponseDTO",
    "MarkAllReadResponseDTO",

    # Upload DTOs
    "PresignedUrlRequestDTO",
    "ConfirmUploadRequestDTO",
    "PresignedUrlResponseDTO",
    "UploadedFileResponseDTO",
    "DeleteFileResponseDTO",
]
