"""
Matching DTOs for the application layer.
Covers votes, matches, contact unlock and discovery.
"""

from datetime import datetime
from typing import Optional, Union
from pydantic import Field

from .base_dto import BaseDTO, RequestDTO, ResponseDTO
from .profile_dto import CompanySummaryDTO, VAProfileResponseDTO
from .job_dto import JobPostingResponseDTO


class VoteRequestDTO(RequestDTO):
    """
    A yes/no vote on a job posting / VA profile pair. Companies must name
    the VA profile; VAs vote with their own profile when it is omitted.
    """

    job_posting_id: int = Field(description="Job posting voted on")
    va_profile_id: Optional[int] = Field(default=None, description="VA profile voted on")
    vote: bool = Field(description="True for interest")


class DiscoverVAsRequestDTO(RequestDTO):
    job_posting_id: int = Field(description="Posting to find candidates for")


class MatchVoteResponseDTO(ResponseDTO):
    job_posting_id: int
    va_profile_id: int
    vote_by_company: Optional[bool] = None
    vote_by_va: Optional[bool] = None


class ContactInfoDTO(BaseDTO):
    """Contact details revealed only once a match is unlocked."""

    va_email: Optional[str] = None
    company_email: Optional[str] = None


class MatchResponseDTO(ResponseDTO):
    """DTO for match responses."""

    job_posting_id: int
    va_profile_id: int
    company_id: int
    contact_unlocked: bool = False
    unlocked_at: Optional[datetime] = None
    job_posting: Optional[JobPostingResponseDTO] = None
    company: Optional[CompanySummaryDTO] = None
    va_profile: Optional[VAProfileResponseDTO] = None
    contact_info: Optional[ContactInfoDTO] = None


class VoteResultDTO(BaseDTO):
    """Outcome of a vote: the match when one exists, otherwise the vote row."""

    match: bool
    data: Union[MatchResponseDTO, MatchVoteResponseDTO]
    message: Optional[str] = None
