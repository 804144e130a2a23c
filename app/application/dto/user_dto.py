"""
User DTOs for the application layer.
Data Transfer Objects for authentication and account operations.
"""

from typing import Optional
from pydantic import Field, EmailStr

from app.domain.models.user import Role
from .base_dto import BaseDTO, RequestDTO, ResponseDTO, UpdateRequestDTO


# Request DTOs
class SyncUserRequestDTO(RequestDTO):
    """Identity taken from the verified token; never from the request body."""

    uid: str = Field(description="Identity provider uid")
    email: EmailStr = Field(description="Email on the verified token")


class UpdateUserRequestDTO(UpdateRequestDTO):
    """DTO for account update requests."""

    email: Optional[EmailStr] = Field(default=None, description="New email address")
    role: Optional[str] = Field(default=None, description="company or va")


class UpdateRoleRequestDTO(RequestDTO):
    role: str = Field(description="company or va")


class ForgotPasswordRequestDTO(RequestDTO):
    email: EmailStr = Field(description="Account email")


# Response DTOs
class UserResponseDTO(ResponseDTO):
    """DTO for user responses."""

    id: str
    email: str
    role: Role
    profile_complete: bool = False


class SyncUserResponseDTO(BaseDTO):
    user: UserResponseDTO
    created: bool
    message: str


class CustomTokenResponseDTO(BaseDTO):
    custom_token: str
