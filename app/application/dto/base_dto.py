"""
Base DTOs for the application layer.
Provides common patterns for request/response data transfer objects.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
from math import ceil

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


class BaseDTO(BaseModel):
    """Base DTO with common configuration. Fields are camelCase on the wire."""

    model_config = ConfigDict(
        # Accept both jobPostingId and job_posting_id
        populate_by_name=True,
        alias_generator=to_camel,
        # Build response DTOs straight from domain entities
        from_attributes=True,
        validate_assignment=True,
        extra="ignore",
    )


class RequestDTO(BaseDTO):
    """Base class for request DTOs."""

    model_config = ConfigDict(extra="forbid")


class ResponseDTO(BaseDTO):
    """Base class for response DTOs."""

    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, entity: Any, **extra: Any):
        """Build the DTO from an entity's attributes, with optional extra fields."""
        dto = cls.model_validate(entity)
        return dto.model_copy(update=extra) if extra else dto


class CreateRequestDTO(RequestDTO):
    """Base class for creation request DTOs."""
    pass


class UpdateRequestDTO(RequestDTO):
    """Base class for update request DTOs; only fields the client sent are applied."""

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, by_alias=False)


class ListRequestDTO(RequestDTO):
    """Base class for list request DTOs with pagination."""

    page: int = Field(default=1, ge=1, description="Page number")
    limit: int = Field(default=20, ge=1, le=100, description="Items per page")

    @property
    def offset(self) -> int:
        """Calculate offset for database queries."""
        return (self.page - 1) * self.limit


class PaginationDTO(BaseDTO):
    """Pagination block returned next to list data."""

    page: int = Field(description="Current page number")
    limit: int = Field(description="Items per page")
    total: int = Field(description="Total number of items")
    total_pages: int = Field(description="Total number of pages")

    @classmethod
    def create(cls, total: int, page: int, limit: int) -> "PaginationDTO":
        return cls(page=page, limit=limit, total=total, total_pages=ceil(total / limit) if limit else 0)


class PageDTO(BaseDTO):
    """One page of results."""

    items: List[Any] = Field(default_factory=list, description="List of items")
    pagination: PaginationDTO

    @classmethod
    def create(cls, items: List[Any], total: int, page: int, limit: int) -> "PageDTO":
        return cls(items=items, pagination=PaginationDTO.create(total, page, limit))


class HealthCheckResponseDTO(BaseDTO):
    """Health check response DTO."""

    status: str = Field(description="Service status")
    timestamp: datetime = Field(description="Check timestamp")
    version: Optional[str] = Field(default=None, description="Application version")
    environment: Optional[str] = Field(default=None, description="Deployment environment")
    database: Optional[str] = Field(default=None, description="Database status")
