"""
Pagination and list-filter query parameters shared by the routers.
"""

from typing import List, Optional

from fastapi import Query
from pydantic import BaseModel, Field

from app.config import settings


class PaginationParams(BaseModel):
    """Common pagination parameters."""
    page: int = Field(1, ge=1, description="Page number")
    limit: int = Field(settings.default_page_size, ge=1, le=settings.max_page_size, description="Items per page")


def pagination_params(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Items per page")
) -> PaginationParams:
    """Dependency reading page and limit from the query string."""
    return PaginationParams(page=page, limit=limit)


def split_csv(value: Optional[str]) -> List[str]:
    """Comma-separated query values, e.g. ?skills=excel,seo."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
