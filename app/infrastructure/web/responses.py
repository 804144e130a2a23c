"""
Helpers turning use case results into HTTP responses.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException
from fastapi.encoders import jsonable_encoder

from app.application.dto.base_dto import BaseDTO, PageDTO
from app.application.use_cases.base_use_case import UseCaseResult
from app.infrastructure.web.middleware.error_handler import error_detail, status_for_code


def unwrap_result(result: UseCaseResult) -> Any:
    """
    Return the data of a successful result, or raise the HTTP error matching its code.
    """
    if result.success:
        return result.data
    raise HTTPException(
        status_code=status_for_code(result.error_code),
        detail=error_detail(result.error, result.error_code),
    )


def serialize(data: Any) -> Any:
    """camelCase JSON for DTOs, lists of DTOs and plain values."""
    if isinstance(data, BaseDTO):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [serialize(item) for item in data]
    return jsonable_encoder(data)


def success_response(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True, "data": serialize(data)}
    if message:
        body["message"] = message
    return body


def page_response(page: PageDTO) -> Dict[str, Any]:
    """Paginated list envelope: items under data, counts under pagination."""
    return {
        "success": True,
        "data": serialize(page.items),
        "pagination": page.pagination.model_dump(mode="json", by_alias=True),
    }


def message_response(message: str) -> Dict[str, Any]:
    return {"success": True, "message": message}
