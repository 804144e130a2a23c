"""
Global error handling for the FastAPI application.
Maps domain error codes to HTTP statuses and formats every error body consistently.
"""

import logging
import traceback
from typing import Any, Dict, Optional

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.config import settings
from app.domain.models.base import DomainException

logger = logging.getLogger(__name__)


ERROR_STATUS_CODES: Dict[str, int] = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "BUSINESS_RULE_VIOLATION": status.HTTP_400_BAD_REQUEST,
    "PERMISSION_DENIED": status.HTTP_403_FORBIDDEN,
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DUPLICATE_ENTITY": status.HTTP_409_CONFLICT,
    "PAYMENT_REQUIRED": status.HTTP_402_PAYMENT_REQUIRED,
    "EXTERNAL_SERVICE_ERROR": status.HTTP_502_BAD_GATEWAY,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


def status_for_code(code: Optional[str]) -> int:
    """HTTP status for a domain error code; unknown codes are server errors."""
    return ERROR_STATUS_CODES.get(code or "", status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_detail(message: Optional[str], code: Optional[str]) -> Dict[str, Any]:
    """
    Error payload placed under "detail".
    Server errors hide the real message unless debugging.
    """
    if status_for_code(code) >= 500 and code != "EXTERNAL_SERVICE_ERROR":
        detail = {"error": INTERNAL_ERROR_MESSAGE, "code": code or "INTERNAL_ERROR"}
        if settings.debug and message:
            detail["message"] = message
        return detail
    return {"error": message, "code": code}


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Handle domain exceptions raised outside a use case."""
    return JSONResponse(
        status_code=status_for_code(exc.code),
        content={"detail": error_detail(exc.message, exc.code)}
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request body/query validation failures are plain 400s."""
    logger.info(f"Request validation failed on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Validation error",
            "code": "VALIDATION_ERROR",
            "details": jsonable_encoder(exc.errors()),
        }
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return self.handle_exception(request, exc)

    def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        error_response: Dict[str, Any] = {
            "error": INTERNAL_ERROR_MESSAGE,
            "code": "INTERNAL_ERROR",
        }

        if settings.debug:
            error_response["debug"] = {
                "exception_type": type(exc).__name__,
                "message": str(exc),
                "traceback": traceback.format_exc().split("\n")
            }

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response
        )
