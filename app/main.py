"""
BlytzWork API application: middleware, exception handlers, routers and health check.
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.application.dto.base_dto import HealthCheckResponseDTO
from app.config import Settings, settings as default_settings
from app.domain.models.base import DomainException
from app.infrastructure.rate_limiting import RateLimitMiddleware, init_rate_limiter
from app.infrastructure.web.middleware.error_handler import (
    ErrorHandlerMiddleware,
    domain_exception_handler,
    validation_exception_handler,
)
from app.infrastructure.web.routers import (
    auth,
    va,
    company,
    jobs,
    proposals,
    contracts,
    milestones,
    timesheets,
    matches,
    payments,
    notifications,
    uploads,
)


logging.basicConfig(
    level=logging.DEBUG if default_settings.debug else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

ROUTES = (
    ("/auth", auth, "Authentication"),
    ("/va", va, "VA Profiles"),
    ("/company", company, "Company Profiles"),
    ("/jobs", jobs, "Job Marketplace"),
    ("/proposals", proposals, "Proposals"),
    ("/contracts", contracts, "Contracts"),
    ("/milestones", milestones, "Contracts"),
    ("/timesheets", timesheets, "Contracts"),
    ("/matches", matches, "Matching"),
    ("/payments", payments, "Payments"),
    ("/notifications", notifications, "Notifications"),
    ("/upload", uploads, "File Uploads"),
)


def init_sentry(settings: Settings) -> None:
    """Initialize Sentry outside development when a DSN is configured."""
    if not settings.sentry_dsn or settings.is_development:
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        traces_sample_rate=settings.sentry_traces_sample_rate,
        environment=settings.environment,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
    )
    logger.info("Sentry initialized")


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info(f"Starting {settings.api_title} v{settings.api_version}")
        logger.info(f"Environment: {settings.environment}")
        try:
            settings.validate_environment()
        except ValueError as e:
            logger.critical(str(e))
            raise
        init_sentry(settings)

        yield

        # Shutdown
        logger.info("Shutting down application")

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        docs_url=f"{settings.api_prefix}/docs" if not settings.is_production else None,
        redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production else None,
        openapi_url=f"{settings.api_prefix}/openapi.json" if not settings.is_production else None,
        lifespan=lifespan
    )

    # Middleware runs outermost-last: errors wrap rate limiting, CORS wraps everything
    init_rate_limiter(settings.redis_url, enabled=settings.rate_limit_enabled)
    app.add_middleware(RateLimitMiddleware, api_prefix=settings.api_prefix)
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DomainException, domain_exception_handler)

    for path, module, tag in ROUTES:
        app.include_router(module.router, prefix=f"{settings.api_prefix}{path}", tags=[tag])

    @app.get("/")
    async def root() -> Dict[str, Any]:
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "environment": settings.environment,
            "health": f"{settings.api_prefix}/health"
        }

    @app.get("/health")
    @app.get(f"{settings.api_prefix}/health")
    async def health_check() -> Dict[str, Any]:
        """Liveness probe, served with and without the API prefix."""
        health = HealthCheckResponseDTO(
            status="healthy",
            timestamp=datetime.now(timezone.utc),
            version=settings.api_version,
            environment=settings.environment,
        )
        return health.model_dump(mode="json", by_alias=True, exclude_none=True)

    # Unknown routes get a JSON body; 404s raised by handlers keep their detail
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            return JSONResponse(
                status_code=404,
                content={
                    "error": "Route not found",
                    "code": "NOT_FOUND",
                    "path": request.url.path
                }
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None)
        )

    return app


app = create_application()

if __name__ == "__main__":
    import uvicorn

    try:
        default_settings.validate_environment()
    except ValueError as e:
        logger.critical(str(e))
        sys.exit(1)

    uvicorn.run(
        "app.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.is_development,
        log_level="debug" if default_settings.debug else "info",
    )
