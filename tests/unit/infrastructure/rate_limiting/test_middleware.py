"""
Tests for the global per-IP rate limit middleware.
"""

from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.infrastructure.rate_limiting.limiter import RateLimit, RateLimitStatus
from app.infrastructure.rate_limiting.middleware import RateLimitMiddleware, unlimited_paths


@pytest.fixture
def exhausted_limiter():
    limiter = Mock()
    limiter.check_rate_limit.return_value = RateLimitStatus.blocked(
        RateLimit(requests=100, window=900), reset_time=1_700_000_900, retry_after=30
    )
    with patch("app.infrastructure.rate_limiting.middleware.get_rate_limiter", return_value=limiter):
        yield limiter


def build_app(api_prefix: str) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, api_prefix=api_prefix)

    @app.get(f"{api_prefix}/health")
    async def health():
        return {"status": "healthy"}

    @app.get(f"{api_prefix}/jobs")
    async def jobs():
        return []

    return app


class TestRateLimitMiddleware:

    def test_health_under_configured_prefix_is_not_counted(self, exhausted_limiter):
        client = TestClient(build_app("/v1"))

        assert client.get("/v1/health").status_code == 200
        exhausted_limiter.check_rate_limit.assert_not_called()

    def test_other_routes_are_blocked_once_budget_is_spent(self, exhausted_limiter):
        client = TestClient(build_app("/v1"))

        response = client.get("/v1/jobs")

        assert response.status_code == 429
        assert response.json()["code"] == "RATE_LIMIT_EXCEEDED"
        assert response.headers["Retry-After"] == "30"

    def test_health_pattern_follows_prefix(self):
        patterns = unlimited_paths("/v1")

        assert r"^/v1/health$" in patterns
        assert r"^/api/health$" not in patterns
