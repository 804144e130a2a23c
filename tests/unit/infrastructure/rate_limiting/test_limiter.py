"""
Unit tests for the rate limiter backends.
"""

import pytest
from unittest.mock import Mock, patch
from app.infrastructure.rate_limiting.limiter import (
    InMemoryRateLimiter, RedisRateLimiter, RateLimiter, RateLimit,
    RateLimitStatus, ip_key, global_ip_key
)


NOW = 1_700_000_040


def fake_request(host="10.0.0.1", path="/api/jobs/marketplace"):
    request = Mock()
    request.client.host = host
    request.url.path = path
    return request


class TestInMemoryRateLimiter:

    def setup_method(self):
        self.limiter = InMemoryRateLimiter()
        self.limit = RateLimit(requests=3, window=60)

    @patch("app.infrastructure.rate_limiting.limiter.time.time", return_value=NOW)
    def test_allows_up_to_limit(self, _):
        statuses = [self.limiter.is_allowed("k", self.limit) for _ in range(3)]

        assert [s.remaining for s in statuses] == [2, 1, 0]
        assert not any(s.exceeded for s in statuses)

    @patch("app.infrastructure.rate_limiting.limiter.time.time", return_value=NOW)
    def test_rejects_over_limit(self, _):
        for _ in range(3):
            self.limiter.is_allowed("k", self.limit)

        status = self.limiter.is_allowed("k", self.limit)

        assert status.exceeded
        assert status.remaining == 0
        assert status.retry_after == 60 - (NOW % 60)

    def test_window_resets(self):
        with patch("app.infrastructure.rate_limiting.limiter.time.time", return_value=NOW):
            for _ in range(4):
                self.limiter.is_allowed("k", self.limit)
        with patch("app.infrastructure.rate_limiting.limiter.time.time", return_value=NOW + 60):
            assert not self.limiter.is_allowed("k", self.limit).exceeded

    @patch("app.infrastructure.rate_limiting.limiter.time.time", return_value=NOW)
    def test_keys_are_independent(self, _):
        for _ in range(3):
            self.limiter.is_allowed("a", self.limit)
        assert not self.limiter.is_allowed("b", self.limit).exceeded

    @patch("app.infrastructure.rate_limiting.limiter.time.time", return_value=NOW)
    def test_reset(self, _):
        for _ in range(3):
            self.limiter.is_allowed("k", self.limit)
        self.limiter.reset()
        assert self.limiter.is_allowed("k", self.limit).remaining == 2


class TestRedisRateLimiter:

    def setup_method(self):
        self.client = Mock()
        self.pipeline = Mock()
        self.client.pipeline.return_value = self.pipeline
        self.limiter = RedisRateLimiter(self.client)

    @patch("app.infrastructure.rate_limiting.limiter.time.time", return_value=NOW)
    def test_fixed_window(self, _):
        self.pipeline.execute.return_value = [5, True]

        status = self.limiter.is_allowed("k", RateLimit(requests=10, window=60))

        assert status.remaining == 5
        assert not status.exceeded
        self.pipeline.incr.assert_called_once_with(f"k:{NOW - NOW % 60}")

    @patch("app.infrastructure.rate_limiting.limiter.time.time", return_value=NOW)
    def test_fixed_window_exceeded(self, _):
        self.pipeline.execute.return_value = [11, True]

        status = self.limiter.is_allowed("k", RateLimit(requests=10, window=60))

        assert status.exceeded

    @patch("app.infrastructure.rate_limiting.limiter.time.time", return_value=NOW)
    def test_bucket_expires_with_its_window(self, _):
        self.pipeline.execute.return_value = [11, True]

        status = self.limiter.is_allowed("k", RateLimit(requests=10, window=60))

        assert status.retry_after == 60 - (NOW % 60)
        self.pipeline.expire.assert_called_once_with(f"k:{NOW - NOW % 60}", 60)


class TestRateLimiter:

    def test_disabled_limiter_skips_checks(self):
        limiter = RateLimiter(enabled=False)
        assert limiter.check_rate_limit(fake_request(), RateLimit(requests=1, window=60)) is None

    def test_uses_ip_and_path_key_by_default(self):
        limiter = RateLimiter()
        limiter.limiter = Mock()

        limiter.check_rate_limit(fake_request(), RateLimit(requests=1, window=60))

        assert limiter.limiter.is_allowed.call_args[0][0] == "rate_limit:ip:10.0.0.1:/api/jobs/marketplace"

    @patch("app.infrastructure.rate_limiting.limiter.redis.from_url")
    def test_falls_back_when_redis_unreachable(self, from_url):
        import redis
        from_url.return_value.ping.side_effect = redis.ConnectionError("refused")

        limiter = RateLimiter(redis_url="redis://localhost:6379/0")

        assert isinstance(limiter.limiter, InMemoryRateLimiter)

    @patch("app.infrastructure.rate_limiting.limiter.redis.from_url")
    def test_uses_redis_when_reachable(self, from_url):
        limiter = RateLimiter(redis_url="redis://localhost:6379/0")
        assert isinstance(limiter.limiter, RedisRateLimiter)

    def test_keys(self):
        request = fake_request()
        assert ip_key(request) == "rate_limit:ip:10.0.0.1:/api/jobs/marketplace"
        assert global_ip_key(request) == "rate_limit:ip:10.0.0.1"


class TestRateLimitStatus:

    def test_headers(self):
        headers = RateLimitStatus(limit=10, remaining=0, reset_time=123, retry_after=7).to_headers()
        assert headers == {
            "X-RateLimit-Limit": "10",
            "X-RateLimit-Remaining": "0",
            "X-RateLimit-Reset": "123",
            "Retry-After": "7",
        }
