"""
Request counting for the API rate limits.

Two backends count hits per key: a process-local fixed window and a
Redis backend that several API instances can share. ``RateLimiter``
chooses between them at start-up and turns a request into a key.
"""

import time
import logging
from typing import Callable, Dict, List, Optional
from dataclasses import dataclass

import redis
from fastapi import Request

from app.config import get_settings

logger = logging.getLogger(__name__)

KeyFunc = Callable[[Request], str]


@dataclass
class RateLimit:
    """At most ``requests`` hits per ``window`` seconds."""
    requests: int
    window: int

    def window_bounds(self, now: int) -> List[int]:
        """Start and end of the fixed window containing ``now``."""
        start = now - (now % self.window)
        return [start, start + self.window]


@dataclass
class RateLimitStatus:
    limit: int
    remaining: int
    reset_time: int
    retry_after: Optional[int] = None

    @classmethod
    def allowed(cls, rate_limit: RateLimit, used: int, reset_time: int) -> "RateLimitStatus":
        return cls(limit=rate_limit.requests, remaining=max(0, rate_limit.requests - used),
                   reset_time=reset_time)

    @classmethod
    def blocked(cls, rate_limit: RateLimit, reset_time: int, retry_after: int) -> "RateLimitStatus":
        return cls(limit=rate_limit.requests, remaining=0, reset_time=reset_time,
                   retry_after=max(1, retry_after))

    @property
    def exceeded(self) -> bool:
        return self.retry_after is not None

    def to_headers(self) -> Dict[str, str]:
        headers = {
            'X-RateLimit-Limit': str(self.limit),
            'X-RateLimit-Remaining': str(self.remaining),
            'X-RateLimit-Reset': str(self.reset_time),
        }
        if self.exceeded:
            headers['Retry-After'] = str(self.retry_after)
        return headers


class InMemoryRateLimiter:
    """Fixed window counters held in this process. Used when Redis is not configured."""

    def __init__(self):
        # key -> [hits, window end]
        self._windows: Dict[str, List[int]] = {}

    def is_allowed(self, key: str, rate_limit: RateLimit) -> RateLimitStatus:
        now = int(time.time())
        window = self._windows.get(key)
        if window is None or window[1] <= now:
            window = [0, rate_limit.window_bounds(now)[1]]
            self._windows[key] = window

        hits, reset_time = window
        if hits >= rate_limit.requests:
            return RateLimitStatus.blocked(rate_limit, reset_time, reset_time - now)

        window[0] = hits + 1
        return RateLimitStatus.allowed(rate_limit, window[0], reset_time)

    def reset(self) -> None:
        self._windows.clear()


class RedisRateLimiter:
    """Counters kept in Redis so every API instance sees the same totals."""

    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client

    def is_allowed(self, key: str, rate_limit: RateLimit) -> RateLimitStatus:
        """Fixed window counter stored under ``{key}:{window start}``."""
        now = int(time.time())
        start, reset_time = rate_limit.window_bounds(now)
        bucket = f"{key}:{start}"

        pipe = self.redis.pipeline()
        pipe.incr(bucket)
        pipe.expire(bucket, rate_limit.window)
        hits = pipe.execute()[0]

        if hits > rate_limit.requests:
            return RateLimitStatus.blocked(rate_limit, reset_time, reset_time - now)
        return RateLimitStatus.allowed(rate_limit, hits, reset_time)


class RateLimiter:
    """Entry point used by the middleware and the route dependencies."""

    def __init__(self, redis_url: Optional[str] = None, enabled: bool = True):
        self.enabled = enabled
        self.limiter = self._select_backend(redis_url)

    @staticmethod
    def _select_backend(redis_url: Optional[str]):
        if not redis_url:
            logger.info("Rate limiter backend: memory")
            return InMemoryRateLimiter()
        try:
            client = redis.from_url(redis_url)
            client.ping()
        except redis.RedisError as e:
            logger.warning(f"Redis unavailable for rate limiting, falling back to memory: {e}")
            return InMemoryRateLimiter()
        logger.info("Rate limiter backend: redis")
        return RedisRateLimiter(client)

    def check_rate_limit(self, request: Request, rate_limit: RateLimit,
                         key_func: Optional[KeyFunc] = None) -> Optional[RateLimitStatus]:
        """Count the request against ``rate_limit``. Returns None while limiting is off."""
        if not self.enabled:
            return None
        key = (key_func or ip_key)(request)
        return self.limiter.is_allowed(key, rate_limit)


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else 'unknown'


def ip_key(request: Request) -> str:
    """One budget per client IP and path."""
    return f"rate_limit:ip:{_client_ip(request)}:{request.url.path}"


def global_ip_key(request: Request) -> str:
    """One budget per client IP across the whole API."""
    return f"rate_limit:ip:{_client_ip(request)}"


_settings = get_settings()

RATE_LIMITS = {
    'default': RateLimit(requests=_settings.rate_limit_max_requests,
                         window=_settings.rate_limit_window_seconds),
    'auth': RateLimit(requests=10, window=60),
    'create': RateLimit(requests=20, window=60),
    'upload': RateLimit(requests=10, window=60),
    'payment': RateLimit(requests=10, window=60),
    'search': RateLimit(requests=50, window=60),
}


rate_limiter: Optional[RateLimiter] = None


def init_rate_limiter(redis_url: Optional[str] = None, enabled: bool = True) -> RateLimiter:
    global rate_limiter
    rate_limiter = RateLimiter(redis_url, enabled=enabled)
    return rate_limiter


def get_rate_limiter() -> RateLimiter:
    """Process-wide limiter, built from settings on first use."""
    global rate_limiter
    if rate_limiter is None:
        rate_limiter = RateLimiter(_settings.redis_url, enabled=_settings.rate_limit_enabled)
    return rate_limiter
