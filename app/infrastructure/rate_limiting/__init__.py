"""
Rate limits: a global per-IP budget plus stricter per-route limits
for auth, creates, uploads, payments and search.
"""

from .limiter import (
    RateLimit, RateLimitStatus,
    RateLimiter, InMemoryRateLimiter, RedisRateLimiter,
    get_rate_limiter, init_rate_limiter, ip_key, global_ip_key, RATE_LIMITS
)
from .decorators import (
    create_rate_limit_dependency,
    auth_rate_limit, create_rate_limit, upload_rate_limit,
    payment_rate_limit, search_rate_limit,
)
from .middleware import RateLimitMiddleware

__all__ = [
    'RateLimit', 'RateLimitStatus',
    'RateLimiter', 'InMemoryRateLimiter', 'RedisRateLimiter',
    'get_rate_limiter', 'init_rate_limiter', 'ip_key', 'global_ip_key', 'RATE_LIMITS',
    'create_rate_limit_dependency',
    'auth_rate_limit', 'create_rate_limit', 'upload_rate_limit',
    'payment_rate_limit', 'search_rate_limit',
    'RateLimitMiddleware',
]
