"""
Global per-IP request limit applied ahead of every route.
"""

import re
from typing import Iterable, List, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .limiter import RATE_LIMITS, KeyFunc, get_rate_limiter, global_ip_key


def unlimited_paths(api_prefix: str = '/api') -> List[str]:
    """Health and docs routes, which never count against the IP budget."""
    return [
        r'^/health$',
        rf'^{re.escape(api_prefix)}/health$',
        r'.*/docs',
        r'.*/redoc',
        r'.*/openapi\.json$',
    ]


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Counts every request outside the health and docs routes against one IP budget."""

    def __init__(self, app, default_limit: str = 'default', api_prefix: str = '/api',
                 exclude_paths: Optional[Iterable[str]] = None,
                 key_func: Optional[KeyFunc] = None):
        super().__init__(app)
        self.limit = RATE_LIMITS.get(default_limit, RATE_LIMITS['default'])
        self.key_func = key_func or global_ip_key
        self.unlimited = [re.compile(p) for p in (exclude_paths or unlimited_paths(api_prefix))]

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if any(pattern.match(path) for pattern in self.unlimited):
            return await call_next(request)

        result = get_rate_limiter().check_rate_limit(request, self.limit, self.key_func)
        if result is None:
            return await call_next(request)

        if result.exceeded:
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "error": "Too many requests from this IP, please try again later.",
                    "code": "RATE_LIMIT_EXCEEDED",
                },
                headers=result.to_headers(),
            )

        response = await call_next(request)
        response.headers.update(result.to_headers())
        return response
