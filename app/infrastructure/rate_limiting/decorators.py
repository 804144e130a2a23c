"""
Per-route rate limits, attached with ``Depends``.
"""

from typing import Optional

from fastapi import HTTPException, Request, status

from .limiter import RATE_LIMITS, KeyFunc, RateLimit, RateLimitStatus, get_rate_limiter


def create_rate_limit_dependency(
    limit_name: str = 'default',
    rate_limit: Optional[RateLimit] = None,
    key_func: Optional[KeyFunc] = None,
    error_message: str = "Rate limit exceeded"
):
    """
    Build a dependency that counts the request against a named limit
    and answers 429 once the limit is spent.

        async def sync(..., _: None = Depends(auth_rate_limit)):
    """
    async def enforce_rate_limit(request: Request) -> Optional[RateLimitStatus]:
        limit = rate_limit or RATE_LIMITS.get(limit_name, RATE_LIMITS['default'])
        result = get_rate_limiter().check_rate_limit(request, limit, key_func)
        if result is not None and result.exceeded:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail={"error": error_message, "code": "RATE_LIMIT_EXCEEDED"},
                headers=result.to_headers(),
            )
        return result

    return enforce_rate_limit


auth_rate_limit = create_rate_limit_dependency(
    'auth', error_message="Too many authentication attempts. Please try again later.")
create_rate_limit = create_rate_limit_dependency(
    'create', error_message="Too many create operations. Please slow down.")
upload_rate_limit = create_rate_limit_dependency(
    'upload', error_message="Too many uploads. Please wait before uploading again.")
payment_rate_limit = create_rate_limit_dependency(
    'payment', error_message="Too many payment requests. Please try again later.")
search_rate_limit = create_rate_limit_dependency(
    'search', error_message="Too many search requests. Please wait before searching again.")
