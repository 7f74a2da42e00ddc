"""Rate limiting for login and submission endpoints"""
from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from eve_srp.config import settings


def get_identifier(request: Request) -> str:
    """
    Get identifier for rate limiting

    Priority:
    1. First X-Forwarded-For hop (only when TRUST_PROXY_HEADERS is set)
    2. Socket peer address
    """
    if settings.TRUST_PROXY_HEADERS:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return get_remote_address(request)


# Create limiter instance
limiter = Limiter(
    key_func=get_identifier,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


# Rate limit configurations for different endpoints
RATE_LIMITS = {
    "eve_login": settings.EVE_LOGIN_RATE_LIMIT,
    "admin_login": settings.LOGIN_RATE_LIMIT,
    "srp_submit": settings.SRP_SUBMIT_RATE_LIMIT,
}


def get_rate_limit(endpoint: str) -> str:
    """Get rate limit for specific endpoint"""
    return RATE_LIMITS[endpoint]
