"""Rate limiting for public endpoints.

Uses slowapi; state lives in Redis when ``REDIS_URL`` points at one, and in
process memory otherwise.
"""

from functools import lru_cache

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from libs.common.config import get_settings


def _get_client_ip(request: Request) -> str:
    """
    Client IP, honouring X-Forwarded-For from the fronting proxy.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


@lru_cache
def get_limiter() -> Limiter:
    """
    Create and return a cached Limiter instance.
    """
    settings = get_settings()
    return Limiter(
        key_func=_get_client_ip,
        storage_uri=settings.REDIS_URL,
        strategy="fixed-window",
        enabled=settings.RATE_LIMIT_ENABLED,
    )


limiter = get_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """
    JSON 429 response with a Retry-After hint.
    """
    return JSONResponse(
        status_code=429,
        content={
            "detail": f"Rate limit exceeded: {exc.detail}",
            "code": "RATE_LIMIT_EXCEEDED",
        },
        headers={"Retry-After": str(getattr(exc, "retry_after", 60))},
    )


def registration_limit(func):
    """Limit public registration submissions (REGISTRATION_RATE_LIMIT per IP)."""
    return limiter.limit(get_settings().REGISTRATION_RATE_LIMIT)(func)
