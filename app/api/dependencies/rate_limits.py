from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from infrastructure.logging import get_module_logger

logger = get_module_logger()

# Publishing endpoints fan out to the worker pool, so they get a tighter
# limit than the read-only diagnostics.
PUBLISH_LIMIT = "60/minute"
READ_LIMIT = "120/minute"

limiter = Limiter(
    key_func=get_remote_address,
)


async def rate_limit_handler(request: Request, exc: Exception):
    """Return 429 with a short message when a client exceeds its limit."""
    if isinstance(exc, RateLimitExceeded):
        logger.warning(
            "rate_limit_exceeded",
            path=request.url.path,
            client=get_remote_address(request),
            limit=str(exc.detail),
        )
        return JSONResponse(
            status_code=429,
            content={"message": "Rate limit exceeded"},
        )


def setup_rate_limiter(app: FastAPI):
    """
    Setup rate limiting for the FastAPI application.
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


def get_limiter():
    """
    Returns the limiter instance.
    """
    return limiter
