# 📄 File: plantpal/shared/core/rate_limiter.py
# 🧭 Purpose (Layman Explanation):
# Stops someone from hammering the sign-up and login forms by counting how many
# times each address tries within a minute.
# 🧪 Purpose (Technical Summary):
# Process-wide slowapi Limiter keyed by client address, the limits applied to
# credential endpoints, and the 429 handler that renders the failure envelope.
# 🔗 Dependencies:
# slowapi, FastAPI, plantpal.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# Auth API endpoints (decorators), plantpal.main (wiring and enable flag)

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from .exceptions import RateLimitError

logger = logging.getLogger(__name__)

REGISTER_RATE_LIMIT = "5/minute"
LOGIN_RATE_LIMIT = "10/minute"

# Shared by every router; counters live in process memory
limiter = Limiter(key_func=get_remote_address)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render a slowapi rejection with the standard failure envelope."""
    client = get_remote_address(request)
    logger.warning(f"Rate limit exceeded for {client} on {request.method} {request.url.path}: {exc.detail}")
    error = RateLimitError("Too many requests, please try again later", limit=str(exc.detail))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def configure_rate_limiting(app: FastAPI, enabled: bool) -> None:
    """
    Attach the limiter to an application.

    Args:
        app: FastAPI application
        enabled: When False every limit is a no-op
    """
    limiter.enabled = enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    logger.info(f"Rate limiting {'enabled' if enabled else 'disabled'}")
