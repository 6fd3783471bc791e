# 📄 File: plantpal/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the helpers that look at every request on its way in and out: one
# keeps a diary of requests, the other turns unexpected crashes into tidy errors.
# 🧪 Purpose (Technical Summary):
# Package initialization for HTTP middleware with shared configuration and the
# path exclusion helper.
# 🔗 Dependencies:
# starlette middleware components
# 🔄 Connected Modules / Calls From:
# plantpal.main (middleware registration)

"""
PlantPal API Middleware Package

Middleware Stack Order (outermost first):
    1. ErrorHandlingMiddleware (catches anything the routes did not handle)
    2. RequestLoggingMiddleware (request id, timing, access log)
    3. Application Routes

Usage:
    app.add_middleware(RequestLoggingMiddleware, slow_request_threshold=2.0)
    app.add_middleware(ErrorHandlingMiddleware, expose_errors=settings.is_development)
"""

from typing import Any, Dict

MIDDLEWARE_CONFIG: Dict[str, Dict[str, Any]] = {
    "logging": {
        # Probes would drown out real traffic
        "exclude_paths": ["/health", "/health/ready"],
        "slow_request_threshold": 2.0,
    },
}

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time"


def should_exclude_path(middleware_name: str, path: str) -> bool:
    """Check whether a middleware should skip a path."""
    config = MIDDLEWARE_CONFIG.get(middleware_name, {})
    return path in config.get("exclude_paths", [])


from .error_handling import ErrorHandlingMiddleware  # noqa: E402
from .logging import RequestLoggingMiddleware  # noqa: E402

__all__ = [
    "ErrorHandlingMiddleware",
    "MIDDLEWARE_CONFIG",
    "REQUEST_ID_HEADER",
    "RESPONSE_TIME_HEADER",
    "RequestLoggingMiddleware",
    "should_exclude_path",
]
