# 📄 File: plantpal/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# The last safety net: if something breaks in a way nobody planned for, this
# answers with a plain "Internal server error" instead of a crash.
# 🧪 Purpose (Technical Summary):
# Outermost middleware converting unhandled exceptions into the 500 failure
# envelope. The underlying message is included only in development. Expected
# PlantPalException errors are rendered earlier by the exception handlers in
# plantpal.main and never reach this layer.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware
# 🔄 Connected Modules / Calls From:
# plantpal.main (middleware registration)

import logging
import uuid

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from . import REQUEST_ID_HEADER

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
INTERNAL_ERROR_CODE = "INTERNAL_ERROR"


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Global catch-all for unhandled exceptions.

    Args:
        app: Wrapped ASGI application
        expose_errors: Include the exception message in the response body
    """

    def __init__(self, app: ASGIApp, expose_errors: bool = False):
        super().__init__(app)
        self.expose_errors = expose_errors

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return self._handle_exception(request, exc)

    def _handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
        logger.error(
            f"Unhandled {exc.__class__.__name__} on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
            extra={"extra_fields": {"request_id": request_id, "error_type": exc.__class__.__name__}},
        )

        content = {"error": INTERNAL_ERROR_MESSAGE, "code": INTERNAL_ERROR_CODE}
        if self.expose_errors:
            content["message"] = str(exc)

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
            headers={REQUEST_ID_HEADER: request_id},
        )
