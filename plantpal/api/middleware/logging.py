# 📄 File: plantpal/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Keeps a diary of every request made to PlantPal: what was asked for, who
# answered, and how long it took, with a warning when something was slow.
# 🧪 Purpose (Technical Summary):
# Request logging middleware: assigns or propagates X-Request-ID, binds it to the
# logging context for the whole request, and logs method, path, status and
# duration, flagging slow requests.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, plantpal.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# plantpal.main (middleware registration)

import logging
import time
import uuid
from typing import Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from plantpal.shared.utils.logging import get_logger, log_context

from . import MIDDLEWARE_CONFIG, REQUEST_ID_HEADER, RESPONSE_TIME_HEADER, should_exclude_path

logger = logging.getLogger(__name__)
access_logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Access logging with request correlation.

    Every response carries ``X-Request-ID`` (echoed when the client sent one)
    and ``X-Response-Time``.
    """

    def __init__(self, app: ASGIApp, slow_request_threshold: Optional[float] = None):
        super().__init__(app)
        self.slow_request_threshold = (
            slow_request_threshold
            if slow_request_threshold is not None
            else MIDDLEWARE_CONFIG["logging"]["slow_request_threshold"]
        )

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        skip_log = should_exclude_path("logging", request.url.path)

        start_time = time.perf_counter()
        with log_context(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception as e:
                elapsed = time.perf_counter() - start_time
                logger.error(
                    f"{request.method} {request.url.path} failed after {elapsed:.3f}s: {e.__class__.__name__}",
                    extra={"extra_fields": self._fields(request, None, elapsed)},
                )
                raise

            elapsed = time.perf_counter() - start_time
            if not skip_log:
                self._log_response(request, response.status_code, elapsed)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[RESPONSE_TIME_HEADER] = f"{elapsed:.3f}s"
        return response

    def _log_response(self, request: Request, status_code: int, elapsed: float) -> None:
        extra = {
            "client_ip": request.client.host if request.client else None,
            "user_agent": request.headers.get("user-agent", ""),
        }
        if elapsed >= self.slow_request_threshold:
            access_logger.warning(
                f"Slow request: {request.method} {request.url.path} -> {status_code} in {elapsed:.3f}s",
                extra={**self._fields(request, status_code, elapsed), "slow_request": True},
            )
            return
        access_logger.log_request(request.method, request.url.path, status_code, elapsed * 1000, extra=extra)

    @staticmethod
    def _fields(request: Request, status_code: Optional[int], elapsed: float) -> dict:
        return {
            "event_type": "http_request",
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round(elapsed * 1000, 2),
            "client_ip": request.client.host if request.client else None,
            "user_agent": request.headers.get("user-agent", ""),
        }
