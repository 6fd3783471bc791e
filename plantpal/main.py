# 📄 File: plantpal/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts PlantPal, plugs all of its parts together,
# and makes sure everything is ready to answer the web and mobile apps.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point: builds the ServiceContainer,
# registers middleware, routers, exception handlers and rate limiting, and ties
# container startup/shutdown to the application lifespan.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - plantpal.shared.config.settings
# - plantpal.shared.infrastructure.container
# - plantpal.api (routers and middleware)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup (plantpal.main:app)
# - Tests (create_application with injected collaborators)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from plantpal.api.middleware import ErrorHandlingMiddleware, RequestLoggingMiddleware
from plantpal.api.v1 import API_PREFIX, API_TAGS
from plantpal.api.v1.health import health_router
from plantpal.api.v1.router import api_v1_router
from plantpal.modules.community.domain.services.augmenter import SearchAugmenter
from plantpal.modules.diagnosis.domain.services.classifier import DiseaseClassifier
from plantpal.shared.config.settings import Settings, get_settings
from plantpal.shared.core.exceptions import PlantPalException, is_client_error
from plantpal.shared.core.rate_limiter import configure_rate_limiting
from plantpal.shared.infrastructure.container import build_container
from plantpal.shared.utils.logging import log_shutdown_event, log_startup_event, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Starts the service container (tables, sample data) before the first
    request and releases its connections on shutdown.
    """
    container = app.state.container
    settings = container.settings
    log_startup_event(settings.APP_NAME, settings.APP_VERSION, {"storage": container.storage_backend})

    try:
        await container.startup()
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        await container.shutdown()
        raise

    try:
        yield
    finally:
        log_shutdown_event(settings.APP_NAME)
        await container.shutdown()


def _validation_errors(exc: RequestValidationError) -> list:
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({
            "field": ".".join(location),
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "value_error"),
        })
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """Render every expected failure with the {"error", "code", "details"?} envelope."""

    @app.exception_handler(PlantPalException)
    async def plantpal_exception_handler(request: Request, exc: PlantPalException) -> JSONResponse:
        if is_client_error(exc):
            logger.info(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
        else:
            logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Request validation failed",
                "code": "VALIDATION_ERROR",
                "errors": _validation_errors(exc),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        code = "NOT_FOUND" if exc.status_code == 404 else f"HTTP_{exc.status_code}"
        message = "The requested resource was not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message, "code": code},
            headers=getattr(exc, "headers", None),
        )


def create_application(
    settings: Optional[Settings] = None,
    augmenter: Optional[SearchAugmenter] = None,
    classifier: Optional[DiseaseClassifier] = None,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Application factory function.

    Args:
        settings: Settings to use instead of the environment-derived ones
        augmenter: Search augmenter override
        classifier: Disease classifier override
        http_transport: httpx transport for outbound OAuth and chat-completion calls

    Returns:
        FastAPI: Configured application with its own ServiceContainer
    """
    settings = settings or get_settings()
    setup_logging(log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT, log_file=settings.LOG_FILE)

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_tags=API_TAGS,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )
    app.state.container = build_container(
        settings,
        augmenter=augmenter,
        classifier=classifier,
        http_transport=http_transport,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION (last added runs first)
    # =========================================================================

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ErrorHandlingMiddleware, expose_errors=settings.is_development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Response-Time"],
    )

    configure_rate_limiting(app, enabled=settings.RATE_LIMIT_ENABLED)
    register_exception_handlers(app)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(health_router, tags=["Health Check"])
    app.include_router(api_v1_router, prefix=API_PREFIX)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint with service information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "environment": settings.ENVIRONMENT,
            "health_check": "/health",
            "api_base": API_PREFIX,
        }

    logger.info(f"{settings.APP_NAME} application created ({settings.ENVIRONMENT})")
    return app


# Create the FastAPI application
app = create_application()


def main():
    """
    Run the application with uvicorn.

    Used by ``python -m plantpal.main`` and the ``plantpal-api`` script.
    """
    settings = get_settings()
    uvicorn.run(
        "plantpal.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
        workers=1 if settings.RELOAD else settings.WORKERS,
    )


if __name__ == "__main__":
    main()
