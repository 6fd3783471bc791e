# 📄 File: plantpal/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# A quick "are you alive?" check for PlantPal, plus a deeper check that the
# database is reachable when one is configured.
# 🧪 Purpose (Technical Summary):
# Liveness and readiness endpoints. /health reports the storage backend in use;
# /health/ready probes the database (memory storage is always ready).
# 🔗 Dependencies:
# FastAPI, plantpal.shared.core.dependencies
# 🔄 Connected Modules / Calls From:
# plantpal.main (mounted at the root), load balancers and monitoring

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from plantpal.shared.core.dependencies import get_container

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get(
    "/health",
    summary="Basic Health Check",
    description="Liveness check for load balancers and monitoring",
)
async def health_check(request: Request) -> JSONResponse:
    container = get_container(request)
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": container.settings.APP_NAME,
            "version": container.settings.APP_VERSION,
            "storage": container.storage_backend,
        },
    )


@health_router.get(
    "/health/ready",
    summary="Readiness Probe",
    description="Checks that the configured storage can serve requests",
)
async def readiness_probe(request: Request) -> JSONResponse:
    """
    Readiness check.

    Returns 503 when the database backend is configured but unreachable.
    """
    container = get_container(request)
    components = {"storage": {"status": "healthy", "backend": container.storage_backend}}

    if container.database is not None:
        db_health = await container.database.health_check()
        components["storage"] = {**db_health, "backend": container.storage_backend}

    ready = components["storage"]["status"] == "healthy"
    if not ready:
        logger.warning("Readiness probe failed: storage unavailable")
    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "not_ready",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "components": components,
        },
    )
