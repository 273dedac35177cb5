# ============================================================================
# HEALTH CHECK ROUTER
# ============================================================================
# STATUS: Infrastructure - FastAPI health check endpoints
# PURPOSE: Liveness and readiness probes
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Router

Endpoints:
    GET /livez   - Liveness probe (is the process alive?)
                   Always 200; no external dependencies.

    GET /readyz  - Readiness probe (can we serve data?)
                   200 if configuration and PostgreSQL checks pass,
                   503 otherwise.
"""

import asyncio
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from health.checks import check_config, check_postgres
from __version__ import __version__, BUILD_DATE

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["Health"])


# ============================================================================
# LIVENESS PROBE
# ============================================================================

@health_router.get("/livez")
async def liveness_probe():
    """
    Liveness probe.

    Returns 200 if the process is alive. No external checks.
    """
    return {"status": "alive", "version": __version__, "build_date": BUILD_DATE}


# ============================================================================
# READINESS PROBE
# ============================================================================

@health_router.get("/readyz")
async def readiness_probe(request: Request):
    """
    Readiness probe.

    Checks run in parallel; any unhealthy check makes the service not ready.
    """
    service = getattr(request.app.state, "returns_service", None)

    config_result, postgres_result = await asyncio.gather(
        check_config(service),
        check_postgres(service),
    )
    checks = {"config": config_result, "postgres": postgres_result}

    failing = {name: result.to_dict() for name, result in checks.items() if not result.is_healthy}
    if failing:
        logger.warning(f"Readiness failed: {', '.join(failing)}")
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "checks": failing},
        )

    return {
        "status": "ready",
        "checks_passed": len(checks),
    }


__all__ = [
    "health_router",
]
