# ============================================================================
# HEALTH CHECK MODULE
# ============================================================================
# STATUS: Infrastructure - Health probes
# PURPOSE: Liveness and readiness endpoints
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Module

- /livez:  Process alive (instant)
- /readyz: Database configured and reachable

Usage:
    from health import health_router

    app.include_router(health_router)
"""

from health.checks import (
    HealthStatus,
    HealthCheckResult,
    check_config,
    check_postgres,
)
from health.router import health_router

__all__ = [
    "HealthStatus",
    "HealthCheckResult",
    "check_config",
    "check_postgres",
    "health_router",
]
