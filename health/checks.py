# ============================================================================
# HEALTH CHECKS
# ============================================================================
# STATUS: Infrastructure - Readiness checks
# PURPOSE: Configuration and PostgreSQL connectivity checks
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Checks

Each check is an async callable returning a HealthCheckResult and never
raising; failures become unhealthy results.

- config:   DATABASE_URL present
- postgres: SELECT 1 through the pool within a timeout
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from services.returns_service import ReturnsService

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    """Health check status values."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass
class HealthCheckResult:
    """Result from a single health check."""
    status: HealthStatus
    message: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    duration_ms: float = 0.0

    @classmethod
    def healthy(cls, message: str = None, **details) -> "HealthCheckResult":
        return cls(status=HealthStatus.HEALTHY, message=message, details=details)

    @classmethod
    def unhealthy(cls, message: str, **details) -> "HealthCheckResult":
        return cls(status=HealthStatus.UNHEALTHY, message=message, details=details)

    @property
    def is_healthy(self) -> bool:
        return self.status == HealthStatus.HEALTHY

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result = {
            "status": self.status.value,
            "duration_ms": round(self.duration_ms, 2),
        }
        if self.message:
            result["message"] = self.message
        if self.details:
            result["details"] = self.details
        return result


async def check_config(service: Optional[ReturnsService]) -> HealthCheckResult:
    if service is None:
        return HealthCheckResult.unhealthy(
            message="DATABASE_URL is not configured",
            hint="Set DATABASE_URL",
        )
    return HealthCheckResult.healthy(
        message="Database configured",
        table=service.repository.table.quoted,
    )


async def check_postgres(
    service: Optional[ReturnsService],
    timeout_seconds: float = 5.0,
) -> HealthCheckResult:
    """PostgreSQL connectivity through the shared pool."""
    if service is None:
        return HealthCheckResult.unhealthy(message="PostgreSQL not configured")

    start = time.monotonic()
    try:
        ok = await asyncio.wait_for(service.repository.ping(), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        result = HealthCheckResult.unhealthy(
            message=f"PostgreSQL check timed out after {timeout_seconds}s"
        )
    except Exception as e:
        logger.warning(f"PostgreSQL health check failed: {e}")
        result = HealthCheckResult.unhealthy(
            message=f"PostgreSQL connection failed: {e}",
            exception_type=type(e).__name__,
        )
    else:
        if ok:
            result = HealthCheckResult.healthy(message="PostgreSQL connected")
        else:
            result = HealthCheckResult.unhealthy(
                message="PostgreSQL query returned unexpected result"
            )

    result.duration_ms = (time.monotonic() - start) * 1000
    return result


__all__ = [
    "HealthStatus",
    "HealthCheckResult",
    "check_config",
    "check_postgres",
]
