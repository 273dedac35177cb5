# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Listing bounds and connection pool sizing
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides the fixed bounds for listing requests and the defaults for the
database connection pool. Pool values can be overridden via environment
variables; listing bounds cannot.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ListingDefaults:
    """
    Bounds for GET /returns pagination.

    limit is clamped to [min_limit, max_limit]; page is clamped to >= 1.
    """
    default_page: int = 1
    default_limit: int = 50
    min_limit: int = 10
    max_limit: int = 200

    def clamp_page(self, page: int) -> int:
        return max(1, page)

    def clamp_limit(self, limit: int) -> int:
        return min(self.max_limit, max(self.min_limit, limit))


@dataclass(frozen=True)
class PoolDefaults:
    """
    Defaults for the async connection pool.

    timeout_seconds bounds both pool acquisition and the initial connect;
    connections idle longer than max_idle_seconds are closed.
    """
    min_size: int = 1
    max_size: int = 10
    timeout_seconds: float = 10.0
    max_idle_seconds: float = 30.0

    @classmethod
    def from_env(cls) -> "PoolDefaults":
        """Create from environment variables."""
        return cls(
            min_size=int(os.getenv("DB_POOL_MIN_SIZE", 1)),
            max_size=int(os.getenv("DB_POOL_MAX_SIZE", 10)),
            timeout_seconds=float(os.getenv("DB_POOL_TIMEOUT", 10.0)),
            max_idle_seconds=float(os.getenv("DB_POOL_MAX_IDLE", 30.0)),
        )


# Module-level singleton for the fixed listing bounds
LISTING = ListingDefaults()
