# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the OM Dashboard API.
"""

from core.config.defaults import (
    ListingDefaults,
    PoolDefaults,
    LISTING,
)
from core.config.settings import (
    AppConfig,
    get_config,
    reset_config,
)

__all__ = [
    "ListingDefaults",
    "PoolDefaults",
    "LISTING",
    "AppConfig",
    "get_config",
    "reset_config",
]
