# ============================================================================
# APPLICATION CONFIGURATION
# ============================================================================
# STATUS: Core - Configuration management
# PURPOSE: Environment-based configuration for the API process
# CREATED: 19 OCT 2026
# ============================================================================
"""
Application Configuration

Loads configuration from environment variables with sensible defaults.

DATABASE_URL is optional at load time. When it is missing the process still
starts, and every data endpoint answers 503 until it is configured.
TABLE_NAME and TABLE_SCHEMA are read raw here and validated by
repositories.table.resolve_table.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Optional

from core.config.defaults import PoolDefaults

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    """Configuration for the API process."""

    # Database
    database_url: Optional[str] = None
    table_name: Optional[str] = None
    table_schema: Optional[str] = None
    pool: PoolDefaults = field(default_factory=PoolDefaults)

    # Hosting
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables."""
        return cls(
            database_url=os.environ.get("DATABASE_URL") or None,
            table_name=os.environ.get("TABLE_NAME"),
            table_schema=os.environ.get("TABLE_SCHEMA"),
            pool=PoolDefaults.from_env(),
            host=os.environ.get("HOST") or os.environ.get("HOSTNAME") or "0.0.0.0",
            port=int(os.environ.get("PORT") or 8000),
            reload=os.environ.get("RELOAD", "false").lower() == "true",
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            log_json=os.environ.get("LOG_FORMAT", "").lower() == "json",
        )

    @property
    def has_database_config(self) -> bool:
        """Check if the data store is configured."""
        return bool(self.database_url)

    @property
    def safe_database_url(self) -> str:
        """DATABASE_URL with credentials stripped, for logging."""
        if not self.database_url:
            return ""
        if "@" in self.database_url:
            return self.database_url.split("@")[-1]
        if "password=" in self.database_url:
            return self.database_url.split("password=")[0] + "password=***"
        return self.database_url


# Module-level singleton
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the process configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
        logger.debug(f"Loaded config (database configured: {_config.has_database_config})")
    return _config


def reset_config() -> None:
    """Drop the cached configuration (tests)."""
    global _config
    _config = None
