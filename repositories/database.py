# ============================================================================
# DATABASE CONNECTION POOL
# ============================================================================
# STATUS: Core - Async PostgreSQL connection management
# PURPOSE: Build, open, and close the process-wide psycopg3 async pool
# CREATED: 19 OCT 2026
# ============================================================================
"""
Database Connection Pool

Manages async PostgreSQL connections using psycopg3 and psycopg_pool.

The pool is an explicitly owned handle: main.py opens it in the FastAPI
lifespan, stores it on app.state, and closes it on shutdown. Nothing here
keeps a module-level pool.

Bounds:
    max_size          concurrent connections
    timeout           seconds to wait for a free connection (PoolTimeout)
    connect_timeout   seconds for a new server connection
    max_idle          seconds before an idle surplus connection is closed

Usage:
    pool = await open_pool(config)
    async with pool.connection() as conn:
        await conn.execute("SELECT 1")
    await close_pool(pool)
"""

import logging
from typing import Optional

from psycopg_pool import AsyncConnectionPool

from core.config import AppConfig
from core.errors import ConfigurationError

logger = logging.getLogger(__name__)


def create_pool(config: AppConfig) -> AsyncConnectionPool:
    """
    Construct (but do not open) a pool from configuration.

    Raises:
        ConfigurationError: DATABASE_URL is not set
    """
    if not config.has_database_config:
        raise ConfigurationError("DATABASE_URL is not configured")

    pool_cfg = config.pool
    logger.info(f"Initializing connection pool: {config.safe_database_url}")

    return AsyncConnectionPool(
        conninfo=config.database_url,
        min_size=pool_cfg.min_size,
        max_size=pool_cfg.max_size,
        timeout=pool_cfg.timeout_seconds,
        max_idle=pool_cfg.max_idle_seconds,
        kwargs={"connect_timeout": int(pool_cfg.timeout_seconds)},
        name="om-dashboard",
        open=False,  # opened explicitly by open_pool
    )


async def open_pool(config: AppConfig) -> AsyncConnectionPool:
    """Create and open a pool. Does not wait for connections to be ready."""
    pool = create_pool(config)
    await pool.open()
    logger.info(
        f"Connection pool opened (min={config.pool.min_size}, max={config.pool.max_size})"
    )
    return pool


async def close_pool(pool: Optional[AsyncConnectionPool]) -> None:
    """Close a pool if there is one."""
    if pool is None:
        return
    await pool.close()
    logger.info("Connection pool closed")


__all__ = ["create_pool", "open_pool", "close_pool"]
