# ============================================================================
# OM DASHBOARD API - MAIN APPLICATION
# ============================================================================
# STATUS: Core - FastAPI application entry point
# PURPOSE: App factory, pool lifecycle, request logging
# CREATED: 19 OCT 2026
# ============================================================================
"""
OM Dashboard API Main Application

FastAPI application that:
1. Serves the returns listing, export, filter-option and update endpoints
2. Owns the PostgreSQL connection pool for the process lifetime
3. Tags every request with a request id for structured logs

When DATABASE_URL is unset the app still starts; data endpoints answer 503.

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8000
    python main.py            # honours HOST / PORT
"""

import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from __version__ import __version__, BUILD_DATE, SERVICE_NAME
from api.routes import router, register_error_handlers
from core.config import AppConfig, get_config
from core.logging import configure_logging, get_logger, log_context
from health import health_router
from repositories import ReturnsRepository, close_pool, open_pool, resolve_table
from services import ReturnsService

logger = get_logger(__name__)


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Override configuration (defaults to environment)
    """
    config = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the pool on startup, close it on shutdown."""
        logger.info(f"Starting {SERVICE_NAME} v{__version__} (Build {BUILD_DATE})")

        pool = None
        app.state.returns_service = None

        if config.has_database_config:
            table = resolve_table(config.table_name, config.table_schema)
            pool = await open_pool(config)
            app.state.returns_service = ReturnsService(ReturnsRepository(pool, table))
            logger.info(f"Serving returns from {table}")
        else:
            logger.warning("DATABASE_URL is not configured; data endpoints will return 503")

        yield

        logger.info(f"Shutting down {SERVICE_NAME}...")
        app.state.returns_service = None
        await close_pool(pool)
        logger.info(f"{SERVICE_NAME} stopped")

    app = FastAPI(
        title="OM Dashboard API",
        description="Listing, export and partial update of OM return requests",
        version=__version__,
        lifespan=lifespan,
    )

    # Dashboard may be served from a different origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "PATCH", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        start = time.monotonic()
        with log_context(request_id=request_id):
            response = await call_next(request)
            duration_ms = (time.monotonic() - start) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"({duration_ms:.1f}ms)"
            )
        response.headers["x-request-id"] = request_id
        return response

    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(router)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "service": SERVICE_NAME,
            "version": __version__,
            "build_date": BUILD_DATE,
            "status": "running",
            "docs": "/docs",
        }

    return app


_config = get_config()

configure_logging(level=_config.log_level, json_output=_config.log_json)

app = create_app(_config)


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=_config.host,
        port=_config.port,
        reload=_config.reload,
    )
