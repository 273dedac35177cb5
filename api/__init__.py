# ============================================================================
# API MODULE
# ============================================================================
# STATUS: Core - FastAPI routes
# PURPOSE: HTTP API for the returns dashboard
# CREATED: 19 OCT 2026
# ============================================================================
"""
API Module

FastAPI routes for the OM Dashboard API.
"""

from .routes import router, register_error_handlers, get_returns_service
from .schemas import (
    ReturnsListResponse,
    ReturnRowResponse,
    FilterOptionsResponse,
    ErrorResponse,
)

__all__ = [
    "router",
    "register_error_handlers",
    "get_returns_service",
    "ReturnsListResponse",
    "ReturnRowResponse",
    "FilterOptionsResponse",
    "ErrorResponse",
]
