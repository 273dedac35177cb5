# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export contracts, errors, and domain models
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================

from core.contracts import ReturnStatus, SortOrder
from core.errors import (
    ReturnsError,
    ConfigurationError,
    InvalidRequestError,
    DataStoreError,
)
from core.models import (
    ReturnRecord,
    ReturnsQuery,
    ReturnsStats,
    ReturnsPage,
    ReturnUpdate,
)

__all__ = [
    # Enums
    "ReturnStatus",
    "SortOrder",
    # Errors
    "ReturnsError",
    "ConfigurationError",
    "InvalidRequestError",
    "DataStoreError",
    # Models
    "ReturnRecord",
    "ReturnsQuery",
    "ReturnsStats",
    "ReturnsPage",
    "ReturnUpdate",
]
