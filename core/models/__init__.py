# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for domain models
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Domain models for the returns table: the record shape, the validated
listing request, and the partial update.
"""

from core.models.return_record import ReturnRecord, stringify
from core.models.query import ReturnsQuery, ReturnsStats, ReturnsPage, page_range
from core.models.update import ReturnUpdate, UNSET, ALLOWED_STATUS_MESSAGE

__all__ = [
    # Record
    "ReturnRecord",
    "stringify",
    # Listing
    "ReturnsQuery",
    "ReturnsStats",
    "ReturnsPage",
    "page_range",
    # Update
    "ReturnUpdate",
    "UNSET",
    "ALLOWED_STATUS_MESSAGE",
]
