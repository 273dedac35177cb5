# ============================================================================
# SERVICES MODULE
# ============================================================================
# STATUS: Core - Business logic layer
# PURPOSE: Returns listing/update service and CSV export
# CREATED: 19 OCT 2026
# ============================================================================
"""
Services Module

Business logic for the OM Dashboard API.
Services sit between the HTTP routes and the repositories.

Usage:
    from services import ReturnsService

    service = ReturnsService(ReturnsRepository(pool, table))
    page = await service.list_returns(ReturnsQuery.from_params(params))
"""

from .returns_service import ReturnsService
from .csv_export import rows_to_csv, export_filename, CSV_HEADERS

__all__ = [
    "ReturnsService",
    "rows_to_csv",
    "export_filename",
    "CSV_HEADERS",
]
