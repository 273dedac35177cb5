# ============================================================================
# RETURNS SERVICE
# ============================================================================
# STATUS: Domain service - Listing, partial update, filter options
# PURPOSE: Validate input, call the repository, map rows, translate errors
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================
"""
ReturnsService

Coordination layer between the HTTP routes and ReturnsRepository.

- Listing: run the three concurrent reads, fold grouped counts into stats,
  map rows through ReturnRecord.from_row
- Update: apply a validated ReturnUpdate; None when no row matched
- Filter options: distinct priorities and statuses

Input validation happens before this layer is reached (ReturnsQuery and
ReturnUpdate raise InvalidRequestError). Any psycopg error raised while
talking to the database is logged here and re-raised as DataStoreError.
No retries.

Pattern: Constructor injection of the repository, async methods.
"""

from contextlib import contextmanager
from typing import Dict, List, Optional

import psycopg

from core.errors import DataStoreError
from core.logging import get_logger, log_context
from core.models.query import ReturnsPage, ReturnsQuery, ReturnsStats
from core.models.return_record import ReturnRecord
from core.models.update import ReturnUpdate
from repositories.returns_repo import ReturnsRepository

logger = get_logger(__name__)


@contextmanager
def _data_store_errors(operation: str):
    """Log a database failure once and surface it as DataStoreError."""
    try:
        yield
    except psycopg.Error as e:
        logger.exception(f"{operation} failed: {e}")
        raise DataStoreError.from_exception(e, operation=operation) from e


class ReturnsService:
    """Business rules for the returns table."""

    def __init__(self, repository: ReturnsRepository):
        self.repository = repository

    # ================================================================
    # LISTING
    # ================================================================

    async def list_returns(self, query: ReturnsQuery) -> ReturnsPage:
        """
        Fetch one filtered, sorted page plus total and stats.

        Raises:
            DataStoreError: any of the three reads failed
        """
        with log_context(operation="list_returns"):
            with _data_store_errors("list_returns"):
                result = await self.repository.list_page(query)

            page = ReturnsPage(
                query=query,
                rows=[ReturnRecord.from_row(row) for row in result.rows],
                total=result.total,
                stats=ReturnsStats.from_groups(result.total, result.groups),
            )

            first, last = page.display_range
            logger.debug(f"Showing {first}-{last} of {page.total}")
            return page

    # ================================================================
    # UPDATE
    # ================================================================

    async def update_return(self, update: ReturnUpdate) -> Optional[ReturnRecord]:
        """
        Apply a partial update to the row keyed by update.ticket_link.

        Returns:
            The updated record, or None if no row has that ticket_link

        Raises:
            DataStoreError: the UPDATE failed
        """
        changes = update.changes()

        with log_context(operation="update_return", ticket_link=update.ticket_link):
            with _data_store_errors("update_return"):
                row = await self.repository.update(update.ticket_link, changes)

            if row is None:
                return None

            logger.info("Return updated", extra={"fields": list(changes)})
            return ReturnRecord.from_row(row)

    # ================================================================
    # FILTER OPTIONS
    # ================================================================

    async def get_filter_options(self) -> Dict[str, List[str]]:
        """
        Distinct non-empty priorities and statuses across the whole table.

        Raises:
            DataStoreError: the query failed
        """
        with log_context(operation="filter_options"):
            with _data_store_errors("filter_options"):
                return await self.repository.filter_options()


__all__ = ["ReturnsService"]
