# ============================================================================
# RETURNS REPOSITORY
# ============================================================================
# STATUS: Core - Returns table reads and partial updates
# PURPOSE: Execute ReturnsQueryBuilder statements on the async pool
# CREATED: 19 OCT 2026
# ============================================================================
"""
Returns Repository

Database access for the returns table. Raw dict rows out; mapping into
ReturnRecord happens in the service layer.

Every method takes its own connection from the pool for the duration of a
single statement. The three listing reads run concurrently, each on its own
connection; the first failure propagates and the request fails.

psycopg errors are not caught here (let exceptions propagate).
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from core.models.query import ReturnsQuery
from repositories.returns_query import ReturnsQueryBuilder
from repositories.table import TableRef

logger = logging.getLogger(__name__)


@dataclass
class ListingResult:
    """Raw results of the three listing reads."""

    total: int
    groups: List[Dict[str, Any]]
    rows: List[Dict[str, Any]]


class ReturnsRepository:
    """Repository for the returns table."""

    def __init__(self, pool: AsyncConnectionPool, table: TableRef):
        self.pool = pool
        self.table = table
        self.builder = ReturnsQueryBuilder(table)

    # ================================================================
    # EXECUTION HELPERS
    # ================================================================

    async def _fetch_all(self, query: sql.Composable, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        async with self.pool.connection() as conn:
            conn.row_factory = dict_row
            result = await conn.execute(query, params)
            return await result.fetchall()

    async def _fetch_one(self, query: sql.Composable, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        async with self.pool.connection() as conn:
            conn.row_factory = dict_row
            result = await conn.execute(query, params)
            return await result.fetchone()

    # ================================================================
    # LISTING
    # ================================================================

    async def list_page(self, query: ReturnsQuery) -> ListingResult:
        """
        Run count, stats and page reads concurrently.

        Args:
            query: Validated listing request

        Returns:
            ListingResult with the filtered total, grouped counts, and rows
        """
        statements = self.builder.build_listing(query)

        count_row, groups, rows = await asyncio.gather(
            self._fetch_one(statements.count, statements.params),
            self._fetch_all(statements.stats, statements.params),
            self._fetch_all(statements.page, statements.page_params),
        )

        total = int(count_row["total"]) if count_row and count_row.get("total") is not None else 0
        logger.debug(
            f"Listed {len(rows)} rows from {self.table} "
            f"(total={total}, page={query.page}, limit={query.limit})"
        )
        return ListingResult(total=total, groups=groups, rows=rows)

    # ================================================================
    # UPDATE
    # ================================================================

    async def update(self, ticket_link: str, changes: Dict[str, Optional[str]]) -> Optional[Dict[str, Any]]:
        """
        Apply a partial update to one row and stamp last_follow_up.

        Args:
            ticket_link: Row key (exact match)
            changes: Column -> new value for the mutable columns present

        Returns:
            The updated row, or None if no row matched
        """
        statement = self.builder.build_update(ticket_link, changes)
        row = await self._fetch_one(statement.query, statement.params)

        if row is None:
            logger.info(f"No row in {self.table} for ticket_link {ticket_link!r}")
        else:
            logger.info(f"Updated {sorted(changes)} for ticket_link {ticket_link!r}")
        return row

    # ================================================================
    # FILTER OPTIONS
    # ================================================================

    async def filter_options(self) -> Dict[str, List[str]]:
        """Distinct non-empty priorities and statuses; empty lists when none."""
        row = await self._fetch_one(self.builder.build_filter_options())
        row = row or {}
        return {
            "priorities": list(row.get("priorities") or []),
            "statuses": list(row.get("statuses") or []),
        }

    # ================================================================
    # HEALTH
    # ================================================================

    async def ping(self) -> bool:
        row = await self._fetch_one(sql.SQL("SELECT 1 AS health_check"))
        return bool(row and row.get("health_check") == 1)


__all__ = ["ReturnsRepository", "ListingResult"]
