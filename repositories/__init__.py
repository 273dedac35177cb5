# ============================================================================
# REPOSITORIES MODULE
# ============================================================================
# STATUS: Core - Database access layer
# PURPOSE: Pool lifecycle, table resolution, SQL composition, execution
# CREATED: 19 OCT 2026
# ============================================================================
"""
Repositories Module

Provides database access for the returns table.
Uses psycopg3 async with connection pooling.

Usage:
    from repositories import ReturnsRepository, open_pool, close_pool, resolve_table

    pool = await open_pool(config)
    repo = ReturnsRepository(pool, resolve_table(config.table_name, config.table_schema))
    options = await repo.filter_options()
    await close_pool(pool)
"""

from .database import create_pool, open_pool, close_pool
from .table import TableRef, resolve_table, sanitize_identifier, DEFAULT_TABLE
from .returns_query import ReturnsQueryBuilder, ListingStatements, UpdateStatement
from .returns_repo import ReturnsRepository, ListingResult

__all__ = [
    "create_pool",
    "open_pool",
    "close_pool",
    "TableRef",
    "resolve_table",
    "sanitize_identifier",
    "DEFAULT_TABLE",
    "ReturnsQueryBuilder",
    "ListingStatements",
    "UpdateStatement",
    "ReturnsRepository",
    "ListingResult",
]
