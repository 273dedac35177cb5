# ============================================================================
# RETURNS QUERY BUILDER
# ============================================================================
# STATUS: Core - SQL composition for the returns table
# PURPOSE: Listing (count/stats/page), update, and filter-option statements
# CREATED: 19 OCT 2026
# ============================================================================
"""
Returns Query Builder

Pure SQL composition; no connections are opened here. The repository
executes what this module returns.

Listing:
    One WHERE clause and one parameter list are shared by three statements
    (count, stats grouped by status+priority, ordered page). The page
    statement appends LIMIT/OFFSET parameters after the shared ones.

Injection boundaries:
    - Table name comes from TableRef (already validated) via sql.Identifier
    - Sort column is resolved by ReturnsQuery against SORTABLE_COLUMNS and
      re-checked here before it is wrapped in sql.Identifier
    - Every filter and update value travels as a %s parameter

Null ordering:
    DESC -> NULLS LAST, ASC -> NULLS FIRST, for every column.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from psycopg import sql

from core.contracts import (
    DEFAULT_SORT_COLUMN,
    MUTABLE_COLUMNS,
    RETURN_COLUMNS,
    SORTABLE_COLUMNS,
    SortOrder,
)
from core.models.query import ReturnsQuery
from repositories.table import TableRef


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the filter is a literal substring match."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _column_list() -> sql.Composed:
    return sql.SQL(", ").join(sql.Identifier(column) for column in RETURN_COLUMNS)


@dataclass
class WhereClause:
    """AND-combined conditions with their positional parameters."""

    conditions: List[sql.Composable] = field(default_factory=list)
    params: List[Any] = field(default_factory=list)

    def add(self, condition: str, value: Any) -> None:
        self.conditions.append(sql.SQL(condition))
        self.params.append(value)

    def as_sql(self) -> sql.Composable:
        if not self.conditions:
            return sql.SQL("")
        return sql.SQL("WHERE ") + sql.SQL(" AND ").join(self.conditions)


@dataclass
class ListingStatements:
    """The three reads of one listing request."""

    count: sql.Composed
    stats: sql.Composed
    page: sql.Composed
    params: List[Any]
    page_params: List[Any]


@dataclass
class UpdateStatement:
    query: sql.Composed
    params: List[Any]


class ReturnsQueryBuilder:
    """Builds statements against one qualified returns table."""

    def __init__(self, table: TableRef):
        self.table = table

    # ================================================================
    # LISTING
    # ================================================================

    def build_where(self, query: ReturnsQuery) -> WhereClause:
        """
        Translate filters into conditions. Absent filters add nothing.

        Date bounds compare the date portion of request_date, inclusive.
        customer and sku are case-insensitive substring matches.
        """
        where = WhereClause()
        if query.date_from:
            where.add("(request_date::date >= %s)", query.date_from)
        if query.date_to:
            where.add("(request_date::date <= %s)", query.date_to)
        if query.priority:
            where.add("priority = %s", query.priority)
        if query.status:
            where.add("status = %s", query.status)
        if query.customer:
            where.add("customer_name ILIKE %s", f"%{escape_like(query.customer)}%")
        if query.sku:
            where.add("sku ILIKE %s", f"%{escape_like(query.sku)}%")
        return where

    def build_order_by(self, query: ReturnsQuery) -> sql.Composed:
        column = query.sort_by if query.sort_by in SORTABLE_COLUMNS else DEFAULT_SORT_COLUMN
        if query.sort_order == SortOrder.ASC:
            direction = sql.SQL("ASC NULLS FIRST")
        else:
            direction = sql.SQL("DESC NULLS LAST")
        return sql.SQL("ORDER BY {} {}").format(sql.Identifier(column), direction)

    def build_listing(self, query: ReturnsQuery) -> ListingStatements:
        """Count, stats and page statements sharing one WHERE clause."""
        where = self.build_where(query)
        where_sql = where.as_sql()

        count = sql.SQL("SELECT COUNT(*)::int AS total FROM {table} {where}").format(
            table=self.table.identifier,
            where=where_sql,
        )
        stats = sql.SQL(
            "SELECT status, priority, COUNT(*)::int AS cnt "
            "FROM {table} {where} "
            "GROUP BY status, priority"
        ).format(
            table=self.table.identifier,
            where=where_sql,
        )
        page = sql.SQL(
            "SELECT {columns} FROM {table} {where} {order_by} LIMIT %s OFFSET %s"
        ).format(
            columns=_column_list(),
            table=self.table.identifier,
            where=where_sql,
            order_by=self.build_order_by(query),
        )

        return ListingStatements(
            count=count,
            stats=stats,
            page=page,
            params=list(where.params),
            page_params=[*where.params, query.limit, query.offset],
        )

    # ================================================================
    # UPDATE
    # ================================================================

    def build_update(self, ticket_link: str, changes: Dict[str, Optional[str]]) -> UpdateStatement:
        """
        Single-row UPDATE ... RETURNING.

        last_follow_up is always stamped, whatever else changes.

        Raises:
            ValueError: changes is empty or names a non-mutable column
        """
        if not changes:
            raise ValueError("Update requires at least one changed field")

        assignments: List[sql.Composable] = []
        params: List[Any] = []
        for column, value in changes.items():
            if column not in MUTABLE_COLUMNS:
                raise ValueError(f"Column is not mutable: {column}")
            assignments.append(sql.SQL("{} = %s").format(sql.Identifier(column)))
            params.append(value)
        assignments.append(sql.SQL("last_follow_up = CURRENT_TIMESTAMP"))
        params.append(ticket_link)

        query = sql.SQL(
            "UPDATE {table} SET {assignments} WHERE ticket_link = %s RETURNING {columns}"
        ).format(
            table=self.table.identifier,
            assignments=sql.SQL(", ").join(assignments),
            columns=_column_list(),
        )
        return UpdateStatement(query=query, params=params)

    # ================================================================
    # FILTER OPTIONS
    # ================================================================

    def build_filter_options(self) -> sql.Composed:
        """Sorted distinct non-empty priority and status values, one row."""
        return sql.SQL(
            "SELECT "
            "(SELECT ARRAY_AGG(DISTINCT priority ORDER BY priority) FROM {table} "
            "WHERE priority IS NOT NULL AND priority != '') AS priorities, "
            "(SELECT ARRAY_AGG(DISTINCT status ORDER BY status) FROM {table} "
            "WHERE status IS NOT NULL AND status != '') AS statuses"
        ).format(table=self.table.identifier)


__all__ = [
    "ReturnsQueryBuilder",
    "ListingStatements",
    "UpdateStatement",
    "WhereClause",
    "escape_like",
]
