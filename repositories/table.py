# ============================================================================
# TABLE IDENTIFIER RESOLVER
# ============================================================================
# STATUS: Core - Qualified table name from configuration
# PURPOSE: Validate TABLE_NAME / TABLE_SCHEMA before they reach SQL
# CREATED: 19 OCT 2026
# ============================================================================
"""
Table Identifier Resolver

The returns table is addressed by two configuration strings. Neither is
trusted: anything outside [A-Za-z0-9_] is discarded.

    invalid/unset table  -> DEFAULT_TABLE
    invalid/unset schema -> no schema qualification

Resolution never raises.

Usage:
    table = resolve_table(config.table_name, config.table_schema)
    sql.SQL("SELECT ... FROM {}").format(table.identifier)
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from psycopg import sql

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "oem_returns"

_IDENTIFIER_RE = re.compile(r"[A-Za-z0-9_]+")


def sanitize_identifier(name: Optional[str]) -> Optional[str]:
    """Return name unchanged if it is a safe identifier, else None."""
    if name and _IDENTIFIER_RE.fullmatch(name):
        return name
    return None


@dataclass(frozen=True)
class TableRef:
    """A validated (schema, table) pair."""

    table: str = DEFAULT_TABLE
    schema: Optional[str] = None

    @property
    def identifier(self) -> sql.Identifier:
        """Composable for psycopg.sql queries."""
        if self.schema:
            return sql.Identifier(self.schema, self.table)
        return sql.Identifier(self.table)

    @property
    def quoted(self) -> str:
        """Qualified name as it appears in SQL, e.g. "support"."oem_returns"."""
        if self.schema:
            return f'"{self.schema}"."{self.table}"'
        return f'"{self.table}"'

    def __str__(self) -> str:
        return self.quoted


def resolve_table(table_name: Optional[str] = None, schema_name: Optional[str] = None) -> TableRef:
    """
    Build a TableRef from raw configuration values.

    Args:
        table_name: TABLE_NAME (falls back to DEFAULT_TABLE if unset or invalid)
        schema_name: TABLE_SCHEMA (dropped if unset or invalid)
    """
    table = sanitize_identifier(table_name)
    if table is None:
        if table_name:
            logger.warning(f"Ignoring invalid TABLE_NAME, using {DEFAULT_TABLE!r}")
        table = DEFAULT_TABLE

    schema = sanitize_identifier(schema_name)
    if schema is None and schema_name:
        logger.warning("Ignoring invalid TABLE_SCHEMA, table will be unqualified")

    return TableRef(table=table, schema=schema)


__all__ = ["TableRef", "resolve_table", "sanitize_identifier", "DEFAULT_TABLE"]
