# ============================================================================
# RETURN RECORD MODEL
# ============================================================================
# STATUS: Domain model - One row of the returns table
# PURPOSE: Fixed transport shape plus the raw-row mapper
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================
"""
Return Record Model

The only entity the API serves. Every field is transported as a string or
null. Rows are created and deleted by an upstream ingestion process; this
service only reads them and partially updates three columns.

Row mapping:
    Required columns (ticket_link .. om_request, status) coalesce NULL to "".
    Nullable columns (om_update, last_follow_up, request_date,
    designated_om_agent) keep NULL.
    Dates and datetimes are rendered as ISO-8601; anything else via str().
"""

from datetime import date, datetime
from typing import Any, ClassVar, Dict, Mapping, Optional

from pydantic import BaseModel, Field

from core.contracts import REQUIRED_COLUMNS, RETURN_COLUMNS


def stringify(value: Any) -> Optional[str]:
    """Render a database or JSON value as transport text, keeping None."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


class ReturnRecord(BaseModel):
    """
    A returns/requests row.

    Maps to: configured TABLE_SCHEMA.TABLE_NAME (default "oem_returns")
    """

    __sql_primary_key__: ClassVar[str] = "ticket_link"

    # Identity
    ticket_link: str = Field(..., description="Ticket URL; unique key for updates")

    # Upstream fields (read-only here)
    order_number: str = ""
    sku: str = ""
    customer_name: str = ""
    priority: str = ""
    om_request: str = ""

    # status, om_update and designated_om_agent are mutable via PATCH
    status: str = ""
    om_update: Optional[str] = None
    last_follow_up: Optional[str] = Field(
        default=None, description="Stamped by the server on every update"
    )
    request_date: Optional[str] = None
    designated_om_agent: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ReturnRecord":
        """
        Normalize a dict_row from psycopg into the fixed record shape.

        Missing keys behave like NULL.
        """
        values: Dict[str, Optional[str]] = {}
        for column in RETURN_COLUMNS:
            value = stringify(row.get(column))
            if value is None and column in REQUIRED_COLUMNS:
                value = ""
            values[column] = value
        return cls(**values)

    def to_csv_values(self) -> list:
        """Field values in column order, for CSV export."""
        return [getattr(self, column) for column in RETURN_COLUMNS]


__all__ = ["ReturnRecord", "stringify"]
