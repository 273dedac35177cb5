# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Status enum and column allow-lists
# PURPOSE: Closed sets that gate every value reaching SQL structure
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: ReturnStatus, SortOrder, RETURN_COLUMNS, SORTABLE_COLUMNS
# ============================================================================
"""
Base contracts for the returns table.

Everything here is a closed enumeration. Client input that would otherwise
shape a query (sort column, sort direction, status value) is resolved against
these sets before any SQL is composed.
"""

from enum import Enum
from typing import Optional, Tuple


# ============================================================================
# STATUS ENUM
# ============================================================================

class ReturnStatus(str, Enum):
    """
    Accepted values for the status column.

    INPROGRESS is a legacy spelling still present in stored rows; both it and
    IN_PROGRESS are accepted on update.
    """
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    CLOSED = "Closed"
    INPROGRESS = "Inprogress"

    @classmethod
    def values(cls) -> Tuple[str, ...]:
        return tuple(member.value for member in cls)

    @classmethod
    def parse(cls, value: str) -> Optional["ReturnStatus"]:
        """Exact, case-sensitive lookup. None when not a member."""
        try:
            return cls(value)
        except ValueError:
            return None


class SortOrder(str, Enum):
    """Sort direction for the listing query."""
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortOrder":
        """Only the exact string "asc" sorts ascending."""
        return cls.ASC if value == cls.ASC.value else cls.DESC


# ============================================================================
# COLUMN ALLOW-LISTS
# ============================================================================

# Column order of a Return Record, also the SELECT/RETURNING list
RETURN_COLUMNS: Tuple[str, ...] = (
    "ticket_link",
    "order_number",
    "sku",
    "customer_name",
    "priority",
    "om_request",
    "status",
    "om_update",
    "last_follow_up",
    "request_date",
    "designated_om_agent",
)

# Never null in transport; coalesced to "" by the row mapper
REQUIRED_COLUMNS: Tuple[str, ...] = (
    "ticket_link",
    "order_number",
    "sku",
    "customer_name",
    "priority",
    "om_request",
    "status",
)

NULLABLE_COLUMNS: Tuple[str, ...] = (
    "om_update",
    "last_follow_up",
    "request_date",
    "designated_om_agent",
)

SORTABLE_COLUMNS = frozenset({
    "ticket_link",
    "order_number",
    "sku",
    "customer_name",
    "priority",
    "status",
    "request_date",
    "last_follow_up",
    "om_update",
    "designated_om_agent",
})

DEFAULT_SORT_COLUMN = "request_date"

# Fields a PATCH may change; last_follow_up is stamped by the server
MUTABLE_COLUMNS: Tuple[str, ...] = ("status", "om_update", "designated_om_agent")


def resolve_sort_column(value: Optional[str]) -> str:
    """Map a client sort key onto the allow-list, defaulting to request_date."""
    if value in SORTABLE_COLUMNS:
        return value
    return DEFAULT_SORT_COLUMN


__all__ = [
    "ReturnStatus",
    "SortOrder",
    "RETURN_COLUMNS",
    "REQUIRED_COLUMNS",
    "NULLABLE_COLUMNS",
    "SORTABLE_COLUMNS",
    "DEFAULT_SORT_COLUMN",
    "MUTABLE_COLUMNS",
    "resolve_sort_column",
]
