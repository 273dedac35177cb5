# ============================================================================
# LISTING QUERY MODEL
# ============================================================================
# STATUS: Domain model - Validated listing request and its results
# PURPOSE: Normalize GET /returns parameters; carry page + stats back
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================
"""
Listing Query Model

ReturnsQuery is the validated form of the GET /returns query string. All
normalization happens in from_params, so anything downstream can trust:

- page >= 1, limit in [10, 200]
- sort_by is one of the ten sortable columns
- sort_order is ASC or DESC
- empty-string filters are None (condition omitted, not a wildcard)
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Mapping, Optional, Tuple

from core.config.defaults import LISTING
from core.contracts import SortOrder, resolve_sort_column
from core.errors import InvalidRequestError
from core.models.return_record import ReturnRecord


_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _parse_int(value: Optional[str], default: int) -> int:
    """
    Read leading digits the way a browser's parseInt does ("25abc" -> 25).

    Input with no leading integer falls back to the default.
    """
    if value is None:
        return default
    match = _LEADING_INT_RE.match(str(value))
    if match is None:
        return default
    return int(match.group(1))


def _parse_date(name: str, value: Optional[str]) -> Optional[date]:
    """Whole value must be an ISO date or timestamp; trailing text is rejected."""
    if not value:
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise InvalidRequestError(
            f"{name} must be a date in YYYY-MM-DD format", field=name, value=value
        )


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    return value if value else None


def page_range(total: int, page: int, limit: int) -> Tuple[int, int]:
    """
    1-based inclusive range of rows shown on a page.

    (0, 0) when there are no rows at all. A page past the end yields a start
    greater than the end, which callers render as an empty page.
    """
    if total <= 0:
        return (0, 0)
    return ((page - 1) * limit + 1, min(page * limit, total))


@dataclass(frozen=True)
class ReturnsQuery:
    """Validated filter/sort/page request for the returns listing."""

    page: int = LISTING.default_page
    limit: int = LISTING.default_limit
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    customer: Optional[str] = None
    sku: Optional[str] = None
    sort_by: str = "request_date"
    sort_order: SortOrder = SortOrder.DESC

    @classmethod
    def from_params(cls, params: Mapping[str, Optional[str]]) -> "ReturnsQuery":
        """
        Build from raw query-string values (camelCase keys, as sent by the UI).

        Raises:
            InvalidRequestError: dateFrom/dateTo is not a valid date
        """
        page = LISTING.clamp_page(_parse_int(params.get("page"), LISTING.default_page))
        limit = LISTING.clamp_limit(_parse_int(params.get("limit"), LISTING.default_limit))

        return cls(
            page=page,
            limit=limit,
            date_from=_parse_date("dateFrom", params.get("dateFrom")),
            date_to=_parse_date("dateTo", params.get("dateTo")),
            priority=_blank_to_none(params.get("priority")),
            status=_blank_to_none(params.get("status")),
            customer=_blank_to_none(params.get("customer")),
            sku=_blank_to_none(params.get("sku")),
            sort_by=resolve_sort_column(params.get("sortBy")),
            sort_order=SortOrder.parse(params.get("sortOrder")),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


NULL_GROUP_KEY = "null"


def _group_key(value: Optional[str]) -> str:
    return NULL_GROUP_KEY if value is None else str(value)


@dataclass
class ReturnsStats:
    """Counts over the filtered set, summed from (status, priority) groups."""

    total_returns: int = 0
    by_status: Dict[str, int] = field(default_factory=dict)
    by_priority: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_groups(cls, total: int, groups: List[Mapping]) -> "ReturnsStats":
        """
        Fold grouped rows ({status, priority, cnt}) into two flat maps.

        NULL status or priority is counted under "null"; "" stays "".
        """
        stats = cls(total_returns=total)
        for group in groups:
            count = int(group.get("cnt") or 0)
            status = _group_key(group.get("status"))
            priority = _group_key(group.get("priority"))
            stats.by_status[status] = stats.by_status.get(status, 0) + count
            stats.by_priority[priority] = stats.by_priority.get(priority, 0) + count
        return stats


@dataclass
class ReturnsPage:
    """One listing result: the page of rows, the filtered total, and stats."""

    query: ReturnsQuery
    rows: List[ReturnRecord]
    total: int
    stats: ReturnsStats

    @property
    def display_range(self) -> Tuple[int, int]:
        return page_range(self.total, self.query.page, self.query.limit)


__all__ = ["ReturnsQuery", "ReturnsStats", "ReturnsPage", "page_range"]
