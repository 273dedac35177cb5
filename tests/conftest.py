"""
Shared fixtures: sample returns rows and an in-memory repository that
stands in for ReturnsRepository (no database).
"""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest

from core.models.query import ReturnsQuery
from repositories.returns_repo import ListingResult
from repositories.table import TableRef


SAMPLE_ROWS: List[Dict[str, Any]] = [
    {
        "ticket_link": "https://desk.example.com/t/1001",
        "order_number": "SO-1001",
        "sku": "AB-100",
        "customer_name": "Acme Corp",
        "priority": "High",
        "om_request": "Replace damaged unit",
        "status": "Open",
        "om_update": None,
        "last_follow_up": None,
        "request_date": datetime(2026, 9, 1, 8, 30, tzinfo=timezone.utc),
        "designated_om_agent": None,
    },
    {
        "ticket_link": "https://desk.example.com/t/1002",
        "order_number": "SO-1002",
        "sku": "AB-200",
        "customer_name": "Globex",
        "priority": "Low",
        "om_request": "Refund",
        "status": "Open",
        "om_update": "Called customer",
        "last_follow_up": datetime(2026, 9, 4, 15, 0, tzinfo=timezone.utc),
        "request_date": datetime(2026, 9, 3, 10, 0, tzinfo=timezone.utc),
        "designated_om_agent": "Dana",
    },
    {
        "ticket_link": "https://desk.example.com/t/1003",
        "order_number": "",
        "sku": "CD-300",
        "customer_name": "Acme Corp",
        "priority": "High",
        "om_request": "Exchange size",
        "status": "Closed",
        "om_update": "Shipped replacement",
        "last_follow_up": datetime(2026, 9, 10, 9, 0, tzinfo=timezone.utc),
        "request_date": datetime(2026, 9, 5, 12, 0, tzinfo=timezone.utc),
        "designated_om_agent": "Lee",
    },
    {
        "ticket_link": "https://desk.example.com/t/1004",
        "order_number": "SO-1004",
        "sku": "EF-400",
        "customer_name": "Initech",
        "priority": "Medium",
        "om_request": "Missing part",
        "status": "Inprogress",
        "om_update": None,
        "last_follow_up": None,
        "request_date": None,
        "designated_om_agent": None,
    },
]


class FakeReturnsRepository:
    """
    In-memory ReturnsRepository double.

    Supports exact status/priority filters and pagination; ignores sorting.
    Each update advances a fake clock by five minutes and stamps
    last_follow_up with it.
    """

    def __init__(self, rows: List[Dict[str, Any]]):
        self.rows = {row["ticket_link"]: dict(row) for row in rows}
        self.table = TableRef()
        self.updates: List[tuple] = []
        self.clock = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)

    async def list_page(self, query: ReturnsQuery) -> ListingResult:
        matching = [
            row for row in self.rows.values()
            if (not query.status or row["status"] == query.status)
            and (not query.priority or row["priority"] == query.priority)
        ]
        groups = Counter((row["status"], row["priority"]) for row in matching)
        page = matching[query.offset:query.offset + query.limit]
        return ListingResult(
            total=len(matching),
            groups=[
                {"status": status, "priority": priority, "cnt": count}
                for (status, priority), count in groups.items()
            ],
            rows=[dict(row) for row in page],
        )

    async def update(self, ticket_link: str, changes: Dict[str, Optional[str]]) -> Optional[Dict[str, Any]]:
        self.updates.append((ticket_link, dict(changes)))
        row = self.rows.get(ticket_link)
        if row is None:
            return None
        self.clock += timedelta(minutes=5)
        row.update(changes)
        row["last_follow_up"] = self.clock
        return dict(row)

    async def filter_options(self) -> Dict[str, List[str]]:
        return {
            "priorities": sorted({r["priority"] for r in self.rows.values() if r["priority"]}),
            "statuses": sorted({r["status"] for r in self.rows.values() if r["status"]}),
        }

    async def ping(self) -> bool:
        return True


@pytest.fixture
def sample_rows():
    return [dict(row) for row in SAMPLE_ROWS]


@pytest.fixture
def fake_repository(sample_rows):
    return FakeReturnsRepository(sample_rows)
