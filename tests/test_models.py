# ============================================================================
# DOMAIN MODEL TESTS
# ============================================================================
# STATUS: Tests - Listing query, row mapping, stats, partial update
# PURPOSE: Verify input normalization and row shaping without a database
# CREATED: 19 OCT 2026
# ============================================================================
"""
Domain Model Tests

Covers:
1. ReturnsQuery.from_params clamping and fallbacks
2. page_range display math
3. ReturnRecord.from_row null coalescing
4. ReturnsStats folding of grouped counts
5. ReturnUpdate tri-state parsing and validation

Run with:
    pytest tests/test_models.py -v
"""

from datetime import date, datetime, timezone

import pytest

from core.contracts import ReturnStatus, SortOrder, SORTABLE_COLUMNS
from core.errors import InvalidRequestError
from core.models import (
    ALLOWED_STATUS_MESSAGE,
    UNSET,
    ReturnRecord,
    ReturnsQuery,
    ReturnsStats,
    ReturnUpdate,
    page_range,
)


# ============================================================================
# LISTING QUERY
# ============================================================================

class TestReturnsQuery:
    """Tests for ReturnsQuery.from_params."""

    def test_defaults(self):
        query = ReturnsQuery.from_params({})
        assert query.page == 1
        assert query.limit == 50
        assert query.offset == 0
        assert query.sort_by == "request_date"
        assert query.sort_order == SortOrder.DESC
        assert query.priority is None
        assert query.date_from is None

    @pytest.mark.parametrize("raw,expected", [
        ("0", 1), ("-4", 1), ("1", 1), ("7", 7), ("abc", 1),
    ])
    def test_page_clamped_to_one(self, raw, expected):
        assert ReturnsQuery.from_params({"page": raw}).page == expected

    @pytest.mark.parametrize("raw,expected", [
        ("1", 10), ("10", 10), ("75", 75), ("200", 200), ("5000", 200), ("x", 50),
    ])
    def test_limit_clamped(self, raw, expected):
        assert ReturnsQuery.from_params({"limit": raw}).limit == expected

    @pytest.mark.parametrize("raw,expected", [
        ("25abc", 25), ("2.0", 10), (" 75 ", 75), ("+60", 60), ("1e3", 10),
    ])
    def test_limit_reads_leading_digits(self, raw, expected):
        assert ReturnsQuery.from_params({"limit": raw}).limit == expected

    @pytest.mark.parametrize("raw,expected", [("3rd", 3), ("2.9", 2), ("-", 1)])
    def test_page_reads_leading_digits(self, raw, expected):
        assert ReturnsQuery.from_params({"page": raw}).page == expected

    def test_offset(self):
        query = ReturnsQuery.from_params({"page": "3", "limit": "25"})
        assert query.offset == 50

    @pytest.mark.parametrize("column", sorted(SORTABLE_COLUMNS))
    def test_allowed_sort_columns_kept(self, column):
        assert ReturnsQuery.from_params({"sortBy": column}).sort_by == column

    @pytest.mark.parametrize("column", [
        "om_request", "id", "request_date; DROP TABLE oem_returns", "STATUS", "",
    ])
    def test_unknown_sort_column_falls_back(self, column):
        assert ReturnsQuery.from_params({"sortBy": column}).sort_by == "request_date"

    @pytest.mark.parametrize("raw,expected", [
        ("asc", SortOrder.ASC),
        ("desc", SortOrder.DESC),
        ("ASC", SortOrder.DESC),
        ("ascending", SortOrder.DESC),
        (None, SortOrder.DESC),
    ])
    def test_sort_order(self, raw, expected):
        assert ReturnsQuery.from_params({"sortOrder": raw}).sort_order == expected

    def test_empty_filters_are_omitted(self):
        query = ReturnsQuery.from_params({"priority": "", "status": "", "customer": "", "sku": ""})
        assert query.priority is None
        assert query.status is None
        assert query.customer is None
        assert query.sku is None

    def test_dates_parsed(self):
        query = ReturnsQuery.from_params({"dateFrom": "2026-09-01", "dateTo": "2026-09-30"})
        assert query.date_from == date(2026, 9, 1)
        assert query.date_to == date(2026, 9, 30)

    def test_invalid_date_rejected(self):
        with pytest.raises(InvalidRequestError) as exc:
            ReturnsQuery.from_params({"dateFrom": "yesterday"})
        assert exc.value.field == "dateFrom"
        assert exc.value.status_code == 400

    @pytest.mark.parametrize("raw", [
        "2026-09-01garbage", "2026-09-01 x", "2026-13-01", "01/09/2026",
    ])
    def test_malformed_dates_rejected(self, raw):
        with pytest.raises(InvalidRequestError) as exc:
            ReturnsQuery.from_params({"dateTo": raw})
        assert exc.value.field == "dateTo"

    @pytest.mark.parametrize("raw", [
        " 2026-09-01 ", "2026-09-01T08:30:00", "2026-09-01 08:30", "2026-09-01T08:30:00+02:00",
    ])
    def test_timestamp_input_uses_date_part(self, raw):
        assert ReturnsQuery.from_params({"dateFrom": raw}).date_from == date(2026, 9, 1)


class TestPageRange:
    """Displayed row range for a page."""

    def test_empty_result(self):
        assert page_range(0, 1, 50) == (0, 0)

    def test_first_page(self):
        assert page_range(120, 1, 50) == (1, 50)

    def test_last_partial_page(self):
        assert page_range(120, 3, 50) == (101, 120)

    def test_exact_fit(self):
        assert page_range(100, 2, 50) == (51, 100)


# ============================================================================
# ROW MAPPER
# ============================================================================

class TestReturnRecord:
    """Tests for ReturnRecord.from_row."""

    def test_required_fields_coalesce_to_empty_string(self):
        record = ReturnRecord.from_row({
            "ticket_link": "t/1",
            "order_number": None,
            "sku": None,
            "customer_name": None,
            "priority": None,
            "om_request": None,
            "status": None,
        })
        assert record.order_number == ""
        assert record.sku == ""
        assert record.customer_name == ""
        assert record.priority == ""
        assert record.om_request == ""
        assert record.status == ""

    def test_nullable_fields_stay_null(self):
        record = ReturnRecord.from_row({"ticket_link": "t/1"})
        assert record.om_update is None
        assert record.last_follow_up is None
        assert record.request_date is None
        assert record.designated_om_agent is None

    def test_values_are_stringified(self):
        record = ReturnRecord.from_row({
            "ticket_link": "t/1",
            "order_number": 48213,
            "request_date": datetime(2026, 9, 1, 8, 30, tzinfo=timezone.utc),
            "last_follow_up": date(2026, 9, 2),
        })
        assert record.order_number == "48213"
        assert record.request_date == "2026-09-01T08:30:00+00:00"
        assert record.last_follow_up == "2026-09-02"

    def test_field_order_matches_record_shape(self, sample_rows):
        record = ReturnRecord.from_row(sample_rows[0])
        assert list(record.model_dump()) == [
            "ticket_link", "order_number", "sku", "customer_name", "priority",
            "om_request", "status", "om_update", "last_follow_up",
            "request_date", "designated_om_agent",
        ]


class TestReturnsStats:
    """Tests for ReturnsStats.from_groups."""

    def test_groups_summed_per_axis(self):
        stats = ReturnsStats.from_groups(6, [
            {"status": "Open", "priority": "High", "cnt": 2},
            {"status": "Open", "priority": "Low", "cnt": 1},
            {"status": "Closed", "priority": "High", "cnt": 3},
        ])
        assert stats.total_returns == 6
        assert stats.by_status == {"Open": 3, "Closed": 3}
        assert stats.by_priority == {"High": 5, "Low": 1}

    def test_null_group_values_counted_under_null_key(self):
        stats = ReturnsStats.from_groups(1, [{"status": None, "priority": None, "cnt": 1}])
        assert stats.by_status == {"null": 1}
        assert stats.by_priority == {"null": 1}

    def test_null_and_empty_counted_separately(self):
        stats = ReturnsStats.from_groups(3, [
            {"status": None, "priority": "High", "cnt": 1},
            {"status": "", "priority": "High", "cnt": 2},
        ])
        assert stats.by_status == {"null": 1, "": 2}
        assert stats.by_priority == {"High": 3}

    def test_no_groups(self):
        stats = ReturnsStats.from_groups(0, [])
        assert stats.by_status == {}
        assert stats.by_priority == {}


# ============================================================================
# PARTIAL UPDATE
# ============================================================================

class TestReturnUpdate:
    """Tests for ReturnUpdate.from_payload."""

    def test_absent_fields_are_unset(self):
        update = ReturnUpdate.from_payload({"ticket_link": "t/1", "status": "Open"})
        assert update.status == "Open"
        assert update.om_update is UNSET
        assert update.designated_om_agent is UNSET
        assert update.changes() == {"status": "Open"}

    def test_null_clears(self):
        update = ReturnUpdate.from_payload({"ticket_link": "t/1", "om_update": None})
        assert update.om_update is None
        assert update.changes() == {"om_update": None}

    @pytest.mark.parametrize("payload", [
        {},
        {"status": "Open"},
        {"ticket_link": ""},
        {"ticket_link": "   "},
        {"ticket_link": 42},
        {"ticket_link": None},
    ])
    def test_ticket_link_required(self, payload):
        with pytest.raises(InvalidRequestError, match="ticket_link is required"):
            ReturnUpdate.from_payload(payload)

    @pytest.mark.parametrize("payload", [None, [], "text", 7])
    def test_body_must_be_object(self, payload):
        with pytest.raises(InvalidRequestError, match="Invalid JSON body"):
            ReturnUpdate.from_payload(payload)

    @pytest.mark.parametrize("status", ReturnStatus.values())
    def test_every_enumerated_status_accepted(self, status):
        update = ReturnUpdate.from_payload({"ticket_link": "t/1", "status": status})
        assert update.status == status

    def test_status_trimmed(self):
        update = ReturnUpdate.from_payload({"ticket_link": "t/1", "status": "  Closed "})
        assert update.status == "Closed"

    @pytest.mark.parametrize("status", ["Bogus", "open", "   ", "IN PROGRESS"])
    def test_status_outside_enumeration_rejected(self, status):
        with pytest.raises(InvalidRequestError) as exc:
            ReturnUpdate.from_payload({"ticket_link": "t/1", "status": status})
        assert str(exc.value) == ALLOWED_STATUS_MESSAGE
        assert "Inprogress" in str(exc.value)

    @pytest.mark.parametrize("status", [None, ""])
    def test_null_or_empty_status_counts_as_absent(self, status):
        update = ReturnUpdate.from_payload({
            "ticket_link": "t/1", "status": status, "om_update": "note",
        })
        assert update.status is UNSET
        assert update.changes() == {"om_update": "note"}

    def test_whitespace_agent_becomes_null(self):
        update = ReturnUpdate.from_payload({"ticket_link": "t/1", "designated_om_agent": "  "})
        assert update.designated_om_agent is None
        assert update.changes() == {"designated_om_agent": None}

    def test_agent_trimmed(self):
        update = ReturnUpdate.from_payload({"ticket_link": "t/1", "designated_om_agent": " Dana "})
        assert update.designated_om_agent == "Dana"

    def test_om_update_taken_as_is(self):
        update = ReturnUpdate.from_payload({"ticket_link": "t/1", "om_update": "  spaced  "})
        assert update.om_update == "  spaced  "

    def test_om_update_non_string_stringified(self):
        update = ReturnUpdate.from_payload({"ticket_link": "t/1", "om_update": 12})
        assert update.om_update == "12"

    def test_only_unknown_fields_rejected(self):
        with pytest.raises(InvalidRequestError, match="At least one of"):
            ReturnUpdate.from_payload({"ticket_link": "t/1", "priority": "High", "sku": "X"})

    def test_changes_in_column_order(self):
        update = ReturnUpdate.from_payload({
            "ticket_link": "t/1",
            "designated_om_agent": "Lee",
            "om_update": "done",
            "status": "Closed",
        })
        assert list(update.changes()) == ["status", "om_update", "designated_om_agent"]
