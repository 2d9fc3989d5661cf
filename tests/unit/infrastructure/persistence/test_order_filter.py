"""
Tests for OrderFilter (SQLite in memory).

Covers:
- Search over order number, buyer name and email
- Status and date range filters
- Default and explicit ordering
- Paging: every order exactly once, short last page
- Invalid filter values
"""

from datetime import date, datetime

import pytest

from eventreg.domain.orders import OrderStatus, RefundStatus
from eventreg.domain.shared.exceptions import InvalidExportRequestError
from eventreg.infrastructure.persistence.order_filter import (
    OrderFilter,
    parse_date_range,
    parse_statuses,
)


def numbers(db_session, params=None, size=100):
    pages = list(OrderFilter(db_session, params).chunk(size))
    return [order.order_number for page in pages for order in page]


# ============================================================================
# parse_date_range / parse_statuses
# ============================================================================


def test_parse_date_range_pair():
    assert parse_date_range("2025-01-01 to 2025-01-31") == (date(2025, 1, 1), date(2025, 1, 31))


def test_parse_date_range_single_day():
    assert parse_date_range("2025-01-05") == (date(2025, 1, 5), date(2025, 1, 5))


@pytest.mark.parametrize(
    "value", ["last week", "2025-01-31 to 2025-01-01", "2025-01-01 to 2025-01-02 to 2025-01-03"]
)
def test_parse_date_range_invalid(value):
    with pytest.raises(InvalidExportRequestError) as exc_info:
        parse_date_range(value)
    assert exc_info.value.field_name == "date_range"


def test_parse_statuses_single_and_list():
    assert parse_statuses("paid") == [OrderStatus.PAID]
    assert parse_statuses(["paid", "refunded"]) == [OrderStatus.PAID, OrderStatus.REFUNDED]
    assert parse_statuses(None) == []


def test_parse_statuses_rejects_unknown_value():
    with pytest.raises(InvalidExportRequestError) as exc_info:
        parse_statuses(["paid", "bogus"])
    assert exc_info.value.field_name == "status"


# ============================================================================
# FILTERS
# ============================================================================


def test_no_filters_returns_everything_latest_first(db_session, make_order):
    make_order(order_number="OLD", created_at=datetime(2025, 1, 1))
    make_order(order_number="NEW", created_at=datetime(2025, 1, 3))
    make_order(order_number="MID", created_at=datetime(2025, 1, 2))

    assert numbers(db_session) == ["NEW", "MID", "OLD"]


def test_search_matches_number_name_and_email(db_session, make_order):
    make_order(order_number="ORD-ALPHA", buyer=("Zed", "zed@example.com"))
    make_order(order_number="ORD-2", buyer=("Alice Tan", "alice@example.com"))
    make_order(order_number="ORD-3", buyer=("Bob", "bob@alpha.io"))
    make_order(order_number="ORD-4", buyer=("Carol", "carol@example.com"))

    assert sorted(numbers(db_session, {"search": "alpha"})) == ["ORD-3", "ORD-ALPHA"]
    assert numbers(db_session, {"search": "ALICE"}) == ["ORD-2"]


def test_search_treats_wildcards_literally(db_session, make_order):
    make_order(order_number="ORD-1")
    assert numbers(db_session, {"search": "%"}) == []


def test_status_filter_single_and_list(db_session, make_order):
    make_order(order_number="P", status=OrderStatus.PAID)
    make_order(order_number="R", status=OrderStatus.REFUNDED)
    make_order(order_number="C", status=OrderStatus.CANCELLED)

    assert numbers(db_session, {"status": "paid"}) == ["P"]
    assert sorted(numbers(db_session, {"status": ["paid", "refunded"]})) == ["P", "R"]


def test_unknown_status_rejected(db_session):
    with pytest.raises(InvalidExportRequestError):
        numbers(db_session, {"status": "lost"})


def test_date_range_is_inclusive(db_session, make_order):
    make_order(order_number="BEFORE", created_at=datetime(2024, 12, 31, 23, 59))
    make_order(order_number="FIRST", created_at=datetime(2025, 1, 1, 0, 0))
    make_order(order_number="LAST", created_at=datetime(2025, 1, 31, 23, 59))
    make_order(order_number="AFTER", created_at=datetime(2025, 2, 1, 0, 0))

    result = numbers(db_session, {"date_range": "2025-01-01 to 2025-01-31"})
    assert sorted(result) == ["FIRST", "LAST"]


# ============================================================================
# ORDERING
# ============================================================================


def test_sort_by_column(db_session, make_order):
    make_order(order_number="B", total_amount=200)
    make_order(order_number="A", total_amount=300)
    make_order(order_number="C", total_amount=100)

    assert numbers(db_session, {"sort": "total_amount"}) == ["C", "B", "A"]
    assert numbers(db_session, {"sort": "total_amount", "direction": "desc"}) == ["A", "B", "C"]


def test_unknown_sort_rejected(db_session):
    with pytest.raises(InvalidExportRequestError) as exc_info:
        numbers(db_session, {"sort": "password"})
    assert exc_info.value.field_name == "sort"


def test_invalid_direction_rejected(db_session):
    with pytest.raises(InvalidExportRequestError):
        numbers(db_session, {"sort": "order_number", "direction": "sideways"})


# ============================================================================
# PAGING
# ============================================================================


def test_chunk_yields_each_order_once(db_session, make_order):
    # identical created_at, ordering falls back to id
    for i in range(7):
        make_order(order_number=f"ORD-{i}", created_at=datetime(2025, 1, 1))

    pages = list(OrderFilter(db_session, {}).chunk(3))

    assert [len(page) for page in pages] == [3, 3, 1]
    seen = [order.order_number for page in pages for order in page]
    assert sorted(seen) == [f"ORD-{i}" for i in range(7)]
    assert len(set(seen)) == 7


def test_chunk_exact_multiple_has_no_trailing_empty_page(db_session, make_order):
    for i in range(4):
        make_order(order_number=f"ORD-{i}")

    pages = list(OrderFilter(db_session, {}).chunk(2))
    assert [len(page) for page in pages] == [2, 2]


def test_chunk_empty_result(db_session):
    assert list(OrderFilter(db_session, {}).chunk(10)) == []


def test_chunk_rejects_non_positive_size(db_session):
    with pytest.raises(ValueError):
        list(OrderFilter(db_session, {}).chunk(0))


def test_chunk_loads_associations(db_session, make_order):
    make_order(
        participants=3,
        add_ons=2,
        refunds=[(1000, RefundStatus.COMPLETED), (500, RefundStatus.PENDING)],
    )

    [[order]] = list(OrderFilter(db_session, {}).chunk(10))

    assert order.user.email == "alice@example.com"
    assert order.tier.name == "Early Bird"
    assert len(order.participants) == 3
    assert len(order.add_ons) == 2
    assert order.total_refunded_amount() == 1000
