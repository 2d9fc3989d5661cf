"""
Order Filter - filtered, sorted, paged order query

Translates export filter parameters into a SQLAlchemy select and streams the
result page by page.

Supported parameters:
    search:     case-insensitive substring over order number, buyer name and
                buyer email
    status:     order status value ("paid") or list of values
    date_range: "YYYY-MM-DD" or "YYYY-MM-DD to YYYY-MM-DD", inclusive, on
                the order creation date
    sort:       one of SORTABLE_COLUMNS; without it orders come latest first
    direction:  "asc" (default) or "desc", used with sort

Paging:
    chunk(size) uses LIMIT/OFFSET over an ordering that always ends with the
    primary key, so every order lands in exactly one page. Related rows
    (buyer, category, tier, participants, add-ons, completed refunds) are
    loaded per page with selectinload, and the page's orders are expunged
    from the session before they are handed out.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from sqlalchemy import Select, or_, select
from sqlalchemy.orm import Session, selectinload

from eventreg.domain.orders import OrderStatus
from eventreg.domain.shared.exceptions import InvalidExportRequestError
from eventreg.infrastructure.persistence.models import Order, User

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = {
    "order_number": Order.order_number,
    "created_at": Order.created_at,
    "paid_at": Order.paid_at,
    "status": Order.status,
    "total_amount": Order.total_amount,
}
SORT_DIRECTIONS = ("asc", "desc")
DATE_RANGE_SEPARATOR = " to "


def parse_date_range(value: str) -> Tuple[date, date]:
    """
    Parse a date_range filter value.

    Examples:
        >>> parse_date_range("2025-01-01 to 2025-01-31")
        (datetime.date(2025, 1, 1), datetime.date(2025, 1, 31))
        >>> parse_date_range("2025-01-05")
        (datetime.date(2025, 1, 5), datetime.date(2025, 1, 5))

    Raises:
        InvalidExportRequestError: If a bound is not an ISO date or start > end
    """
    parts = [part.strip() for part in str(value).split(DATE_RANGE_SEPARATOR)]
    if len(parts) not in (1, 2):
        raise InvalidExportRequestError(
            f"Cannot parse date_range '{value}'", field_name="date_range"
        )
    try:
        start = date.fromisoformat(parts[0])
        end = date.fromisoformat(parts[-1])
    except ValueError as e:
        raise InvalidExportRequestError(
            f"Cannot parse date_range '{value}': {e}", field_name="date_range"
        ) from e
    if start > end:
        raise InvalidExportRequestError(
            f"date_range start {start} is after end {end}", field_name="date_range"
        )
    return start, end


def parse_statuses(value) -> List[OrderStatus]:
    """
    Parse a status filter value (one value or a list); empty means no filter.

    Raises:
        InvalidExportRequestError: If any value is not an OrderStatus
    """
    if value in (None, "", []):
        return []
    values = value if isinstance(value, (list, tuple)) else [value]
    try:
        return [OrderStatus(v) for v in values]
    except ValueError as e:
        raise InvalidExportRequestError(
            f"Unknown order status in {list(values)}", field_name="status"
        ) from e


class OrderFilter:
    """
    Order query built from export filter parameters.

    Examples:
        >>> query = OrderFilter(session, {"search": "alice", "status": "paid"})
        >>> for page in query.chunk(1000):
        ...     rows.extend(formatter.format_rows(page))
    """

    def __init__(self, session: Session, params: Optional[Mapping[str, Any]] = None):
        self.session = session
        self.params = dict(params or {})

    def statement(self) -> Select:
        stmt = select(Order).options(
            selectinload(Order.category),
            selectinload(Order.user),
            selectinload(Order.tier),
            selectinload(Order.participants),
            selectinload(Order.add_ons),
            selectinload(Order.completed_refunds),
        )
        stmt = self._apply_search(stmt)
        stmt = self._apply_status(stmt)
        stmt = self._apply_date_range(stmt)
        return stmt.order_by(*self._ordering())

    def chunk(self, size: int) -> Iterator[List[Order]]:
        """
        Yield pages of at most size orders.

        Raises:
            ValueError: If size < 1
            InvalidExportRequestError: If a filter parameter is invalid
        """
        if size < 1:
            raise ValueError(f"Page size must be >= 1, got {size}")

        stmt = self.statement()
        offset = 0
        while True:
            page = list(
                self.session.execute(stmt.limit(size).offset(offset)).scalars().all()
            )
            if not page:
                return
            for order in page:
                self.session.expunge(order)
            logger.debug(f"Loaded {len(page)} orders (offset {offset})")
            yield page
            if len(page) < size:
                return
            offset += size

    def _apply_search(self, stmt: Select) -> Select:
        term = self.params.get("search")
        if term is None or not str(term).strip():
            return stmt
        term = str(term).strip()
        return stmt.where(
            or_(
                Order.order_number.icontains(term, autoescape=True),
                Order.user.has(
                    or_(
                        User.name.icontains(term, autoescape=True),
                        User.email.icontains(term, autoescape=True),
                    )
                ),
            )
        )

    def _apply_status(self, stmt: Select) -> Select:
        statuses = parse_statuses(self.params.get("status"))
        if not statuses:
            return stmt
        return stmt.where(Order.status.in_(statuses))

    def _apply_date_range(self, stmt: Select) -> Select:
        value = self.params.get("date_range")
        if value is None or not str(value).strip():
            return stmt
        start, end = parse_date_range(value)
        return stmt.where(
            Order.created_at >= datetime.combine(start, time.min),
            Order.created_at < datetime.combine(end + timedelta(days=1), time.min),
        )

    def _ordering(self) -> list:
        sort = self.params.get("sort")
        if not sort:
            return [Order.created_at.desc(), Order.id.desc()]

        column = SORTABLE_COLUMNS.get(sort)
        if column is None:
            raise InvalidExportRequestError(
                f"Cannot sort by '{sort}', sortable: {sorted(SORTABLE_COLUMNS)}",
                field_name="sort",
            )
        direction = str(self.params.get("direction") or "asc").lower()
        if direction not in SORT_DIRECTIONS:
            raise InvalidExportRequestError(
                f"Sort direction must be 'asc' or 'desc', got '{direction}'",
                field_name="direction",
            )
        if direction == "desc":
            return [column.desc(), Order.id.desc()]
        return [column.asc(), Order.id.asc()]
