"""
Order Query Port

Streams filtered orders page by page so that an export never holds the
whole result set in memory.
"""

from typing import Any, Iterator, Mapping, Protocol, Sequence

from eventreg.domain.orders import OrderRecord


class OrderQueryProtocol(Protocol):
    """
    A filtered, sorted order query.

    Implementations:
        - OrderFilter (SQLAlchemy, eventreg.infrastructure.persistence)
    """

    def chunk(self, size: int) -> Iterator[Sequence[OrderRecord]]:
        """
        Yield successive pages of matching orders.

        Every matching order appears in exactly one page. Pages are in a
        deterministic order and have at most size entries. Buyer, tier,
        participants, add-ons and completed refunds are loaded with each page.
        """
        ...


class OrderQueryFactory(Protocol):
    """Builds an order query from request filter parameters."""

    def __call__(self, filter_parameters: Mapping[str, Any]) -> OrderQueryProtocol: ...
