"""
Order Row Formatter

Turns one order into one CSV row for the back-office order export.

Responsibility:
    - Define the fixed export header
    - Compute derived values (gateway fee, net amount, counts)
    - Render money, dates and optional associations

Architecture Notes:
    - Domain Layer, pure functions over an OrderRecord
    - OrderRecord is structural: the SQLAlchemy Order model satisfies it, and
      so does any test double with the same attributes
    - Missing optional associations (buyer, tier, payment method,
      fulfillment status, payment date) render as "" and never raise
"""

from datetime import datetime
from typing import Any, Final, Mapping, Optional, Protocol, Sequence, Sized

from .money import (
    format_amount,
    format_gateway_fee,
    format_refund_amount,
    gateway_fee_cents,
    net_amount_cents,
)

EXPORT_HEADER: Final[tuple[str, ...]] = (
    "Order No.",
    "Buyer",
    "Tier Pricing",
    "Order Type",
    "Date of Payment",
    "Payment Method",
    "Status",
    "Fulfillment Status",
    "Registration Amt",
    "Merchandise Amt",
    "Donation Amt",
    "Sub Total",
    "Processing fee",
    "GST",
    "Refund Amt",
    "Total Amt (SGD)",
    "Gateway Fee",
    "Net Amount",
    "No. of Participants",
    "No. of Merchandise",
)


class OrderRecord(Protocol):
    """Attributes the formatter reads from an order."""

    order_number: str
    user: Any
    tier: Any
    types_label: str
    paid_at: Optional[datetime]
    payment_method: Any
    status: Any
    fulfillment_status: Any
    category_price_amount: int
    add_on_amount: int
    donation_amount: int
    subtotal_amount: int
    processing_fee: int
    gst_amount: int
    total_amount: int
    payment_meta: Optional[Mapping[str, Any]]
    participants: Sized
    add_ons: Sized

    def total_refunded_amount(self) -> int: ...


def format_paid_at(paid_at: Optional[datetime]) -> str:
    """
    Render payment timestamp as 'YYYY/M/D HH:MM'.

    Month and day are not zero-padded; hours and minutes are.

    Examples:
        >>> format_paid_at(datetime(2025, 3, 7, 9, 5))
        '2025/3/7 09:05'
        >>> format_paid_at(None)
        ''
    """
    if paid_at is None:
        return ""
    return f"{paid_at.year}/{paid_at.month}/{paid_at.day} {paid_at:%H:%M}"


def _label(value: Any) -> str:
    if value is None:
        return ""
    return getattr(value, "label", str(value))


def _attr_or_empty(related: Any, attribute: str) -> str:
    if related is None:
        return ""
    value = getattr(related, attribute, None)
    return "" if value is None else value


class OrderRowFormatter:
    """
    Formats orders into export rows.

    Examples:
        >>> formatter = OrderRowFormatter()
        >>> formatter.header()[0]
        'Order No.'
        >>> row = formatter.format_row(order)
        >>> row[15]   # Total Amt (SGD), order.total_amount == 10000
        100
    """

    def header(self) -> list[str]:
        return list(EXPORT_HEADER)

    def format_row(self, order: OrderRecord) -> list[Any]:
        """
        Build the CSV row for a single order.

        Args:
            order: Order with associations already loaded

        Returns:
            List of cell values aligned with EXPORT_HEADER
        """
        fee_cents = gateway_fee_cents(order.payment_meta)
        net_cents = net_amount_cents(order.total_amount, fee_cents)

        return [
            order.order_number,
            _attr_or_empty(order.user, "email"),
            _attr_or_empty(order.tier, "name"),
            order.types_label or "",
            format_paid_at(order.paid_at),
            _label(order.payment_method),
            _label(order.status),
            _label(order.fulfillment_status),
            format_amount(order.category_price_amount),
            format_amount(order.add_on_amount),
            format_amount(order.donation_amount),
            format_amount(order.subtotal_amount),
            format_amount(order.processing_fee),
            format_amount(order.gst_amount),
            format_refund_amount(order.total_refunded_amount()),
            format_amount(order.total_amount),
            format_gateway_fee(fee_cents),
            format_amount(net_cents),
            len(order.participants),
            len(order.add_ons),
        ]

    def format_rows(self, orders: Sequence[OrderRecord]) -> list[list[Any]]:
        return [self.format_row(order) for order in orders]
