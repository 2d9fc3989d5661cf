"""
Order Enumerations

String enums describing order lifecycle values stored on the orders table.
Each enum exposes a human-readable ``label`` used in CSV exports.
"""

from enum import Enum


class _LabelledEnum(str, Enum):
    """Base for enums whose label is the title-cased value unless overridden."""

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class OrderStatus(_LabelledEnum):
    """
    Payment status of an order.

    Attributes:
        PENDING: Created, payment not yet confirmed
        PAID: Payment captured
        CANCELLED: Cancelled before payment
        REFUNDED: Fully refunded
        PARTIALLY_REFUNDED: At least one completed refund, not full amount
    """

    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    PARTIALLY_REFUNDED = "partially_refunded"


class OrderType(_LabelledEnum):
    """Line types an order can contain. An order may carry several."""

    REGISTRATION = "registration"
    MERCHANDISE = "merchandise"
    DONATION = "donation"


class PaymentMethod(_LabelledEnum):
    """Payment method used at checkout."""

    CARD = "card"
    PAYNOW = "paynow"
    BANK_TRANSFER = "bank_transfer"
    COMPLIMENTARY = "complimentary"

    @property
    def label(self) -> str:
        # PayNow is a brand name
        if self is PaymentMethod.PAYNOW:
            return "PayNow"
        return super().label


class FulfillmentStatus(_LabelledEnum):
    """Merchandise fulfillment progress."""

    UNFULFILLED = "unfulfilled"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    COLLECTED = "collected"


class RefundStatus(_LabelledEnum):
    """Refund lifecycle. Only COMPLETED refunds count towards refunded totals."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
