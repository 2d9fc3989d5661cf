"""
Money Rules for Order Exports

Amounts are stored as integer minor units (cents). All arithmetic happens in
minor units; conversion to major units (dollars) is the very last step before
a value lands in a CSV cell.

Business Rules:
    - Regular amounts: cents / 100
    - Refund and gateway fee amounts are deductions and render non-positive:
      0 when the underlying amount is <= 0, otherwise -(cents / 100)
    - Gateway fee lives in payment_meta["gateway_fee"] as major units
      (e.g. "2.50"); absent or unparseable values count as 0
    - Net amount = total_amount - gateway_fee_cents (minor units)

Rendering:
    Whole major amounts are ints, others floats, so the CSV cells read
    "100", "-2.5", "97.5" and "0". No fixed two-decimal padding.

Examples:
    >>> format_amount(10000)
    100
    >>> format_amount(9750)
    97.5
    >>> format_gateway_fee(250)
    -2.5
    >>> format_refund_amount(0)
    0
    >>> gateway_fee_cents({"gateway_fee": "2.50"})
    250
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Final, Mapping, Optional, Union

MINOR_UNITS_PER_MAJOR: Final[int] = 100
GATEWAY_FEE_META_KEY: Final[str] = "gateway_fee"

Number = Union[int, float]


def _to_major(amount: int) -> Number:
    whole, cents = divmod(amount, MINOR_UNITS_PER_MAJOR)
    return whole if cents == 0 else amount / MINOR_UNITS_PER_MAJOR


def format_amount(amount: int) -> Number:
    """Convert minor units to major units."""
    return _to_major(amount)


def format_refund_amount(amount: int) -> Number:
    """Render a refunded amount as a deduction (never positive)."""
    return -_to_major(amount) if amount > 0 else 0


def format_gateway_fee(amount: int) -> Number:
    """Render a gateway fee as a deduction (never positive)."""
    return -_to_major(amount) if amount > 0 else 0


def _to_decimal(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        return Decimal(0)
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal(0)
    if not result.is_finite():
        return Decimal(0)
    return result


def gateway_fee_cents(payment_meta: Optional[Mapping[str, Any]]) -> int:
    """
    Extract gateway fee from payment metadata, in minor units.

    The gateway records the fee in major units. Conversion uses Decimal so
    that values such as "0.29" become 29 cents instead of 28 through float
    truncation. Fractions of a cent are truncated toward zero.

    Args:
        payment_meta: Opaque metadata mapping stored on the order (may be None)

    Returns:
        Gateway fee in cents, 0 if absent or unparseable

    Examples:
        >>> gateway_fee_cents(None)
        0
        >>> gateway_fee_cents({"gateway_fee": 1.2})
        120
        >>> gateway_fee_cents({"gateway_fee": "n/a"})
        0
    """
    if not payment_meta:
        return 0
    dollars = _to_decimal(payment_meta.get(GATEWAY_FEE_META_KEY))
    return int(dollars * MINOR_UNITS_PER_MAJOR)


def net_amount_cents(total_amount: int, fee_cents: int) -> int:
    """Net amount after gateway fee, in minor units."""
    return total_amount - fee_cents
