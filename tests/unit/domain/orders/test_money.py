"""
Tests for order money rules.

Covers:
- Minor to major unit conversion (whole amounts as ints)
- Deduction formatting (refunds, gateway fee)
- Gateway fee extraction from payment metadata
- Net amount
"""

import pytest

from eventreg.domain.orders.money import (
    format_amount,
    format_gateway_fee,
    format_refund_amount,
    gateway_fee_cents,
    net_amount_cents,
)


# ============================================================================
# HAPPY PATH TESTS
# ============================================================================


def test_format_amount_divides_by_hundred():
    assert format_amount(10000) == 100
    assert format_amount(1999) == 19.99
    assert format_amount(0) == 0


def test_whole_amounts_render_without_decimal_point():
    assert str(format_amount(10000)) == "100"
    assert str(format_amount(9750)) == "97.5"
    assert str(format_gateway_fee(250)) == "-2.5"
    assert str(format_refund_amount(2500)) == "-25"
    assert str(format_refund_amount(0)) == "0"


@pytest.mark.parametrize(
    "cents, expected",
    [(2500, -25.0), (250, -2.5), (1, -0.01)],
)
def test_deductions_render_negative(cents, expected):
    assert format_refund_amount(cents) == expected
    assert format_gateway_fee(cents) == expected


@pytest.mark.parametrize("cents", [0, -100])
def test_deductions_render_zero_when_not_positive(cents):
    assert format_refund_amount(cents) == 0
    assert format_gateway_fee(cents) == 0


def test_gateway_fee_from_string():
    assert gateway_fee_cents({"gateway_fee": "2.50"}) == 250


def test_gateway_fee_from_float_does_not_lose_a_cent():
    """0.29 * 100 is 28.999... in binary floating point."""
    assert gateway_fee_cents({"gateway_fee": 0.29}) == 29


def test_gateway_fee_truncates_fractional_cents():
    assert gateway_fee_cents({"gateway_fee": "1.239"}) == 123


def test_net_amount_subtracts_fee():
    assert net_amount_cents(10000, 250) == 9750


# ============================================================================
# EDGE CASES
# ============================================================================


@pytest.mark.parametrize(
    "meta",
    [None, {}, {"other": 1}, {"gateway_fee": None}, {"gateway_fee": "n/a"},
     {"gateway_fee": "NaN"}, {"gateway_fee": True}],
)
def test_gateway_fee_defaults_to_zero(meta):
    assert gateway_fee_cents(meta) == 0
