"""
Property-Based Tests for Price Calculations

Uses hypothesis to check the arithmetic invariants over many inputs:
1. Line total is the half-up rounded product of price and quantity
2. Unit price recovers the original price within one cent
3. Net + tax == total exactly for every price and valid rate
4. Refunding the full quantity returns the full total
5. Refunding nothing, or against a zero quantity, returns 0
6. Refund total equals the sum of its line totals
"""

import pytest
from hypothesis import given, strategies as st, settings
from decimal import Decimal, ROUND_HALF_UP

from pos_pricing import (
    RefundLine,
    calculate_line_total,
    calculate_proportional_refund,
    calculate_unit_price,
    breakdown_price_with_tax,
    sum_line_totals,
    calculate_refund_total,
)

pytestmark = pytest.mark.slow


# Strategy for cent amounts up to RD$10,000,000.00
cents_strategy = st.integers(min_value=0, max_value=10 ** 9)

# Strategy for quantities, including fractional weights
quantity_strategy = st.decimals(
    min_value=Decimal("0"),
    max_value=Decimal("1000"),
    places=3,
    allow_nan=False,
    allow_infinity=False
)

# Quantities of at least one unit
unit_quantity_strategy = st.decimals(
    min_value=Decimal("1"),
    max_value=Decimal("1000"),
    places=2,
    allow_nan=False,
    allow_infinity=False
)

# Tax rates in [0, 1)
rate_strategy = st.decimals(
    min_value=Decimal("0"),
    max_value=Decimal("0.99"),
    places=4,
    allow_nan=False,
    allow_infinity=False
)


@given(price=cents_strategy, quantity=quantity_strategy)
@settings(max_examples=200)
def test_line_total_is_rounded_product(price, quantity):
    """Line total equals price x quantity rounded half up"""
    expected = int((Decimal(price) * quantity).quantize(Decimal('1'), rounding=ROUND_HALF_UP))
    assert calculate_line_total(price, quantity) == expected


@given(price=cents_strategy, quantity=unit_quantity_strategy)
@settings(max_examples=200)
def test_unit_price_round_trip(price, quantity):
    """Unit price of a line total is within one cent of the original price"""
    total = calculate_line_total(price, quantity)
    assert abs(calculate_unit_price(total, quantity) - price) <= 1


@given(price=cents_strategy, rate=rate_strategy)
@settings(max_examples=200)
def test_breakdown_adds_up_exactly(price, rate):
    """Net and tax always add back to the original price"""
    result = breakdown_price_with_tax(price, rate)
    assert result.total_cents == price
    assert result.net_cents + result.tax_cents == price
    assert 0 <= result.tax_cents <= price


@given(total=cents_strategy, quantity=unit_quantity_strategy)
@settings(max_examples=200)
def test_full_refund_returns_total(total, quantity):
    """Refunding the whole quantity returns the whole line total"""
    assert calculate_proportional_refund(total, quantity, quantity) == total


@given(total=cents_strategy, quantity=unit_quantity_strategy)
@settings(max_examples=100)
def test_refund_of_nothing_is_zero(total, quantity):
    """Refunding zero units returns nothing"""
    assert calculate_proportional_refund(total, quantity, 0) == 0


@given(total=cents_strategy, refund_quantity=quantity_strategy)
@settings(max_examples=100)
def test_refund_against_zero_quantity_is_zero(total, refund_quantity):
    """No division-by-zero error for a zero original quantity"""
    assert calculate_proportional_refund(total, 0, refund_quantity) == 0


@given(a=cents_strategy, b=cents_strategy, c=cents_strategy)
@settings(max_examples=100)
def test_sum_line_totals(a, b, c):
    """Summing totals is plain addition"""
    assert sum_line_totals([a, b, c]) == a + b + c


@given(lines=st.lists(
    st.builds(RefundLine, unit_price_cents=st.integers(min_value=0, max_value=10 ** 7),
              qty=quantity_strategy),
    max_size=20
))
@settings(max_examples=100)
def test_refund_total_is_sum_of_line_totals(lines):
    """Refund total equals summing each line total"""
    expected = sum_line_totals([calculate_line_total(l.unit_price_cents, l.qty) for l in lines])
    assert calculate_refund_total(lines) == expected


# Floats as the frontend sends them
float_quantity_strategy = st.floats(min_value=0, max_value=1000, allow_nan=False, allow_infinity=False)
float_unit_quantity_strategy = st.floats(min_value=1, max_value=1000, allow_nan=False, allow_infinity=False)


@given(price=cents_strategy, quantity=float_quantity_strategy)
@settings(max_examples=200)
def test_line_total_float_quantity(price, quantity):
    """Float quantities are read through their shortest repr"""
    expected = int((Decimal(price) * Decimal(str(quantity))).quantize(Decimal('1'), rounding=ROUND_HALF_UP))
    assert calculate_line_total(price, quantity) == expected


@given(price=cents_strategy, quantity=float_unit_quantity_strategy)
@settings(max_examples=200)
def test_unit_price_round_trip_float_quantity(price, quantity):
    """Round trip holds for float quantities too"""
    total = calculate_line_total(price, quantity)
    assert abs(calculate_unit_price(total, quantity) - price) <= 1
