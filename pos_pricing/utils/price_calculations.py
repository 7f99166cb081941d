"""
Price Calculation Utilities

All unit prices handled here already include ITBIS (tax). A line total,
refund or unit price is therefore computed from the stored price alone;
the tax amount is derived for receipts and reports and is never added
back on top of a price.

Example, an RD$100.00 item at 18% ITBIS:
    unit_price_cents = 10000   (tax included)
    net_cents        = 8475    (10000 / 1.18)
    tax_cents        = 1525    (10000 - 8475, for reporting only)

Refunding that item returns 10000 cents, not 10000 + 1525.

Amounts are integer cents. Intermediate arithmetic uses Decimal and every
result is rounded half away from zero (2.5 -> 3).
"""

import logging
from collections import namedtuple
from collections.abc import Mapping
from decimal import Decimal

from pos_pricing.utils.validation import in_pricing_context, to_amount, to_tax_rate, round_cents

logger = logging.getLogger(__name__)

# Dominican Republic ITBIS
DEFAULT_TAX_RATE = 0.18


class TaxBreakdown(namedtuple('TaxBreakdown', ['net_cents', 'tax_cents', 'total_cents'])):
    """Net/tax split of a tax-inclusive price"""

    __slots__ = ()

    def as_dict(self):
        return {
            'net_cents': self.net_cents,
            'tax_cents': self.tax_cents,
            'total_cents': self.total_cents,
        }


RefundLine = namedtuple('RefundLine', ['unit_price_cents', 'qty'])


def get_default_tax_rate():
    """
    Tax rate used when a caller does not pass one.

    Read from the active configuration (TAX_RATE environment variable),
    falling back to DEFAULT_TAX_RATE.
    """
    from pos_pricing.config import config
    return getattr(config['default'], 'TAX_RATE', DEFAULT_TAX_RATE)


@in_pricing_context
def calculate_line_total(unit_price_cents, quantity):
    """
    Calculate line total from a unit price that already includes ITBIS.

    Args:
        unit_price_cents: Price per unit in cents (includes ITBIS)
        quantity: Number of units, fractional quantities allowed

    Returns:
        int: Total amount in cents (includes ITBIS), 0 for quantity <= 0
    """
    unit_price = to_amount(unit_price_cents, 'unit_price_cents')
    qty = to_amount(quantity, 'quantity')

    if qty <= 0:
        return 0

    return round_cents(unit_price * qty)


@in_pricing_context
def calculate_proportional_refund(original_total_cents, original_quantity,
                                  refund_quantity, clamp=False):
    """
    Calculate the refund for returning part of a line.

    Args:
        original_total_cents: Original line total in cents (includes ITBIS)
        original_quantity: Quantity the original total was charged for
        refund_quantity: Quantity being returned
        clamp: Cap refund_quantity at original_quantity

    Returns:
        int: Refund amount in cents (includes ITBIS)
    """
    original_total = to_amount(original_total_cents, 'original_total_cents')
    original_qty = to_amount(original_quantity, 'original_quantity')
    refund_qty = to_amount(refund_quantity, 'refund_quantity')

    if original_qty <= 0:
        logger.debug(f"Refund against non-positive original quantity {original_qty}, returning 0")
        return 0

    if refund_qty <= 0:
        return 0

    if refund_qty > original_qty:
        logger.warning(
            f"Refund quantity {refund_qty} exceeds original quantity {original_qty}"
            + (" (clamped)" if clamp else "")
        )
        if clamp:
            refund_qty = original_qty

    return round_cents(original_total * refund_qty / original_qty)


@in_pricing_context
def calculate_unit_price(total_cents, quantity):
    """
    Calculate unit price from a line total.

    Args:
        total_cents: Total amount in cents (includes ITBIS)
        quantity: Number of units

    Returns:
        int: Price per unit in cents (includes ITBIS), 0 for quantity <= 0
    """
    total = to_amount(total_cents, 'total_cents')
    qty = to_amount(quantity, 'quantity')

    if qty <= 0:
        logger.debug(f"Unit price requested for non-positive quantity {qty}, returning 0")
        return 0

    return round_cents(total / qty)


@in_pricing_context
def breakdown_price_with_tax(price_cents, tax_rate=None):
    """
    Split a tax-inclusive price into its net base and tax portion.

    For display and reporting only. The returned tax is the remainder
    after rounding the net amount, so net_cents + tax_cents always equals
    total_cents exactly.

    Args:
        price_cents: Price in cents (includes ITBIS)
        tax_rate: Tax rate as decimal (0.18 for 18%), None for the configured rate

    Returns:
        TaxBreakdown: net_cents, tax_cents and total_cents (the original price)

    Raises:
        InvalidTaxRateError: If tax_rate is outside [0, 1)
    """
    price = to_amount(price_cents, 'price_cents')
    rate = to_tax_rate(tax_rate, default=get_default_tax_rate())

    total = round_cents(price)
    net = round_cents(price / (1 + rate))

    return TaxBreakdown(net_cents=net, tax_cents=total - net, total_cents=total)


@in_pricing_context
def sum_line_totals(lines):
    """
    Sum line totals that already include ITBIS.

    Args:
        lines: List of line totals in cents

    Returns:
        int: Sum in cents, 0 for anything that is not a list or tuple
    """
    if not isinstance(lines, (list, tuple)):
        return 0

    total = sum((to_amount(line, 'line_total') for line in lines), Decimal(0))
    return round_cents(total)


def line_field(line, *names):
    """Read the first present field from a mapping or object"""
    for name in names:
        if isinstance(line, Mapping):
            if line.get(name) is not None:
                return line[name]
        elif getattr(line, name, None) is not None:
            return getattr(line, name)
    return None


@in_pricing_context
def calculate_refund_total(refund_lines):
    """
    Calculate the refund total from refund lines.

    Each line's unit price already includes ITBIS; missing prices or
    quantities count as zero.

    Args:
        refund_lines: List of RefundLine, mappings or objects with
            unit_price_cents and qty

    Returns:
        int: Total refund amount in cents (includes ITBIS)
    """
    if not isinstance(refund_lines, (list, tuple)):
        return 0

    return sum_line_totals([
        calculate_line_total(
            line_field(line, 'unit_price_cents', 'unitPriceCents'),
            line_field(line, 'qty', 'quantity'),
        )
        for line in refund_lines
    ])
