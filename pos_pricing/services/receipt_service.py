"""
Receipt Service
Builds invoice and refund totals with the ITBIS breakdown shown on receipts
"""

import logging
from collections.abc import Mapping
from decimal import Decimal

from pos_pricing.utils.price_calculations import (
    DEFAULT_TAX_RATE,
    TaxBreakdown,
    breakdown_price_with_tax,
    calculate_line_total,
    line_field,
    sum_line_totals,
)
from pos_pricing.utils.validation import in_pricing_context, to_amount, to_tax_rate, round_cents

logger = logging.getLogger(__name__)


def _plain_number(value):
    """Return whole Decimals as int, fractional ones as float"""
    return int(value) if value == value.to_integral_value() else float(value)


def _as_flag(value):
    """Read a boolean setting; strings follow the config.py convention"""
    if isinstance(value, str):
        return value.lower() == 'true'
    return bool(value)


class ReceiptService:
    """Service for invoice and refund totals"""

    def __init__(self, config=None):
        if config is None:
            from pos_pricing.config import config as configs
            config = configs['default']
        self.config = config
        rate = self._setting('TAX_RATE')
        if isinstance(rate, str):
            rate = float(rate)
        self.tax_rate = to_tax_rate(rate, default=DEFAULT_TAX_RATE)
        self.prices_include_tax = _as_flag(self._setting('PRICES_INCLUDE_TAX', True))

    def _setting(self, key, default=None):
        if isinstance(self.config, Mapping):
            return self.config.get(key, default)
        return getattr(self.config, key, default)

    @in_pricing_context
    def split(self, amount_cents):
        """
        Net/tax split of a line or document amount.

        With tax-inclusive prices the amount is the total and the tax is
        extracted from it. Otherwise the amount is the net and tax is
        added on top.
        """
        if self.prices_include_tax:
            return breakdown_price_with_tax(amount_cents, self.tax_rate)

        net = round_cents(to_amount(amount_cents, 'amount_cents'))
        tax = round_cents(Decimal(net) * self.tax_rate)
        return TaxBreakdown(net_cents=net, tax_cents=tax, total_cents=net + tax)

    @in_pricing_context
    def invoice_totals(self, lines):
        """
        Calculate invoice totals from order lines.

        Each line's total is its stored total_cents when present, otherwise
        unit price times quantity. The document tax is extracted from the
        document total rather than summed per line.

        Args:
            lines: List of mappings or objects with unit_price_cents, qty
                and optionally total_cents

        Returns:
            dict: lines with their breakdown, plus net_cents, tax_cents,
                total_cents and total_qty for the whole invoice
        """
        enriched = []
        total_qty = Decimal(0)

        for line in lines or []:
            unit_price = to_amount(
                line_field(line, 'unit_price_cents', 'unitPriceCents'), 'unit_price_cents'
            )
            qty = to_amount(line_field(line, 'qty', 'quantity'), 'qty')
            stored_total = line_field(line, 'total_cents', 'totalCents')

            if stored_total is not None:
                line_total = round_cents(to_amount(stored_total, 'total_cents'))
            else:
                line_total = calculate_line_total(unit_price, qty)

            breakdown = self.split(line_total)
            total_qty += max(qty, Decimal(0))
            enriched.append({
                'unit_price_cents': _plain_number(unit_price),
                'qty': _plain_number(qty),
                'total_cents': breakdown.total_cents,
                'net_cents': breakdown.net_cents,
                'tax_cents': breakdown.tax_cents,
            })

        if self.prices_include_tax:
            document = self.split(sum_line_totals([line['total_cents'] for line in enriched]))
        else:
            document = self.split(sum_line_totals([line['net_cents'] for line in enriched]))

        logger.info(
            f"Invoice totals: {len(enriched)} lines, total {document.total_cents}, "
            f"tax {document.tax_cents}"
        )

        return {
            'lines': enriched,
            'net_cents': document.net_cents,
            'tax_cents': document.tax_cents,
            'total_cents': document.total_cents,
            'total_qty': _plain_number(total_qty),
        }

    @in_pricing_context
    def refund_summary(self, lines):
        """
        Summarize a refund for the refund screen and receipt.

        Subtotal and tax are the sums of each line's breakdown. Restock
        value is the net amount of lines flagged both restock and
        restockable.

        Args:
            lines: List of mappings or objects with unit_price_cents, qty
                and optional restock / restockable flags

        Returns:
            dict: total_qty, subtotal_cents, tax_cents, total_cents and
                restock_value_cents
        """
        summary = {
            'total_qty': Decimal(0),
            'subtotal_cents': 0,
            'tax_cents': 0,
            'total_cents': 0,
            'restock_value_cents': 0,
        }

        for line in lines or []:
            qty = to_amount(line_field(line, 'qty', 'quantity'), 'qty')
            line_total = calculate_line_total(
                line_field(line, 'unit_price_cents', 'unitPriceCents'), qty
            )
            breakdown = self.split(line_total)

            summary['total_qty'] += max(qty, Decimal(0))
            summary['subtotal_cents'] += breakdown.net_cents
            summary['tax_cents'] += breakdown.tax_cents
            summary['total_cents'] += breakdown.total_cents

            if line_field(line, 'restock') and line_field(line, 'restockable'):
                summary['restock_value_cents'] += breakdown.net_cents

        summary['total_qty'] = _plain_number(summary['total_qty'])

        logger.info(
            f"Refund summary: qty {summary['total_qty']}, total {summary['total_cents']}, "
            f"restock value {summary['restock_value_cents']}"
        )
        return summary
