"""
POS Pricing
Tax-inclusive price, refund and ITBIS breakdown calculations
"""

import os
import logging

from pos_pricing.exceptions import PricingError, InvalidInputError, InvalidTaxRateError
from pos_pricing.utils.price_calculations import (
    DEFAULT_TAX_RATE,
    TaxBreakdown,
    RefundLine,
    calculate_line_total,
    calculate_proportional_refund,
    calculate_unit_price,
    breakdown_price_with_tax,
    sum_line_totals,
    calculate_refund_total,
)
from pos_pricing.services.receipt_service import ReceiptService

__version__ = '1.0.0'


def configure_logging(config_name='default'):
    """
    Set up logging from the named configuration.

    Logs go to stderr and, when LOG_TO_FILE is enabled, to
    LOG_FOLDER/pricing.log.

    Returns:
        The configuration class that was used
    """
    from pos_pricing.config import config

    cfg = config[config_name]
    handlers = [logging.StreamHandler()]

    if cfg.LOG_TO_FILE:
        os.makedirs(cfg.LOG_FOLDER, exist_ok=True)
        handlers.append(logging.FileHandler(os.path.join(cfg.LOG_FOLDER, 'pricing.log')))

    logging.basicConfig(
        level=getattr(logging, cfg.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )
    return cfg


__all__ = [
    'DEFAULT_TAX_RATE',
    'TaxBreakdown',
    'RefundLine',
    'PricingError',
    'InvalidInputError',
    'InvalidTaxRateError',
    'ReceiptService',
    'calculate_line_total',
    'calculate_proportional_refund',
    'calculate_unit_price',
    'breakdown_price_with_tax',
    'sum_line_totals',
    'calculate_refund_total',
    'configure_logging',
]
