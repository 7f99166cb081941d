"""
Shared pytest fixtures for the pricing tests.

Pins the tax settings in the environment so tests do not depend on a
local .env, and provides receipt services and sample invoice/refund lines.
"""

import pytest
import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Must be set before config is imported; load_dotenv does not override them
os.environ['TAX_RATE'] = '0.18'
os.environ['PRICES_INCLUDE_TAX'] = 'true'

from pos_pricing import config as config_module


@pytest.fixture
def receipt_service():
    """Receipt service with tax-inclusive prices at 18%."""
    from pos_pricing.services.receipt_service import ReceiptService
    return ReceiptService(config_module.config['testing'])


@pytest.fixture
def tax_exclusive_service():
    """Receipt service for stores that keep prices without tax."""
    from pos_pricing.services.receipt_service import ReceiptService
    return ReceiptService({'TAX_RATE': 0.18, 'PRICES_INCLUDE_TAX': False})


@pytest.fixture
def invoice_lines():
    """Two order lines: 2 x RD$50.00 and 1 x RD$30.00."""
    return [
        {'unit_price_cents': 5000, 'qty': 2},
        {'unit_price_cents': 3000, 'qty': 1},
    ]


@pytest.fixture
def refund_lines():
    """Refund selection with one restockable and one damaged item."""
    return [
        {'unit_price_cents': 10000, 'qty': 1, 'restock': True, 'restockable': True},
        {'unit_price_cents': 3000, 'qty': 1, 'restock': True, 'restockable': False},
    ]
