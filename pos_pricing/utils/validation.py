"""
Validation Utilities
Boundary coercion for monetary amounts, quantities and tax rates
"""

import re
from functools import wraps
from decimal import (
    Context, Decimal, DivisionByZero, InvalidOperation, Overflow, ROUND_HALF_UP, localcontext,
)

from pos_pricing.exceptions import InvalidInputError, InvalidTaxRateError

# Largest integer a double can hold exactly; cents beyond it are rejected
MAX_SAFE_CENTS = 2 ** 53 - 1

_INTEGER_PATTERN = re.compile(r'^[-+]?\d+$')

# Two safe amounts multiply to at most 32 digits, well inside this precision
DECIMAL_PRECISION = 50


def pricing_context():
    """Fixed Decimal context so results never depend on the caller's settings"""
    return localcontext(Context(
        prec=DECIMAL_PRECISION,
        rounding=ROUND_HALF_UP,
        traps=[InvalidOperation, DivisionByZero, Overflow],
    ))


def in_pricing_context(f):
    """Decorator running the wrapped calculation inside pricing_context()"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        with pricing_context():
            return f(*args, **kwargs)
    return decorated_function


def to_amount(value, field='value'):
    """
    Convert a numeric argument to Decimal.

    None is substituted with zero so partially populated records can be
    passed straight through. Booleans, strings and other non-numeric
    types are rejected, as are NaN, infinity and magnitudes beyond
    MAX_SAFE_CENTS.

    Args:
        value: int, float, Decimal or None
        field: Argument name used in the error message

    Returns:
        Decimal: The value as a Decimal

    Raises:
        InvalidInputError: If the value is not a finite number in range
    """
    if value is None:
        return Decimal(0)

    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidInputError(field, value)

    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    if not amount.is_finite():
        raise InvalidInputError(field, value)

    if amount.copy_abs() > MAX_SAFE_CENTS:
        raise InvalidInputError(field, value)

    return amount


def to_tax_rate(value, default=None):
    """
    Validate a tax rate expressed as a decimal fraction (0.18 for 18%).

    Args:
        value: Tax rate, or None to use the default
        default: Rate used when value is None

    Returns:
        Decimal: The validated rate

    Raises:
        InvalidInputError: If the rate is not numeric
        InvalidTaxRateError: If the rate is outside [0, 1)
    """
    if value is None:
        value = default

    if value is None:
        raise InvalidTaxRateError(value)

    rate = to_amount(value, 'tax_rate')
    if rate < 0 or rate >= 1:
        raise InvalidTaxRateError(value)

    return rate


def round_cents(value):
    """Round a Decimal to whole cents, ties away from zero"""
    with pricing_context():
        return int(Decimal(value).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def parse_cents(value, allow_zero=False):
    """
    Parse a cent amount coming from an untyped source (form field, JSON body).

    Accepts integers and integer strings with an optional sign. Floats
    are accepted only when they hold a whole number.

    Args:
        value: Raw value
        allow_zero: Whether zero is an acceptable amount

    Returns:
        int or None: Parsed cents, or None if the value is unacceptable
    """
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, str):
        trimmed = value.strip()
        if not _INTEGER_PATTERN.match(trimmed):
            return None
        parsed = int(trimmed)
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, (float, Decimal)):
        try:
            is_whole = value == int(value)
        except (ValueError, OverflowError):
            return None
        if not is_whole:
            return None
        parsed = int(value)
    else:
        return None

    if abs(parsed) > MAX_SAFE_CENTS:
        return None

    if allow_zero:
        return parsed if parsed >= 0 else None

    return parsed if parsed > 0 else None
