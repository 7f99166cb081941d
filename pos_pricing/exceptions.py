"""
Pricing Exceptions
Errors raised at the boundary of the price calculation helpers
"""


class PricingError(ValueError):
    """Base class for pricing errors"""


class InvalidInputError(PricingError):
    """A value that is not a finite number reached a calculation"""

    def __init__(self, field, value):
        self.field = field
        self.value = value
        super().__init__(f"{field} must be a finite number, got {value!r}")


class InvalidTaxRateError(PricingError):
    """Tax rate outside [0, 1)"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Tax rate must be in [0, 1), got {value!r}")
