"""
Display formatting for calculator results.
"""

from babel.numbers import format_currency as _babel_format_currency
from babel.numbers import format_decimal

CURRENCY = "INR"
CURRENCY_LOCALE = "en_IN"
NUMBER_LOCALE = "en_US"


def format_currency(value: float) -> str:
    """
    Format an amount in Indian Rupees with lakh/crore grouping.

    Example: 1234567.891 -> "₹12,34,567.89"
    """
    return _babel_format_currency(value, CURRENCY, locale=CURRENCY_LOCALE)


def format_number(value: float, decimal_places: int = 4) -> str:
    """Format a plain number with thousands separators and fixed decimals."""
    pattern = "#,##0"
    if decimal_places > 0:
        pattern += "." + "0" * decimal_places
    return format_decimal(value, format=pattern, locale=NUMBER_LOCALE)
