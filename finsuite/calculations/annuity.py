"""
Annuity Factor Calculations

Present value of an annuity factor (PVAF): the value today of 1 unit
received at the end of every period for a fixed number of periods.
"""

from finsuite.calculations.utils import power


def calculate_annuity_factor(rate: float, periods: float) -> float:
    """
    Calculate the present value annuity factor.

    Args:
        rate: Discount rate per period as a percentage (e.g., 5 for 5%)
        periods: Number of periods

    Returns:
        Annuity factor, or 0.0 if rate or periods is not positive
    """
    if rate <= 0 or periods <= 0:
        return 0.0

    r = rate / 100
    return (1 - power(1 + r, -periods)) / r


def calculate_annuity_present_value(
    payment: float, rate: float, periods: float
) -> float:
    """Present value of a level payment stream, using the annuity factor."""
    return payment * calculate_annuity_factor(rate, periods)
