"""
Inflation Adjustment Calculations

Amount needed in the future to keep today's purchasing power under a
constant annual inflation rate.
"""

from typing import Dict, List

from finsuite.calculations.utils import power


def calculate_inflation_adjustment(
    initial_amount: float, annual_rate: float, years: float
) -> float:
    """
    Calculate the inflation-adjusted future amount.

    Args:
        initial_amount: Amount in today's money
        annual_rate: Average annual inflation as a percentage (e.g., 3 for 3%)
        years: Number of years to project forward

    Returns:
        Adjusted amount. If any input is negative, initial_amount is
        returned unchanged.
    """
    if initial_amount < 0 or annual_rate < 0 or years < 0:
        return initial_amount

    rate = annual_rate / 100
    return initial_amount * power(1 + rate, years)


def project_inflation(
    initial_amount: float, annual_rate: float, years: int
) -> List[Dict]:
    """Year-by-year adjusted amounts from year 0 through `years`."""
    if initial_amount < 0 or annual_rate < 0 or years < 0:
        return [{"year": 0, "amount": initial_amount}]

    return [
        {
            "year": year,
            "amount": calculate_inflation_adjustment(initial_amount, annual_rate, year),
        }
        for year in range(years + 1)
    ]
