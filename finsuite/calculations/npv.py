"""
NPV Calculations

Net present value of an initial outlay followed by periodic cash flows.
The initial investment sits at period 0 and is never discounted; the
cash flow at index i belongs to period i + 1.
"""

from typing import Dict, List

from finsuite.calculations.utils import power


def calculate_npv(
    rate: float, initial_investment: float, cash_flows: List[float]
) -> float:
    """
    Calculate NPV (Net Present Value).

    Args:
        rate: Discount rate per period as a percentage (e.g., 10 for 10%)
        initial_investment: Initial outlay as a positive amount
        cash_flows: Cash flows for periods 1..n (any sign)

    Returns:
        NPV value. A negative rate is not discounted at all and
        returns -initial_investment.
    """
    if rate < 0:
        return -initial_investment

    r = rate / 100
    npv = -initial_investment
    for index, cf in enumerate(cash_flows):
        npv += cf / power(1 + r, index + 1)
    return npv


def discount_cash_flows(
    rate: float, initial_investment: float, cash_flows: List[float]
) -> List[Dict]:
    """
    Build the period-by-period discounting schedule behind an NPV figure.

    Row 0 is the initial investment. Discounted values always sum to
    calculate_npv() for the same inputs, including the negative-rate case
    where every cash flow row is reported at 0.
    """
    schedule = [
        {
            "period": 0,
            "cash_flow": -initial_investment,
            "discounted_value": -initial_investment,
        }
    ]

    r = rate / 100
    for index, cf in enumerate(cash_flows):
        period = index + 1
        if rate < 0:
            discounted = 0.0
        else:
            discounted = cf / power(1 + r, period)
        schedule.append(
            {
                "period": period,
                "cash_flow": cf,
                "discounted_value": discounted,
            }
        )

    return schedule
