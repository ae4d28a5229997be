"""
Financial Calculation Engine

Closed-form calculators behind the dashboard. Every function is pure;
degenerate inputs are mapped to a per-calculator fallback value instead
of raising. Rates are percentages (5 means 5%).
"""

from finsuite.calculations import annuity, npv, cocomo, inflation, income_tax

__all__ = ["annuity", "npv", "cocomo", "inflation", "income_tax"]
