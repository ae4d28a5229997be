"""
Indian Income Tax Calculations

New Tax Regime, assessment year 2025-26, for a salaried individual:

1. Standard deduction of 50,000 is taken off total income
2. Section 87A rebate - no tax when taxable income is at most 7,00,000
3. Otherwise marginal slab rates apply cumulatively
4. 4% health and education cess is added on the slab tax
"""

from dataclasses import dataclass, field
from typing import List, Optional

ASSESSMENT_YEAR = "2025-26"
STANDARD_DEDUCTION = 50_000
REBATE_THRESHOLD = 700_000
CESS_RATE = 0.04


@dataclass(frozen=True)
class TaxSlab:
    """One marginal band of the slab table."""

    lower: float
    upper: Optional[float]  # None for the open top band
    rate: float  # e.g., 0.05 for 5%

    def taxable_amount(self, taxable_income: float) -> float:
        """Portion of taxable_income falling inside this band."""
        upper = taxable_income if self.upper is None else min(taxable_income, self.upper)
        return max(0.0, upper - self.lower)


NEW_REGIME_SLABS = (
    TaxSlab(lower=0, upper=300_000, rate=0.0),
    TaxSlab(lower=300_000, upper=600_000, rate=0.05),
    TaxSlab(lower=600_000, upper=900_000, rate=0.10),
    TaxSlab(lower=900_000, upper=1_200_000, rate=0.15),
    TaxSlab(lower=1_200_000, upper=1_500_000, rate=0.20),
    TaxSlab(lower=1_500_000, upper=None, rate=0.30),
)


@dataclass
class TaxBreakdown:
    """Full result of a tax computation."""

    total_income: float
    taxable_income: float = 0.0
    rebate_applied: bool = False
    slabs: List[dict] = field(default_factory=list)
    slab_tax: float = 0.0
    cess: float = 0.0
    total_tax: float = 0.0

    @property
    def effective_rate(self) -> float:
        """Total tax as a percentage of total income."""
        if self.total_income <= 0:
            return 0.0
        return self.total_tax / self.total_income * 100


def calculate_tax_breakdown(total_income: float) -> TaxBreakdown:
    """
    Calculate tax payable with a per-slab breakdown.

    Args:
        total_income: Total annual income before the standard deduction

    Returns:
        TaxBreakdown. Non-positive income and incomes covered by the
        87A rebate produce zero tax and an empty slab list.
    """
    if total_income <= 0:
        return TaxBreakdown(total_income=total_income)

    taxable_income = max(0, total_income - STANDARD_DEDUCTION)

    # Rebate is checked on post-deduction income, before any slab math
    if taxable_income <= REBATE_THRESHOLD:
        return TaxBreakdown(
            total_income=total_income,
            taxable_income=taxable_income,
            rebate_applied=True,
        )

    slabs = []
    slab_tax = 0.0
    for slab in NEW_REGIME_SLABS:
        amount = slab.taxable_amount(taxable_income)
        tax = amount * slab.rate
        slab_tax += tax
        slabs.append(
            {
                "lower": slab.lower,
                "upper": slab.upper,
                "rate": slab.rate,
                "taxable_amount": amount,
                "tax": tax,
            }
        )

    cess = slab_tax * CESS_RATE

    return TaxBreakdown(
        total_income=total_income,
        taxable_income=taxable_income,
        slabs=slabs,
        slab_tax=slab_tax,
        cess=cess,
        total_tax=slab_tax + cess,
    )


def calculate_indian_income_tax(total_income: float) -> float:
    """Total tax payable (slab tax plus cess) under the new regime."""
    return calculate_tax_breakdown(total_income).total_tax
