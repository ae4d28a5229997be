"""
Financial calculation API endpoints.

These endpoints accept parsed inputs and return calculated results along
with display-ready strings. Request validation only rejects input that
cannot be parsed (or that the dashboard never submits); degenerate values
are passed through so each calculator applies its own fallback.
"""

import math
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from finsuite.auth.dependencies import get_current_user
from finsuite.calculations import annuity, npv, cocomo, inflation, income_tax
from finsuite.calculations.cocomo import ProjectType, COCOMO_COEFFICIENTS
from finsuite.formatting import format_currency, format_number

router = APIRouter(dependencies=[Depends(get_current_user)])


class CalculatorInput(BaseModel):
    """Base for calculator inputs: numbers must be finite."""

    class Config:
        allow_inf_nan = False


def ensure_finite(**values: Optional[float]):
    """
    Reject results that overflowed to infinity (or NaN).

    Raises HTTPException 422 naming the first non-finite value.
    """
    for name, value in values.items():
        if value is not None and not math.isfinite(value):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"{name} is too large to represent for these inputs",
            )


class AnnuityFactorInput(CalculatorInput):
    """Input for annuity factor calculation."""

    rate: float  # percent per period
    periods: int
    payment: Optional[float] = None


class AnnuityFactorResponse(BaseModel):
    annuity_factor: float
    present_value: Optional[float] = None
    formatted: Dict[str, str]


@router.post("/annuity-factor", response_model=AnnuityFactorResponse)
async def calculate_annuity_factor(inputs: AnnuityFactorInput):
    """Calculate the present value annuity factor."""
    factor = annuity.calculate_annuity_factor(inputs.rate, inputs.periods)

    present_value = None
    if inputs.payment is not None:
        present_value = annuity.calculate_annuity_present_value(
            inputs.payment, inputs.rate, inputs.periods
        )

    ensure_finite(annuity_factor=factor, present_value=present_value)

    formatted = {"annuity_factor": format_number(factor, 4)}
    if present_value is not None:
        formatted["present_value"] = format_currency(present_value)

    return AnnuityFactorResponse(
        annuity_factor=factor,
        present_value=present_value,
        formatted=formatted,
    )


class NPVInput(CalculatorInput):
    """Input for NPV calculation."""

    rate: float  # percent per period
    initial_investment: float
    cash_flows: List[float] = Field(min_length=1)


class DiscountedCashFlow(BaseModel):
    period: int
    cash_flow: float
    discounted_value: float


class NPVResponse(BaseModel):
    npv: float
    is_profitable: bool
    schedule: List[DiscountedCashFlow]
    formatted: Dict[str, str]


@router.post("/npv", response_model=NPVResponse)
async def calculate_npv(inputs: NPVInput):
    """Calculate NPV with the period-by-period discounting schedule."""
    npv_val = npv.calculate_npv(
        inputs.rate, inputs.initial_investment, inputs.cash_flows
    )
    ensure_finite(npv=npv_val)

    schedule = npv.discount_cash_flows(
        inputs.rate, inputs.initial_investment, inputs.cash_flows
    )

    return NPVResponse(
        npv=npv_val,
        is_profitable=npv_val > 0,
        schedule=schedule,
        formatted={"npv": format_currency(npv_val)},
    )


class CocomoInput(CalculatorInput):
    """Input for basic COCOMO estimation."""

    kloc: float
    project_type: ProjectType = ProjectType.semidetached


class CocomoResponse(BaseModel):
    effort: float
    development_time: float
    average_staffing: float
    coefficients: Dict[str, float]
    formatted: Dict[str, str]


@router.post("/cocomo", response_model=CocomoResponse)
async def calculate_cocomo(inputs: CocomoInput):
    """Estimate effort (person-months) and development time (months)."""
    estimate = cocomo.calculate_cocomo(inputs.kloc, inputs.project_type)
    ensure_finite(
        effort=estimate.effort,
        development_time=estimate.development_time,
    )
    coefficients = COCOMO_COEFFICIENTS[inputs.project_type]

    return CocomoResponse(
        effort=estimate.effort,
        development_time=estimate.development_time,
        average_staffing=estimate.average_staffing,
        coefficients={
            "a": coefficients.a,
            "b": coefficients.b,
            "c": coefficients.c,
            "d": coefficients.d,
        },
        formatted={
            "effort": format_number(estimate.effort, 2),
            "development_time": format_number(estimate.development_time, 2),
        },
    )


class InflationInput(CalculatorInput):
    """Input for inflation adjustment."""

    initial_amount: float
    annual_rate: float  # percent per year
    years: int = Field(ge=0, le=1000)


class InflationPoint(BaseModel):
    year: int
    amount: float


class InflationResponse(BaseModel):
    adjusted_amount: float
    projection: List[InflationPoint]
    formatted: Dict[str, str]


@router.post("/inflation", response_model=InflationResponse)
async def calculate_inflation(inputs: InflationInput):
    """Calculate the amount needed to keep today's purchasing power."""
    adjusted = inflation.calculate_inflation_adjustment(
        inputs.initial_amount, inputs.annual_rate, inputs.years
    )
    # |amount| is monotonic in the year, so a finite final amount bounds the projection
    ensure_finite(adjusted_amount=adjusted)

    projection = inflation.project_inflation(
        inputs.initial_amount, inputs.annual_rate, inputs.years
    )

    return InflationResponse(
        adjusted_amount=adjusted,
        projection=projection,
        formatted={
            "initial_amount": format_currency(inputs.initial_amount),
            "adjusted_amount": format_currency(adjusted),
        },
    )


class IncomeTaxInput(CalculatorInput):
    """Input for Indian income tax (new regime)."""

    total_income: float = Field(ge=0)


class TaxSlabRow(BaseModel):
    lower: float
    upper: Optional[float] = None  # None for the open top band
    rate: float
    taxable_amount: float
    tax: float


class IncomeTaxResponse(BaseModel):
    assessment_year: str
    total_income: float
    standard_deduction: float
    taxable_income: float
    rebate_applied: bool
    slabs: List[TaxSlabRow]
    slab_tax: float
    cess: float
    total_tax: float
    effective_rate: float
    formatted: Dict[str, str]


@router.post("/income-tax", response_model=IncomeTaxResponse)
async def calculate_income_tax(inputs: IncomeTaxInput):
    """Calculate tax payable with a per-slab breakdown."""
    breakdown = income_tax.calculate_tax_breakdown(inputs.total_income)
    ensure_finite(total_tax=breakdown.total_tax)

    return IncomeTaxResponse(
        assessment_year=income_tax.ASSESSMENT_YEAR,
        total_income=breakdown.total_income,
        standard_deduction=income_tax.STANDARD_DEDUCTION,
        taxable_income=breakdown.taxable_income,
        rebate_applied=breakdown.rebate_applied,
        slabs=breakdown.slabs,
        slab_tax=breakdown.slab_tax,
        cess=breakdown.cess,
        total_tax=breakdown.total_tax,
        effective_rate=breakdown.effective_rate,
        formatted={
            "total_tax": format_currency(breakdown.total_tax),
            "effective_rate": f"{format_number(breakdown.effective_rate, 2)}%",
        },
    )
