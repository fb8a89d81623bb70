"""
Financial calculation API endpoints.

These endpoints accept inputs and return calculated results.
Called on every assumption change for real-time updates.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date

from underwriting.calculations import irr
from underwriting.calculations.amortization import (
    build_amortization_terms,
    generate_amortization_schedule,
)
from underwriting.calculations.assumptions import Assumptions
from underwriting.calculations.engine import underwrite
from underwriting.config import Settings, get_settings

router = APIRouter()


class UnderwriteResponse(BaseModel):
    """Response with the annual pro-forma and return metrics."""

    assumptions: dict
    deal: dict
    amortization: dict
    annual_cashflows: List[dict]
    exit: dict
    returns: dict


@router.get("/defaults", response_model=Assumptions)
async def default_assumptions():
    """Reference deal assumptions."""
    return Assumptions()


@router.post("/underwrite", response_model=UnderwriteResponse)
async def calculate_underwriting(
    inputs: Assumptions, settings: Settings = Depends(get_settings)
):
    """Project the deal and solve for returns."""
    try:
        result = underwrite(
            inputs,
            irr_guess=settings.irr_guess,
            irr_max_iterations=settings.irr_max_iterations,
            irr_tolerance=settings.irr_tolerance,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return result.to_dict()


class IRRInput(BaseModel):
    """Input for IRR calculation."""

    cash_flows: List[float] = Field(min_length=2)


class IRRResponse(BaseModel):
    """Response with IRR calculation."""

    irr: Optional[float]
    multiple: float
    profit: float
    npv_at_10_percent: float


@router.post("/irr", response_model=IRRResponse)
async def calculate_irr_endpoint(
    inputs: IRRInput, settings: Settings = Depends(get_settings)
):
    """Calculate IRR for given cash flows. A null irr means it could not be solved."""
    try:
        multiple = irr.calculate_multiple(inputs.cash_flows)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    irr_val = irr.calculate_irr(
        inputs.cash_flows,
        guess=settings.irr_guess,
        max_iterations=settings.irr_max_iterations,
        tolerance=settings.irr_tolerance,
    )

    return IRRResponse(
        irr=irr_val,
        multiple=multiple,
        profit=irr.calculate_profit(inputs.cash_flows),
        npv_at_10_percent=irr.calculate_npv(inputs.cash_flows, 0.10),
    )


class AmortizationInput(BaseModel):
    """Input for amortization calculation."""

    principal: float = Field(ge=0)
    interest_rate_pct: float = Field(ge=0)
    amortization_years: int = Field(ge=1)
    total_months: Optional[int] = Field(None, ge=1)
    start_date: Optional[date] = None


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""
    terms = build_amortization_terms(
        inputs.principal, inputs.interest_rate_pct, inputs.amortization_years
    )
    schedule = generate_amortization_schedule(
        terms, total_months=inputs.total_months, start_date=inputs.start_date
    )

    return {
        "monthly_payment": terms.monthly_payment,
        "schedule": schedule,
        "total_interest": sum(row["interest"] for row in schedule),
        "total_principal": sum(row["principal"] for row in schedule),
    }
