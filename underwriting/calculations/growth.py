"""
Growth Policies

Revenue and expense escalation, applied year over year to the value
carried from the prior year. Year 1 is the base year and never grows.
"""

from dataclasses import dataclass
from typing import Union

from underwriting.calculations.assumptions import Assumptions, GrowthMode


@dataclass(frozen=True)
class AnnualGrowth:
    """Compound growth every year after year 1."""

    rate_pct: float

    def factor(self, year: int) -> float:
        if year <= 1:
            return 1.0
        return 1 + self.rate_pct / 100


@dataclass(frozen=True)
class StepUpGrowth:
    """
    Growth applied only at fixed multi-year intervals.

    With a 5-year frequency, income steps up in years 6, 11, 16, ...
    """

    rate_pct: float
    frequency_years: int

    def factor(self, year: int) -> float:
        if year <= 1:
            return 1.0
        if (year - 1) % self.frequency_years == 0:
            return 1 + self.rate_pct / 100
        return 1.0


GrowthPolicy = Union[AnnualGrowth, StepUpGrowth]


def growth_policy_for(assumptions: Assumptions) -> GrowthPolicy:
    """Select the revenue growth policy for a deal."""
    if assumptions.growth_mode == GrowthMode.step_up:
        return StepUpGrowth(
            rate_pct=assumptions.step_up_pct,
            frequency_years=assumptions.step_up_frequency_years,
        )
    return AnnualGrowth(rate_pct=assumptions.annual_growth_pct)


def expense_growth_for(assumptions: Assumptions) -> AnnualGrowth:
    """Expenses compound annually regardless of the revenue growth mode."""
    return AnnualGrowth(rate_pct=assumptions.expense_growth_pct)
