"""
Deal Assumptions

The immutable input record for an underwriting run. All percentage fields
are whole-number percentages (6.5 means 6.5%), divided by 100 at use.

Configurations that would make the engine produce NaN or Infinity are
rejected here, before any calculation runs.
"""

import enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GrowthMode(str, enum.Enum):
    """Revenue growth model."""
    annual = "Annual"
    step_up = "StepUp"


class Assumptions(BaseModel):
    """Acquisition, operating, financing and exit assumptions for one deal."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Acquisition
    purchase_price: float = Field(1_725_325.0, gt=0)
    cap_rate: float = Field(8.97, ge=0)
    closing_costs_pct: float = Field(1.0, ge=0)

    # Operations
    vacancy_rate_pct: float = Field(5.0, ge=0, lt=100)
    base_annual_expenses: float = Field(50_000.0, ge=0)
    expense_growth_pct: float = 2.0

    # Revenue growth
    hold_period_years: int = Field(5, ge=1)
    growth_mode: GrowthMode = GrowthMode.annual
    annual_growth_pct: float = 2.0
    step_up_pct: float = 10.0
    step_up_frequency_years: int = Field(5, ge=1)

    # Financing
    ltv_pct: float = Field(65.0, ge=0, le=100)
    interest_rate_pct: float = Field(6.5, ge=0)
    amortization_years: int = Field(30, ge=1)
    origination_fee_pct: float = Field(1.0, ge=0)

    # Exit
    exit_cap_rate: float = Field(9.25, gt=0)
    sale_costs_pct: float = Field(2.0, ge=0, lt=100)

    @property
    def loan_amount(self) -> float:
        return self.purchase_price * self.ltv_pct / 100

    @property
    def total_equity(self) -> float:
        """Cash the sponsor brings to close: price plus costs and fees, less debt."""
        closing_costs = self.purchase_price * self.closing_costs_pct / 100
        loan_fee = self.loan_amount * self.origination_fee_pct / 100
        return self.purchase_price + closing_costs + loan_fee - self.loan_amount

    @model_validator(mode="after")
    def check_equity_positive(self) -> "Assumptions":
        if self.total_equity <= 0:
            raise ValueError(
                f"Total equity must be positive, got {self.total_equity:,.2f}; "
                "lower the LTV or origination fee"
            )
        return self
