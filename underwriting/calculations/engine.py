"""
Underwriting Engine

Single entry point running the full pipeline:
deal derivation -> loan terms -> annual pro-forma -> exit -> returns.

Every call is a pure function of its inputs; nothing is cached or shared
between runs.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict

from underwriting.calculations.amortization import (
    AmortizationTerms,
    build_amortization_terms,
)
from underwriting.calculations.assumptions import Assumptions
from underwriting.calculations.deal import DerivedDeal, derive_deal
from underwriting.calculations.exit_valuation import ExitValuation, value_exit
from underwriting.calculations.irr import DEFAULT_GUESS, MAX_ITERATIONS, TOLERANCE
from underwriting.calculations.proforma import ProjectionResult, project_pro_forma
from underwriting.calculations.returns import ReturnsResult, calculate_returns

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnderwritingResult:
    """Everything needed to render the pro-forma and headline metrics."""

    assumptions: Assumptions
    deal: DerivedDeal
    amortization: AmortizationTerms
    projection: ProjectionResult
    exit: ExitValuation
    returns: ReturnsResult

    def to_dict(self) -> Dict[str, Any]:
        """Plain, JSON-safe representation."""
        return {
            "assumptions": self.assumptions.model_dump(mode="json"),
            "deal": {
                **asdict(self.deal),
                "total_acquisition_cost": self.deal.total_acquisition_cost,
            },
            "amortization": {
                **asdict(self.amortization),
                "annual_debt_service": self.amortization.annual_debt_service,
                "loan_constant": self.amortization.loan_constant,
            },
            "annual_cashflows": [asdict(year) for year in self.projection],
            "exit": asdict(self.exit),
            "returns": {
                **asdict(self.returns),
                "cash_flow_stream": list(self.returns.cash_flow_stream),
                "unlevered_cash_flow_stream": list(self.returns.unlevered_cash_flow_stream),
            },
        }


def underwrite(
    assumptions: Assumptions,
    *,
    irr_guess: float = DEFAULT_GUESS,
    irr_max_iterations: int = MAX_ITERATIONS,
    irr_tolerance: float = TOLERANCE,
) -> UnderwritingResult:
    """
    Underwrite a leveraged acquisition.

    Args:
        assumptions: Validated deal assumptions
        irr_guess: Starting rate for the IRR solver
        irr_max_iterations: IRR iteration budget
        irr_tolerance: IRR convergence threshold

    Returns:
        UnderwritingResult combining deal metrics, the annual schedule,
        exit pricing, and return metrics
    """
    deal = derive_deal(assumptions)
    terms = build_amortization_terms(
        deal.loan_amount, assumptions.interest_rate_pct, assumptions.amortization_years
    )
    projection = project_pro_forma(deal, terms, assumptions)

    hold_period = assumptions.hold_period_years
    exit_valuation = value_exit(
        projection, hold_period, assumptions.exit_cap_rate, assumptions.sale_costs_pct
    )
    returns = calculate_returns(
        deal.total_equity,
        projection.held_years(hold_period),
        exit_valuation,
        total_acquisition_cost=deal.total_acquisition_cost,
        irr_guess=irr_guess,
        irr_max_iterations=irr_max_iterations,
        irr_tolerance=irr_tolerance,
    )

    logger.debug(
        f"Underwrote {hold_period}-year hold at ${assumptions.purchase_price:,.0f}: "
        f"levered IRR {returns.levered_irr}, multiple {returns.equity_multiple:.2f}x"
    )

    return UnderwritingResult(
        assumptions=assumptions,
        deal=deal,
        amortization=terms,
        projection=projection,
        exit=exit_valuation,
        returns=returns,
    )
