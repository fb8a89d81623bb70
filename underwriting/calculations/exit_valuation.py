"""
Exit Valuation

Prices the sale at the end of the hold by capping the following year's
NOI, the income a buyer underwrites on day one of their ownership.
"""

from dataclasses import dataclass

from underwriting.calculations.proforma import ProjectionResult


@dataclass(frozen=True)
class ExitValuation:
    """Sale price and net proceeds at the end of the hold."""

    forward_noi: float
    sale_price: float
    sale_costs: float
    loan_payoff: float
    net_sale_proceeds: float


def cap_value(noi: float, cap_rate_pct: float) -> float:
    """Direct capitalization: NOI / cap rate."""
    if cap_rate_pct <= 0:
        raise ValueError(f"Exit cap rate must be positive, got {cap_rate_pct}%")
    return noi / (cap_rate_pct / 100)


def value_exit(
    projection: ProjectionResult,
    hold_period: int,
    exit_cap_rate: float,
    sale_costs_pct: float,
) -> ExitValuation:
    """
    Calculate sale proceeds at exit.

    Args:
        projection: Annual pro-forma extending at least one year past the hold
        hold_period: Hold period in years
        exit_cap_rate: Exit cap rate as a whole-number percent
        sale_costs_pct: Selling costs as a percent of sale price

    Returns:
        ExitValuation with gross price, costs, loan payoff, and net proceeds
    """
    if hold_period < 1:
        raise ValueError(f"Hold period must be at least 1 year, got {hold_period}")
    if len(projection) <= hold_period:
        raise ValueError(
            f"Projection of {len(projection)} years has no forward year "
            f"for a {hold_period}-year hold"
        )

    forward_noi = projection[hold_period].net_operating_income
    sale_price = cap_value(forward_noi, exit_cap_rate)
    sale_costs = sale_price * sale_costs_pct / 100
    loan_payoff = projection[hold_period - 1].ending_loan_balance

    return ExitValuation(
        forward_noi=forward_noi,
        sale_price=sale_price,
        sale_costs=sale_costs,
        loan_payoff=loan_payoff,
        net_sale_proceeds=sale_price - sale_costs - loan_payoff,
    )
