"""
Return Metrics

Assembles the equity cash flow stream for the hold and solves it for
levered IRR, equity multiple, and cash-on-cash. Unlevered returns are
computed alongside on the all-cash basis.
"""

import logging
from typing import List, Optional, Sequence, Tuple
from dataclasses import dataclass

from underwriting.calculations.exit_valuation import ExitValuation
from underwriting.calculations.irr import (
    calculate_irr,
    calculate_profit,
    DEFAULT_GUESS,
    MAX_ITERATIONS,
    TOLERANCE,
)
from underwriting.calculations.proforma import YearRecord, sum_field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReturnsResult:
    """Headline return metrics for the hold."""

    sale_price: float
    sale_costs: float
    loan_payoff_at_exit: float
    net_sale_proceeds: float

    # Index 0 is the equity outflow; one entry per held year after that
    cash_flow_stream: Tuple[float, ...]
    levered_irr: Optional[float]
    equity_multiple: float
    average_cash_on_cash: float
    levered_profit: float

    unlevered_cash_flow_stream: Tuple[float, ...]
    unlevered_irr: Optional[float]
    unlevered_multiple: float


def build_cash_flow_stream(
    initial_investment: float,
    annual_cash_flows: Sequence[float],
    terminal_proceeds: float,
) -> List[float]:
    """
    Build an investment cash flow stream.

    The investment goes out at period 0 and terminal proceeds are added to
    the final annual cash flow, not appended as an extra period.
    """
    if not annual_cash_flows:
        raise ValueError("At least one annual cash flow required")

    stream = [-initial_investment] + list(annual_cash_flows)
    stream[-1] += terminal_proceeds
    return stream


def calculate_returns(
    total_equity: float,
    held_years: Sequence[YearRecord],
    exit_valuation: ExitValuation,
    total_acquisition_cost: Optional[float] = None,
    irr_guess: float = DEFAULT_GUESS,
    irr_max_iterations: int = MAX_ITERATIONS,
    irr_tolerance: float = TOLERANCE,
) -> ReturnsResult:
    """
    Calculate levered and unlevered returns for the hold.

    Args:
        total_equity: Equity invested at close
        held_years: Year records for the hold period only
        exit_valuation: Sale pricing at the end of the hold
        total_acquisition_cost: All-cash basis for unlevered returns;
            defaults to equity plus the opening loan balance
        irr_guess: Starting rate for the IRR solver
        irr_max_iterations: IRR iteration budget
        irr_tolerance: IRR convergence threshold

    Returns:
        ReturnsResult; levered_irr is None when the solver does not converge

    Raises:
        ValueError: If equity is not positive or the hold is empty
    """
    if total_equity <= 0:
        raise ValueError(f"Total equity must be positive, got {total_equity:,.2f}")

    hold_period = len(held_years)
    levered_cfs = [year.levered_cash_flow for year in held_years]

    stream = build_cash_flow_stream(
        total_equity, levered_cfs, exit_valuation.net_sale_proceeds
    )
    levered_irr = calculate_irr(
        stream, guess=irr_guess, max_iterations=irr_max_iterations, tolerance=irr_tolerance
    )
    if levered_irr is None:
        logger.warning(f"Levered IRR indeterminate for stream {stream}")

    # Distributions plus the returned equity offset, over invested equity
    equity_multiple = (sum(stream[1:]) + total_equity) / total_equity
    average_cash_on_cash = (sum_field(held_years, "levered_cash_flow") / hold_period) / total_equity

    if total_acquisition_cost is None:
        total_acquisition_cost = total_equity + held_years[0].starting_loan_balance
    unlevered_stream = build_cash_flow_stream(
        total_acquisition_cost,
        [year.unlevered_cash_flow for year in held_years],
        exit_valuation.sale_price - exit_valuation.sale_costs,
    )
    unlevered_irr = calculate_irr(
        unlevered_stream,
        guess=irr_guess,
        max_iterations=irr_max_iterations,
        tolerance=irr_tolerance,
    )
    if unlevered_irr is None:
        logger.warning(f"Unlevered IRR indeterminate for stream {unlevered_stream}")

    return ReturnsResult(
        sale_price=exit_valuation.sale_price,
        sale_costs=exit_valuation.sale_costs,
        loan_payoff_at_exit=exit_valuation.loan_payoff,
        net_sale_proceeds=exit_valuation.net_sale_proceeds,
        cash_flow_stream=tuple(stream),
        levered_irr=levered_irr,
        equity_multiple=equity_multiple,
        average_cash_on_cash=average_cash_on_cash,
        levered_profit=calculate_profit(stream),
        unlevered_cash_flow_stream=tuple(unlevered_stream),
        unlevered_irr=unlevered_irr,
        unlevered_multiple=(
            (sum(unlevered_stream[1:]) + total_acquisition_cost) / total_acquisition_cost
        ),
    )
