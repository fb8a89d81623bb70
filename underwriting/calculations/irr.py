"""
IRR and NPV Calculations

Implements IRR using Newton-Raphson method, matching Excel's IRR function
for periodic cash flows.
"""

import logging
import math
from typing import List, Optional

import numpy as np

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 1000
TOLERANCE = 1e-7
DEFAULT_GUESS = 0.1


def calculate_npv(cash_flows: List[float], discount_rate: float) -> float:
    """
    Calculate NPV (Net Present Value) of cash flows.

    Args:
        cash_flows: Array of cash flows (negative = outflow, positive = inflow),
            the first at period 0
        discount_rate: Periodic discount rate (e.g., 0.10 for 10%)

    Returns:
        NPV value
    """
    flows = np.asarray(cash_flows, dtype=float)
    periods = np.arange(len(flows))
    return float(np.sum(flows / (1 + discount_rate) ** periods))


def _npv_derivative(cash_flows: List[float], rate: float) -> float:
    """Calculate derivative of NPV with respect to rate (for Newton-Raphson)."""
    flows = np.asarray(cash_flows, dtype=float)
    periods = np.arange(len(flows))
    return float(-np.sum(periods * flows / (1 + rate) ** (periods + 1)))


def calculate_irr(
    cash_flows: List[float],
    guess: float = DEFAULT_GUESS,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = TOLERANCE,
) -> Optional[float]:
    """
    Calculate IRR (Internal Rate of Return) using Newton-Raphson method.

    Args:
        cash_flows: Array of periodic cash flows
        guess: Initial guess for rate (default 0.1 = 10%)
        max_iterations: Iteration budget
        tolerance: Convergence threshold on successive rate estimates

    Returns:
        Periodic IRR as decimal (e.g., 0.15 for 15%), or None when the
        solver does not converge. None means indeterminate, not zero.
    """
    rate = guess

    for _ in range(max_iterations):
        npv = calculate_npv(cash_flows, rate)
        dnpv = _npv_derivative(cash_flows, rate)

        if dnpv == 0:
            logger.debug(f"IRR derivative vanished at rate {rate}")
            return None

        new_rate = rate - npv / dnpv

        if not math.isfinite(new_rate):
            logger.debug(f"IRR estimate is not finite: {new_rate}")
            return None

        if abs(new_rate - rate) < tolerance:
            return new_rate

        rate = new_rate

    logger.debug(f"IRR did not converge within {max_iterations} iterations")
    return None


def calculate_multiple(cash_flows: List[float]) -> float:
    """
    Calculate equity multiple.

    Args:
        cash_flows: Array of cash flows (investments are negative)

    Returns:
        Multiple (e.g., 2.0 = 2.0x return)
    """
    total_inflows = sum(cf for cf in cash_flows if cf > 0)
    total_outflows = abs(sum(cf for cf in cash_flows if cf < 0))

    if total_outflows == 0:
        raise ValueError("No investment (outflows) found")

    return total_inflows / total_outflows


def calculate_profit(cash_flows: List[float]) -> float:
    """Calculate profit (total inflows minus total outflows)."""
    return sum(cash_flows)
