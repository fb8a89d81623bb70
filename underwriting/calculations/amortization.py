"""
Loan Amortization Calculations

Implements the level-payment loan terms and the monthly
interest/principal/balance recurrence consumed by the pro-forma,
plus a dated monthly schedule stepped from the same recurrence.
"""

from typing import List, Dict, NamedTuple, Optional
from dataclasses import dataclass
from datetime import date
from dateutil.relativedelta import relativedelta

_EPS = 1e-6  # Balances below this are paid off


@dataclass(frozen=True)
class AmortizationTerms:
    """Fixed-rate, level-payment loan terms."""

    loan_amount: float
    monthly_rate: float
    total_periods: int  # Months
    monthly_payment: float

    @property
    def annual_debt_service(self) -> float:
        return self.monthly_payment * 12

    @property
    def loan_constant(self) -> float:
        """Annual debt service / loan amount."""
        if self.loan_amount <= 0:
            return 0.0
        return self.annual_debt_service / self.loan_amount


class AmortizationStep(NamedTuple):
    """One month of the amortization recurrence."""

    interest: float
    principal: float
    balance: float


def calculate_payment(
    principal: float, annual_rate: float, amortization_months: int
) -> float:
    """
    Calculate monthly loan payment.

    Matches Excel's PMT() function.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate as decimal (e.g., 0.05 for 5%)
        amortization_months: Total amortization period in months

    Returns:
        Monthly payment amount (positive number)
    """
    if principal <= 0:
        return 0.0
    if amortization_months <= 0:
        return 0.0

    monthly_rate = annual_rate / 12

    if monthly_rate == 0:
        return principal / amortization_months

    return principal * monthly_rate / (1 - (1 + monthly_rate) ** -amortization_months)


def build_amortization_terms(
    loan_amount: float, interest_rate_pct: float, amortization_years: int
) -> AmortizationTerms:
    """
    Size the level monthly payment for a loan.

    Args:
        loan_amount: Loan principal
        interest_rate_pct: Annual nominal rate as a whole-number percent (6.5 = 6.5%)
        amortization_years: Amortization period in years

    Returns:
        AmortizationTerms with monthly rate, period count, and payment
    """
    if amortization_years < 1:
        raise ValueError(f"Amortization must be at least 1 year, got {amortization_years}")

    annual_rate = interest_rate_pct / 100
    total_periods = amortization_years * 12

    return AmortizationTerms(
        loan_amount=loan_amount,
        monthly_rate=annual_rate / 12,
        total_periods=total_periods,
        monthly_payment=calculate_payment(loan_amount, annual_rate, total_periods),
    )


def amortization_step(balance: float, terms: AmortizationTerms) -> AmortizationStep:
    """
    Apply one monthly payment to a balance.

    Principal never exceeds the outstanding balance, so a paid-off loan
    stays at zero instead of going negative.
    """
    interest = balance * terms.monthly_rate
    principal = terms.monthly_payment - interest
    if balance - principal < _EPS:
        # Final payment; absorb floating-point residue
        principal = balance
    return AmortizationStep(interest, principal, balance - principal)


def generate_amortization_schedule(
    terms: AmortizationTerms,
    total_months: Optional[int] = None,
    start_date: Optional[date] = None,
) -> List[Dict]:
    """
    Generate a dated monthly schedule by stepping the loan's recurrence.

    Rows stop at payoff or after total_months, whichever comes first;
    total_months defaults to the full amortization term.
    """
    if total_months is None:
        total_months = terms.total_periods
    if start_date is None:
        start_date = date.today()

    schedule = []
    balance = terms.loan_amount
    for period in range(1, total_months + 1):
        if balance <= 0:
            break
        step = amortization_step(balance, terms)
        schedule.append(
            {
                "period": period,
                "date": (start_date + relativedelta(months=period - 1)).isoformat(),
                "beginning_balance": round(balance, 2),
                "payment": round(step.interest + step.principal, 2),
                "interest": round(step.interest, 2),
                "principal": round(step.principal, 2),
                "ending_balance": round(step.balance, 2),
            }
        )
        balance = step.balance

    return schedule


def calculate_dscr(noi: float, debt_service: float) -> float:
    """
    Calculate Debt Service Coverage Ratio (DSCR).

    Args:
        noi: Net Operating Income for the period
        debt_service: Debt service for the period

    Returns:
        DSCR ratio, or 0 when there is no debt service
    """
    if debt_service == 0:
        return 0.0
    return noi / debt_service
