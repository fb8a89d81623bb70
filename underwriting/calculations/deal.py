"""
Deal Derivation

Turns acquisition inputs into day-one metrics: going-in NOI, the loan,
fees, and the equity required to close.
"""

from dataclasses import dataclass

from underwriting.calculations.assumptions import Assumptions


@dataclass(frozen=True)
class DerivedDeal:
    """Day-one deal metrics, computed once per run."""

    year1_noi: float
    year1_expenses: float
    year1_egi: float
    year1_gpi: float
    loan_amount: float
    loan_fee: float
    closing_costs: float
    total_equity: float

    @property
    def total_acquisition_cost(self) -> float:
        """Unlevered basis: price plus closing costs."""
        return self.total_equity + self.loan_amount - self.loan_fee


def gross_up_for_vacancy(egi: float, vacancy_rate_pct: float) -> float:
    """
    Back out gross potential income from effective gross income.

    Args:
        egi: Effective gross income
        vacancy_rate_pct: Vacancy as a whole-number percent (5.0 = 5%)

    Returns:
        GPI such that GPI less vacancy equals egi

    Raises:
        ValueError: If vacancy is 100% or more
    """
    if vacancy_rate_pct >= 100:
        raise ValueError(f"Vacancy rate must be below 100%, got {vacancy_rate_pct}%")
    return egi / (1 - vacancy_rate_pct / 100)


def derive_deal(assumptions: Assumptions) -> DerivedDeal:
    """
    Derive day-one deal metrics.

    Income is built up from the going-in cap rate: NOI first, then EGI by
    adding back expenses, then GPI by grossing up for vacancy.
    """
    price = assumptions.purchase_price

    year1_noi = price * assumptions.cap_rate / 100
    year1_expenses = assumptions.base_annual_expenses
    year1_egi = year1_noi + year1_expenses
    year1_gpi = gross_up_for_vacancy(year1_egi, assumptions.vacancy_rate_pct)

    loan_amount = price * assumptions.ltv_pct / 100
    loan_fee = loan_amount * assumptions.origination_fee_pct / 100
    closing_costs = price * assumptions.closing_costs_pct / 100
    total_equity = price + closing_costs + loan_fee - loan_amount

    return DerivedDeal(
        year1_noi=year1_noi,
        year1_expenses=year1_expenses,
        year1_egi=year1_egi,
        year1_gpi=year1_gpi,
        loan_amount=loan_amount,
        loan_fee=loan_fee,
        closing_costs=closing_costs,
        total_equity=total_equity,
    )
