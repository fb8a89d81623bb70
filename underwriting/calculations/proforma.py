"""
Annual Pro-Forma Projection

Projects income, expenses, debt service, and cash flow year by year.
The projection runs past the hold period so the year after exit is
available for forward-NOI sale pricing.
"""

from typing import List, NamedTuple, Tuple
from dataclasses import dataclass

from underwriting.calculations.amortization import (
    AmortizationTerms,
    amortization_step,
    calculate_dscr,
)
from underwriting.calculations.assumptions import Assumptions
from underwriting.calculations.deal import DerivedDeal
from underwriting.calculations.growth import (
    GrowthPolicy,
    AnnualGrowth,
    growth_policy_for,
    expense_growth_for,
)

MIN_PROJECTION_YEARS = 10
MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class YearRecord:
    """One projected year of the pro-forma."""

    year: int

    # Operations
    gross_potential_income: float
    vacancy_loss: float
    effective_gross_income: float
    operating_expenses: float
    net_operating_income: float

    # Debt
    starting_loan_balance: float
    annual_interest: float
    annual_principal: float
    ending_loan_balance: float
    annual_debt_service: float

    # Cash flow
    unlevered_cash_flow: float
    levered_cash_flow: float

    # Credit metrics
    debt_service_coverage_ratio: float
    debt_yield: float


@dataclass(frozen=True)
class ProjectionResult:
    """Ordered year records, year 1 first."""

    years: Tuple[YearRecord, ...]

    def __len__(self) -> int:
        return len(self.years)

    def __iter__(self):
        return iter(self.years)

    def __getitem__(self, index: int) -> YearRecord:
        return self.years[index]

    def year(self, number: int) -> YearRecord:
        """Look up a record by 1-based year number."""
        if not 1 <= number <= len(self.years):
            raise IndexError(f"Year {number} outside projection of {len(self.years)} years")
        return self.years[number - 1]

    def held_years(self, hold_period: int) -> Tuple[YearRecord, ...]:
        """Records for the years the investor owns the property."""
        return self.years[:hold_period]


class _ProjectionState(NamedTuple):
    """Values carried from one year into the next."""

    balance: float
    gpi: float
    expenses: float


def projection_years(hold_period: int) -> int:
    """Number of years to project: always at least one year beyond the hold."""
    return max(hold_period + 1, MIN_PROJECTION_YEARS)


def _annual_debt(balance: float, terms: AmortizationTerms) -> Tuple[float, float, float]:
    """Run twelve monthly payments; returns (interest, principal, ending balance)."""
    interest = 0.0
    principal = 0.0
    for _ in range(MONTHS_PER_YEAR):
        step = amortization_step(balance, terms)
        interest += step.interest
        principal += step.principal
        balance = step.balance
    return interest, principal, balance


def _project_year(
    state: _ProjectionState,
    year: int,
    revenue_growth: GrowthPolicy,
    expense_growth: AnnualGrowth,
    vacancy_rate_pct: float,
    terms: AmortizationTerms,
) -> Tuple[YearRecord, _ProjectionState]:
    gpi = state.gpi * revenue_growth.factor(year)
    expenses = state.expenses * expense_growth.factor(year)

    vacancy_loss = gpi * vacancy_rate_pct / 100
    egi = gpi - vacancy_loss
    noi = egi - expenses

    interest, principal, ending_balance = _annual_debt(state.balance, terms)
    debt_service = interest + principal

    record = YearRecord(
        year=year,
        gross_potential_income=gpi,
        vacancy_loss=vacancy_loss,
        effective_gross_income=egi,
        operating_expenses=expenses,
        net_operating_income=noi,
        starting_loan_balance=state.balance,
        annual_interest=interest,
        annual_principal=principal,
        ending_loan_balance=ending_balance,
        annual_debt_service=debt_service,
        unlevered_cash_flow=noi,
        levered_cash_flow=noi - debt_service,
        debt_service_coverage_ratio=calculate_dscr(noi, debt_service),
        debt_yield=noi / state.balance if state.balance > 0 else 0.0,
    )

    return record, _ProjectionState(ending_balance, gpi, expenses)


def project_pro_forma(
    deal: DerivedDeal,
    terms: AmortizationTerms,
    assumptions: Assumptions,
) -> ProjectionResult:
    """
    Generate the annual pro-forma.

    Revenue growth follows the deal's growth mode; expenses compound at the
    expense growth rate. Debt service is the sum of twelve monthly payments,
    with the loan balance carried across years.

    Args:
        deal: Day-one deal metrics (year-1 GPI, expenses, loan amount)
        terms: Loan terms for the monthly recurrence
        assumptions: Deal assumptions (growth, vacancy, hold period)

    Returns:
        ProjectionResult spanning max(hold_period + 1, 10) years
    """
    revenue_growth = growth_policy_for(assumptions)
    expense_growth = expense_growth_for(assumptions)

    state = _ProjectionState(
        balance=deal.loan_amount,
        gpi=deal.year1_gpi,
        expenses=deal.year1_expenses,
    )
    records: List[YearRecord] = []

    for year in range(1, projection_years(assumptions.hold_period_years) + 1):
        record, state = _project_year(
            state,
            year,
            revenue_growth,
            expense_growth,
            assumptions.vacancy_rate_pct,
            terms,
        )
        records.append(record)

    return ProjectionResult(years=tuple(records))


def sum_field(records, field: str) -> float:
    """Sum a YearRecord attribute across records."""
    return sum(getattr(record, field) for record in records)
