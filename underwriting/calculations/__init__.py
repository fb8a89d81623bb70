"""
Underwriting Calculation Engine

Pure calculation modules for a leveraged real estate acquisition:
deal derivation, loan amortization, annual pro-forma, exit valuation,
and return metrics.
"""

from underwriting.calculations import (
    amortization,
    assumptions,
    deal,
    exit_valuation,
    growth,
    irr,
    proforma,
    returns,
)
from underwriting.calculations.assumptions import Assumptions, GrowthMode
from underwriting.calculations.engine import UnderwritingResult, underwrite

__all__ = [
    "amortization",
    "assumptions",
    "deal",
    "exit_valuation",
    "growth",
    "irr",
    "proforma",
    "returns",
    "Assumptions",
    "GrowthMode",
    "UnderwritingResult",
    "underwrite",
]
