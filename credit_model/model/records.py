"""
records.py
----------
Immutable output records produced by the projection engine.

A ProjectionResult always holds six YearProjection rows: index 0 is the
LTM baseline, 1..5 are the projected years.
"""

from dataclasses import asdict, dataclass, fields
from typing import Tuple


@dataclass(frozen=True)
class YearProjection:
    year: int
    label: str

    # --- Income statement ---
    revenue: float
    revenue_growth_pct: float
    gross_ebitda: float
    ebitda_margin_pct: float
    adjustments: float
    adjusted_ebitda: float
    depreciation_amortization: float
    ebit: float
    interest_expense: float
    taxes: float
    net_income: float

    # --- Cash flow waterfall ---
    depreciation_addback: float
    capex: float
    mandatory_amortization: float
    free_cash_flow: float            # after mandatory amortization, before sweep

    # --- Debt schedule ---
    beginning_debt: float
    cash_sweep: float
    ending_debt: float

    # --- Credit ratios ---
    leverage_ratio: float
    debt_service_coverage_ratio: float

    @property
    def debt_service(self) -> float:
        return self.interest_expense + self.mandatory_amortization

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Summary:
    total_paydown: float
    paydown_pct: float
    entry_leverage: float
    exit_leverage: float
    average_dscr: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ProjectionResult:
    projections: Tuple[YearProjection, ...]
    summary: Summary

    @property
    def ltm(self) -> YearProjection:
        return self.projections[0]

    @property
    def projected_years(self) -> Tuple[YearProjection, ...]:
        """Years 1..5 (LTM excluded)."""
        return self.projections[1:]

    @property
    def exit_year(self) -> YearProjection:
        return self.projections[-1]


YEAR_FIELDS = tuple(f.name for f in fields(YearProjection))
