"""
credit_metrics.py
-----------------
Covenant monitoring on a projected run, plus the quick credit summary
shown on a deal card before a full model exists.

Computed metrics (by year):
  - Leverage vs. max leverage covenant
  - DSCR vs. min DSCR covenant
  - Interest coverage (Adj EBITDA / interest) vs. min coverage covenant
  - Implied credit rating proxy (simplistic leverage mapping)
"""

from dataclasses import dataclass
from typing import Optional

import pandas as pd

from credit_model.model.records import ProjectionResult, YearProjection
from credit_model.utils.numeric import round_percent, round_ratio, safe_ratio


# Interest coverage reported when there is no interest to cover
NO_INTEREST_COVERAGE = 999.0

# Simplified leverage → implied credit rating mapping
LEVERAGE_RATING_MAP = [
    (2.0,  "BBB+/Baa1"),
    (3.0,  "BBB/Baa2"),
    (3.5,  "BBB-/Baa3"),
    (4.5,  "BB+/Ba1"),
    (5.5,  "BB/Ba2"),
    (6.5,  "BB-/Ba3"),
    (7.5,  "B+/B1"),
    (9.0,  "B/B2"),
    (99.0, "B-/B3 or below"),
]

# Quick-summary constants
QUICK_COVENANT_LEVERAGE = 5.5
QUICK_DEFAULT_LEVERAGE  = 4.0     # x EBITDA when no EBITDA is on file
QUICK_DEFAULT_RATE_PCT  = 10.0
QUICK_SWEEP_SHARE       = 0.30    # share of FCF assumed to repay debt in year 1
QUICK_EBITDA_GROWTH     = 0.05
QUICK_AMORT_SHARE       = 0.05


@dataclass(frozen=True)
class CovenantThresholds:
    max_leverage: float = 5.0
    min_dscr: float = 1.25
    min_interest_coverage: float = 2.0


def implied_rating(leverage: float) -> str:
    for threshold, rating in LEVERAGE_RATING_MAP:
        if leverage <= threshold:
            return rating
    return "CCC"


def interest_coverage(row: YearProjection) -> float:
    """Adj EBITDA / interest; NO_INTEREST_COVERAGE when the tranche is fully repaid."""
    if row.interest_expense > 0:
        return row.adjusted_ebitda / row.interest_expense
    return NO_INTEREST_COVERAGE


@dataclass(frozen=True)
class CovenantRatios:
    leverage: float
    dscr: float
    interest_coverage: float


def covenant_ratios(row: YearProjection) -> CovenantRatios:
    """
    Unrounded ratios rebuilt from the row's money fields.

    Covenants are tested on these; the 2-dp figures on the row are for
    display only, and a 5.003x year must still breach a 5.0x covenant.
    """
    return CovenantRatios(
        leverage=safe_ratio(row.ending_debt, row.adjusted_ebitda),
        dscr=safe_ratio(max(0.0, row.adjusted_ebitda), row.debt_service),
        interest_coverage=interest_coverage(row),
    )


def headroom_pct(value: float, threshold: float, floor: bool = False) -> float:
    """Headroom as a % of the covenant level; positive = inside the covenant."""
    gap = value - threshold if floor else threshold - value
    return round_percent(safe_ratio(gap, threshold) * 100)


def covenant_headroom_df(
    result: ProjectionResult,
    covenants: Optional[CovenantThresholds] = None,
) -> pd.DataFrame:
    """Per-year covenant headroom and compliance for Years 1..5."""
    covenants = covenants or CovenantThresholds()

    rows = []
    for p in result.projected_years:
        r = covenant_ratios(p)
        rows.append({
            "Year":                     p.year,
            "Leverage (x)":             round_ratio(r.leverage),
            "Max Leverage Covenant":    covenants.max_leverage,
            "Leverage Headroom (x)":    round_ratio(covenants.max_leverage - r.leverage),
            "Leverage Headroom %":      headroom_pct(r.leverage, covenants.max_leverage),
            "In Compliance (Leverage)": "YES" if r.leverage <= covenants.max_leverage else "NO",
            "DSCR (x)":                 round_ratio(r.dscr),
            "Min DSCR Covenant":        covenants.min_dscr,
            "DSCR Headroom (x)":        round_ratio(r.dscr - covenants.min_dscr),
            "DSCR Headroom %":          headroom_pct(r.dscr, covenants.min_dscr, floor=True),
            "In Compliance (DSCR)":     "YES" if r.dscr >= covenants.min_dscr else "NO",
            "Interest Coverage (x)":    round_ratio(r.interest_coverage),
            "Min Coverage Covenant":    covenants.min_interest_coverage,
            "Coverage Headroom (x)":    round_ratio(r.interest_coverage
                                                    - covenants.min_interest_coverage),
            "Coverage Headroom %":      headroom_pct(r.interest_coverage,
                                                     covenants.min_interest_coverage, floor=True),
            "In Compliance (Coverage)": "YES" if r.interest_coverage >= covenants.min_interest_coverage
                                        else "NO",
            "Implied Rating":           implied_rating(r.leverage),
        })
    return pd.DataFrame(rows).set_index("Year")


@dataclass(frozen=True)
class QuickCreditSummary:
    current_leverage: float
    projected_leverage: float
    covenant_headroom_pct: float
    pricing_pressure: str         # "Tightening" | "Stable" | "Widening"
    debt_service_coverage: float


def pricing_pressure(committed: float, target_size: float) -> str:
    """Book coverage → pricing direction."""
    coverage = committed / target_size if target_size > 0 else 0.0
    if coverage >= 1.2:
        return "Tightening"
    if coverage >= 0.9:
        return "Stable"
    return "Widening"


def quick_summary(
    facility_size: float,
    committed: float,
    target_size: float,
    entry_ebitda: Optional[float] = None,
    leverage_multiple: Optional[float] = None,
    interest_rate_pct: Optional[float] = None,
) -> QuickCreditSummary:
    """
    Back-of-envelope credit read for a deal card.

    EBITDA falls back to facility / leverage multiple (4.0x when absent),
    the rate to 10%.  Year-1 paydown assumes 30% of FCF after interest goes
    to debt and EBITDA grows 5%.
    """
    leverage = leverage_multiple or QUICK_DEFAULT_LEVERAGE
    ebitda   = entry_ebitda or facility_size / leverage
    rate     = interest_rate_pct or QUICK_DEFAULT_RATE_PCT
    if ebitda <= 0:
        raise ValueError("entry EBITDA must be positive for a quick summary")

    current_leverage = facility_size / ebitda
    interest_expense = facility_size * rate / 100
    fcf              = ebitda - interest_expense
    paydown          = max(0.0, fcf * QUICK_SWEEP_SHARE)
    projected_debt   = facility_size - paydown
    projected_ebitda = ebitda * (1 + QUICK_EBITDA_GROWTH)

    headroom = (QUICK_COVENANT_LEVERAGE - current_leverage) / QUICK_COVENANT_LEVERAGE * 100
    dscr     = safe_ratio(ebitda, interest_expense + facility_size * QUICK_AMORT_SHARE)

    return QuickCreditSummary(
        current_leverage=round_ratio(current_leverage),
        projected_leverage=round_ratio(projected_debt / projected_ebitda),
        covenant_headroom_pct=round_percent(headroom),
        pricing_pressure=pricing_pressure(committed, target_size),
        debt_service_coverage=round_ratio(dscr),
    )
