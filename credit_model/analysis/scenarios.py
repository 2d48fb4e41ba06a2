"""
scenarios.py
------------
Defines Downside / Base / Upside cases around a base assumptions set and
runs the projection for each.  Returns a comparison DataFrame plus the
individual ProjectionResults.

Upside   : growth +2 pts every year, margin +2 pts (capped at 60%)
Downside : growth -3 pts every year, margin -3 pts (floored at 5%)
"""

from dataclasses import replace
from typing import Optional

import pandas as pd

from credit_model.model.assumptions import Assumptions, base_case
from credit_model.model.normalizer import normalize_assumptions
from credit_model.model.projection import run_projection


SCENARIO_NAMES = ["Downside", "Base", "Upside"]

UPSIDE_GROWTH_SHIFT   = 2.0
UPSIDE_MARGIN_SHIFT   = 2.0
DOWNSIDE_GROWTH_SHIFT = -3.0
DOWNSIDE_MARGIN_SHIFT = -3.0

MARGIN_FLOOR = 5.0
MARGIN_CAP   = 60.0


def shift_operating_case(base: Assumptions, growth_shift: float,
                         margin_shift: float) -> Assumptions:
    """Parallel shift of the growth and margin paths, margin kept in [5, 60]."""
    return replace(
        base,
        revenue_growth_pct=tuple(g + growth_shift for g in base.revenue_growth_pct),
        ebitda_margin_pct=tuple(
            min(MARGIN_CAP, max(MARGIN_FLOOR, m + margin_shift))
            for m in base.ebitda_margin_pct
        ),
    )


def make_scenario_assumptions(base: Optional[Assumptions] = None,
                              strict: bool = False) -> dict[str, Assumptions]:
    if base is None:
        base = base_case()
    # shift the filled five-year paths so short inputs move with their fallbacks
    base = normalize_assumptions(base, strict=strict)

    return {
        "Downside": shift_operating_case(base, DOWNSIDE_GROWTH_SHIFT, DOWNSIDE_MARGIN_SHIFT),
        "Base":     base,
        "Upside":   shift_operating_case(base, UPSIDE_GROWTH_SHIFT, UPSIDE_MARGIN_SHIFT),
    }


def run_scenarios(base_assumptions: Optional[Assumptions] = None, strict: bool = False) -> dict:
    """
    Run all three scenarios.  ``strict`` is passed to the normalizer, so a
    strict run rejects a short base case instead of filling it.

    Returns
    -------
    {
      "results"      : {scenario_name: ProjectionResult},
      "assumptions"  : {scenario_name: Assumptions},
      "comparison_df": pd.DataFrame  (summary metrics, one column per scenario),
    }
    """
    scenarios = make_scenario_assumptions(base_assumptions, strict=strict)
    results   = {name: run_projection(a, strict=strict) for name, a in scenarios.items()}

    comparison_df = pd.DataFrame({
        name: {
            "Exit Leverage (x)":  results[name].summary.exit_leverage,
            "Paydown %":          results[name].summary.paydown_pct,
            "Avg DSCR (x)":       results[name].summary.average_dscr,
            "Total Paydown":      results[name].summary.total_paydown,
            "Exit Adj EBITDA":    results[name].exit_year.adjusted_ebitda,
            "Exit Debt":          results[name].exit_year.ending_debt,
        }
        for name in SCENARIO_NAMES
    })
    comparison_df.index.name = "Metric"

    return {
        "results":       results,
        "assumptions":   scenarios,
        "comparison_df": comparison_df,
    }
