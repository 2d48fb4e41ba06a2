"""
sensitivity.py
--------------
Sensitivity of the headline credit metrics to the main drivers.

Tornado: each driver is moved down and up by ``variation_pct`` percent of
its base value, holding everything else fixed, and the chosen metric is
re-measured:

  Revenue Growth  : shift applied to every year (base = 5-year average)
  EBITDA Margin   : shift applied to every year, kept within [5%, 60%]
  Interest Rate   : floored at 1%
  Cash Sweep %    : kept within [0, 100]

Two-way grid: interest rate (rows) vs cash sweep % (cols) for any metric.
"""

from dataclasses import dataclass, replace
from typing import Optional

import numpy as np
import pandas as pd

from credit_model.model.assumptions import Assumptions, base_case
from credit_model.model.normalizer import normalize_assumptions
from credit_model.model.projection import run_projection


METRICS = ("exit_leverage", "paydown_pct", "average_dscr")

MARGIN_FLOOR = 5.0
MARGIN_CAP   = 60.0
RATE_FLOOR   = 1.0


@dataclass(frozen=True)
class SensitivityCase:
    input_value: float
    result: float
    impact: float          # result - base result


@dataclass(frozen=True)
class SensitivityResult:
    variable: str
    label: str
    base_value: float
    base_result: float
    low: SensitivityCase
    high: SensitivityCase

    @property
    def swing(self) -> float:
        return abs(self.high.result - self.low.result)


def _shift_growth(a: Assumptions, delta: float) -> Assumptions:
    return replace(a, revenue_growth_pct=tuple(g + delta for g in a.revenue_growth_pct))


def _shift_margin(a: Assumptions, delta: float) -> Assumptions:
    return replace(a, ebitda_margin_pct=tuple(
        min(MARGIN_CAP, max(MARGIN_FLOOR, m + delta)) for m in a.ebitda_margin_pct
    ))


def _shift_rate(a: Assumptions, delta: float) -> Assumptions:
    rate = max(RATE_FLOOR, a.debt.interest_rate_pct + delta)
    return replace(a, debt=replace(a.debt, interest_rate_pct=rate))


def _shift_sweep(a: Assumptions, delta: float) -> Assumptions:
    return replace(a, cash_sweep_pct=min(100.0, max(0.0, a.cash_sweep_pct + delta)))


# key -> (label, base value getter, shifter)
DRIVERS = {
    "revenue_growth": ("Revenue Growth", lambda a: float(np.mean(a.revenue_growth_pct)), _shift_growth),
    "ebitda_margin":  ("EBITDA Margin",  lambda a: float(np.mean(a.ebitda_margin_pct)),  _shift_margin),
    "interest_rate":  ("Interest Rate",  lambda a: a.debt.interest_rate_pct,              _shift_rate),
    "cash_sweep":     ("Cash Sweep %",   lambda a: a.cash_sweep_pct,                      _shift_sweep),
}


def _metric(assumptions: Assumptions, metric: str) -> float:
    return getattr(run_projection(assumptions).summary, metric)


def _check_metric(metric: str) -> None:
    if metric not in METRICS:
        raise ValueError(f"unknown metric {metric!r}; expected one of {', '.join(METRICS)}")


def run_sensitivity(
    base: Optional[Assumptions] = None,
    metric: str = "exit_leverage",
    variation_pct: float = 20.0,
) -> list[SensitivityResult]:
    """
    Tornado analysis on ``metric``.  Results are sorted by swing, widest
    first, which is the order a tornado chart draws them.
    """
    _check_metric(metric)
    base = normalize_assumptions(base or base_case())
    base_result = _metric(base, metric)

    results = []
    for key, (label, get_base, shift) in DRIVERS.items():
        base_value = get_base(base)
        delta      = base_value * (variation_pct / 100)

        low_result  = _metric(shift(base, -delta), metric)
        high_result = _metric(shift(base, delta), metric)

        results.append(SensitivityResult(
            variable=key,
            label=label,
            base_value=base_value,
            base_result=base_result,
            low=SensitivityCase(base_value - delta, low_result, low_result - base_result),
            high=SensitivityCase(base_value + delta, high_result, high_result - base_result),
        ))

    return sorted(results, key=lambda r: r.swing, reverse=True)


def sensitivity_df(results: list[SensitivityResult]) -> pd.DataFrame:
    rows = [{
        "Driver":       r.label,
        "Base Input":   round(r.base_value, 2),
        "Low Input":    round(r.low.input_value, 2),
        "Low Result":   r.low.result,
        "High Input":   round(r.high.input_value, 2),
        "High Result":  r.high.result,
        "Swing":        round(r.swing, 2),
    } for r in results]
    return pd.DataFrame(rows).set_index("Driver")


def rate_vs_sweep_grid(
    base: Optional[Assumptions] = None,
    rates: list[float] = [7.5, 8.5, 9.5, 10.5, 11.5],
    sweeps: list[float] = [0.0, 25.0, 50.0, 75.0, 100.0],
    metric: str = "exit_leverage",
) -> pd.DataFrame:
    """
    Rows = interest rate %, Columns = cash sweep %, values = ``metric``.
    """
    _check_metric(metric)
    base = base or base_case()
    data = {}

    for sweep in sweeps:
        col = {}
        for rate in rates:
            a = replace(base, cash_sweep_pct=sweep,
                        debt=replace(base.debt, interest_rate_pct=rate))
            col[f"{rate:.2f}%"] = _metric(a, metric)
        data[f"Sweep {sweep:.0f}%"] = col

    df = pd.DataFrame(data)
    df.index.name = "Interest Rate"
    return df
