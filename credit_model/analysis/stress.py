"""
stress.py
---------
Downside stress tests against the credit agreement covenants.

Each preset replaces the growth and margin paths outright and can add a
parallel shift to the coupon.  The run is checked year by year against
max leverage, min DSCR and min interest coverage, and graded:

  low      : no breaches, worst leverage < 80% of the covenant
  medium   : no breaches, worst leverage < 95% of the covenant
  high     : 1-2 breaches (or no breaches but inside 5% of the covenant)
  critical : 3+ breaches
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

import pandas as pd

from credit_model.analysis.credit_metrics import CovenantThresholds, covenant_ratios
from credit_model.model.assumptions import Assumptions
from credit_model.model.projection import run_projection
from credit_model.model.records import ProjectionResult
from credit_model.utils.numeric import round_ratio

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StressScenario:
    name: str
    description: str
    revenue_growth_pct: Tuple[float, ...]
    ebitda_margin_pct: Tuple[float, ...]
    interest_rate_shift_pct: float = 0.0

    def apply(self, base: Assumptions) -> Assumptions:
        debt = replace(base.debt,
                       interest_rate_pct=base.debt.interest_rate_pct + self.interest_rate_shift_pct)
        return replace(base,
                       revenue_growth_pct=self.revenue_growth_pct,
                       ebitda_margin_pct=self.ebitda_margin_pct,
                       debt=debt)


STRESS_SCENARIOS = (
    StressScenario(
        name="Revenue Shock",
        description="Sharp revenue decline in Year 1, gradual recovery",
        revenue_growth_pct=(-10.0, -5.0, 2.0, 4.0, 5.0),
        ebitda_margin_pct=(22.0, 22.0, 23.0, 24.0, 25.0),
    ),
    StressScenario(
        name="Margin Compression",
        description="Sustained margin pressure from competition",
        revenue_growth_pct=(3.0, 3.0, 4.0, 4.0, 5.0),
        ebitda_margin_pct=(20.0, 18.0, 17.0, 17.0, 18.0),
    ),
    StressScenario(
        name="Rate Spike",
        description="Interest rates increase 200bps",
        revenue_growth_pct=(5.0, 5.0, 5.0, 5.0, 5.0),
        ebitda_margin_pct=(25.0, 25.0, 25.0, 25.0, 25.0),
        interest_rate_shift_pct=2.0,
    ),
    StressScenario(
        name="Perfect Storm",
        description="Revenue decline + margin pressure + rate spike",
        revenue_growth_pct=(-8.0, -3.0, 0.0, 2.0, 3.0),
        ebitda_margin_pct=(18.0, 16.0, 16.0, 17.0, 18.0),
        interest_rate_shift_pct=1.5,
    ),
)


@dataclass(frozen=True)
class CovenantBreach:
    year: int
    covenant: str
    threshold: float
    actual: float


@dataclass(frozen=True)
class StressTestResult:
    scenario: StressScenario
    result: ProjectionResult
    breaches: Tuple[CovenantBreach, ...]
    worst_leverage: Tuple[int, float]     # (year, value)
    worst_dscr: Tuple[int, float]
    risk_level: str

    @property
    def survives(self) -> bool:
        return not self.breaches


def find_breaches(result: ProjectionResult, covenants: CovenantThresholds) -> list[CovenantBreach]:
    """Test each projected year on unrounded ratios; ``actual`` is rounded for reporting."""
    breaches = []
    for p in result.projected_years:
        r = covenant_ratios(p)
        if r.leverage > covenants.max_leverage:
            breaches.append(CovenantBreach(p.year, "Max Leverage",
                                           covenants.max_leverage, round_ratio(r.leverage)))
        if r.dscr < covenants.min_dscr:
            breaches.append(CovenantBreach(p.year, "Min DSCR",
                                           covenants.min_dscr, round_ratio(r.dscr)))
        if r.interest_coverage < covenants.min_interest_coverage:
            breaches.append(CovenantBreach(p.year, "Min Interest Coverage",
                                           covenants.min_interest_coverage,
                                           round_ratio(r.interest_coverage)))
    return breaches


def risk_level(breaches: Sequence[CovenantBreach], worst_leverage: float,
               covenants: CovenantThresholds) -> str:
    if not breaches and worst_leverage < covenants.max_leverage * 0.80:
        return "low"
    if not breaches and worst_leverage < covenants.max_leverage * 0.95:
        return "medium"
    if len(breaches) <= 2:
        return "high"
    return "critical"


def run_stress_test(
    base: Assumptions,
    scenario: StressScenario,
    covenants: Optional[CovenantThresholds] = None,
) -> StressTestResult:
    covenants = covenants or CovenantThresholds()
    result    = run_projection(scenario.apply(base))
    breaches  = find_breaches(result, covenants)

    ratios = {p.year: covenant_ratios(p) for p in result.projected_years}
    lev_year  = max(ratios, key=lambda y: ratios[y].leverage)
    dscr_year = min(ratios, key=lambda y: ratios[y].dscr)

    level = risk_level(breaches, ratios[lev_year].leverage, covenants)
    if breaches:
        logger.info("stress '%s': %d covenant breach(es), risk %s",
                    scenario.name, len(breaches), level)

    return StressTestResult(
        scenario=scenario,
        result=result,
        breaches=tuple(breaches),
        worst_leverage=(lev_year, round_ratio(ratios[lev_year].leverage)),
        worst_dscr=(dscr_year, round_ratio(ratios[dscr_year].dscr)),
        risk_level=level,
    )


def run_stress_tests(
    base: Assumptions,
    covenants: Optional[CovenantThresholds] = None,
    scenarios: Sequence[StressScenario] = STRESS_SCENARIOS,
) -> list[StressTestResult]:
    return [run_stress_test(base, s, covenants) for s in scenarios]


def stress_summary_df(results: Sequence[StressTestResult]) -> pd.DataFrame:
    rows = []
    for r in results:
        rows.append({
            "Scenario":          r.scenario.name,
            "Exit Leverage (x)": r.result.summary.exit_leverage,
            "Avg DSCR (x)":      r.result.summary.average_dscr,
            "Paydown %":         r.result.summary.paydown_pct,
            "Worst Leverage":    r.worst_leverage[1],
            "Worst Lev. Year":   r.worst_leverage[0],
            "Worst DSCR":        r.worst_dscr[1],
            "Worst DSCR Year":   r.worst_dscr[0],
            "Breaches":          len(r.breaches),
            "Survives":          "YES" if r.survives else "NO",
            "Risk Level":        r.risk_level,
        })
    return pd.DataFrame(rows).set_index("Scenario")
