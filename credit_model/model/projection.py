"""
projection.py
-------------
Five-year leveraged-finance projection for a single senior tranche.

For each projected year:
  Revenue → EBITDA (+ adjustments) → EBIT → pre-tax income → Net Income
  Net Income + D&A − CapEx − mandatory amortization = FCF before sweep
  Positive FCF × sweep % is applied as a prepayment

Key mechanics:
  - Revenue compounds off the prior projected year, not the LTM base
  - Interest is simple interest on the beginning balance (no averaging)
  - Mandatory amortization is a % of ORIGINAL principal, capped at the
    outstanding balance (never re-based on the declining balance)
  - No tax credit on pre-tax losses; a cash shortfall never sweeps
  - Ratio denominators at or below zero give 0, never inf / NaN, and
    negative EBITDA gives a DSCR of 0
  - Reported money is rounded to whole units and ratios to 2 dp; the
    carried balance and revenue stay unrounded

run_projection() is a pure function: no I/O, no caching, no shared state.
"""

import logging

from credit_model.model.assumptions import Assumptions, PROJECTION_YEARS
from credit_model.model.normalizer import normalize_assumptions
from credit_model.model.records import ProjectionResult, YearProjection
from credit_model.model.summary import summarize
from credit_model.utils.numeric import pct_of, round_money, round_ratio, safe_ratio

logger = logging.getLogger(__name__)


def build_ltm_row(assumptions: Assumptions) -> YearProjection:
    """Year-0 snapshot: LTM P&L, opening debt, every flow field zeroed."""
    debt         = assumptions.debt
    revenue      = assumptions.ltm_revenue
    ebitda       = assumptions.ltm_ebitda
    depreciation = assumptions.ltm_depreciation

    return YearProjection(
        year=0,
        label="LTM",
        revenue=round_money(revenue),
        revenue_growth_pct=0.0,
        gross_ebitda=round_money(ebitda),
        ebitda_margin_pct=round_ratio(safe_ratio(ebitda, revenue) * 100),
        adjustments=0.0,
        adjusted_ebitda=round_money(ebitda),
        depreciation_amortization=round_money(depreciation),
        ebit=round_money(ebitda - depreciation),
        interest_expense=round_money(debt.ltm_interest),
        taxes=0.0,
        net_income=0.0,
        depreciation_addback=0.0,
        capex=0.0,
        mandatory_amortization=0.0,
        free_cash_flow=0.0,
        beginning_debt=round_money(debt.principal),
        cash_sweep=0.0,
        ending_debt=round_money(debt.principal),
        leverage_ratio=assumptions.entry_leverage,
        debt_service_coverage_ratio=0.0,
    )


def _project_year(
    assumptions: Assumptions,
    year: int,
    beginning_debt: float,
    previous_revenue: float,
) -> tuple[YearProjection, float, float]:
    """
    Project one year.

    Returns (row, ending_debt, revenue) with the last two unrounded so they
    can be carried into the next year.
    """
    i      = year - 1
    debt   = assumptions.debt
    growth = assumptions.revenue_growth_pct[i]
    margin = assumptions.ebitda_margin_pct[i]
    capex  = assumptions.capex_pct[i]
    adj    = assumptions.ebitda_adjustments[i]

    # --- Income statement ---
    revenue         = previous_revenue * (1 + growth / 100)
    gross_ebitda    = pct_of(revenue, margin)
    adjusted_ebitda = gross_ebitda + adj
    depreciation    = pct_of(revenue, assumptions.depreciation_pct)
    ebit            = adjusted_ebitda - depreciation
    interest        = pct_of(beginning_debt, debt.interest_rate_pct)
    pre_tax_income  = ebit - interest
    taxes           = max(0.0, pct_of(pre_tax_income, assumptions.tax_rate_pct))
    net_income      = pre_tax_income - taxes

    # --- Cash flow waterfall ---
    capex_amount     = pct_of(revenue, capex)
    mandatory_amort  = min(debt.annual_amort, beginning_debt)
    fcf_before_sweep = net_income + depreciation - capex_amount - mandatory_amort

    # --- Debt schedule ---
    available_for_sweep = max(0.0, fcf_before_sweep)
    cash_sweep          = pct_of(available_for_sweep, assumptions.cash_sweep_pct)
    ending_debt         = max(0.0, beginning_debt - mandatory_amort - cash_sweep)

    # --- Credit ratios ---
    leverage = safe_ratio(ending_debt, adjusted_ebitda)
    # negative EBITDA covers nothing: report 0 rather than a negative multiple
    dscr     = safe_ratio(max(0.0, adjusted_ebitda), interest + mandatory_amort)

    row = YearProjection(
        year=year,
        label=f"Year {year}",
        revenue=round_money(revenue),
        revenue_growth_pct=growth,
        gross_ebitda=round_money(gross_ebitda),
        ebitda_margin_pct=margin,
        adjustments=round_money(adj),
        adjusted_ebitda=round_money(adjusted_ebitda),
        depreciation_amortization=round_money(depreciation),
        ebit=round_money(ebit),
        interest_expense=round_money(interest),
        taxes=round_money(taxes),
        net_income=round_money(net_income),
        depreciation_addback=round_money(depreciation),
        capex=round_money(capex_amount),
        mandatory_amortization=round_money(mandatory_amort),
        free_cash_flow=round_money(fcf_before_sweep),
        beginning_debt=round_money(beginning_debt),
        cash_sweep=round_money(cash_sweep),
        ending_debt=round_money(ending_debt),
        leverage_ratio=round_ratio(leverage),
        debt_service_coverage_ratio=round_ratio(dscr),
    )
    return row, ending_debt, revenue


def project_years(assumptions: Assumptions) -> tuple[YearProjection, ...]:
    """
    Fold over Years 1..5 of an already-normalized snapshot.

    Returns the LTM row followed by the five projected rows.
    """
    rows = [build_ltm_row(assumptions)]
    current_debt     = assumptions.debt.principal
    previous_revenue = assumptions.ltm_revenue

    for year in range(1, PROJECTION_YEARS + 1):
        row, current_debt, previous_revenue = _project_year(
            assumptions, year, current_debt, previous_revenue
        )
        rows.append(row)

    return tuple(rows)


def run_projection(assumptions: Assumptions, strict: bool = False) -> ProjectionResult:
    """
    Run the credit model for one assumptions snapshot.

    Parameters
    ----------
    assumptions : Assumptions (per-year sequences may be short)
    strict      : reject per-year sequences that are not exactly five long
                  instead of filling them with fallbacks

    Returns
    -------
    ProjectionResult with six rows (LTM + Years 1..5) and the Summary.

    Raises AssumptionsError for structurally invalid input only; degenerate
    numbers (zero / negative EBITDA, zero principal) run through cleanly.
    """
    normalized  = normalize_assumptions(assumptions, strict=strict)
    projections = project_years(normalized)
    summary     = summarize(projections, normalized)

    logger.debug(
        "projection complete: entry %.2fx -> exit %.2fx, paydown %.0f (%.1f%%), avg DSCR %.2fx",
        summary.entry_leverage, summary.exit_leverage,
        summary.total_paydown, summary.paydown_pct, summary.average_dscr,
    )
    return ProjectionResult(projections=projections, summary=summary)
