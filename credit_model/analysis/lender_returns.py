"""
lender_returns.py
-----------------
Buy-and-hold returns for a lender taking an allocation in the senior loan.

Mechanics:
  - Initial investment = principal less OID and upfront fee
  - Interest at (base rate + spread) on the beginning principal each year
  - Mandatory amortization as % of ORIGINAL principal, capped at balance
  - Remaining principal prepaid in the exit year at the call price for
    that year (101 = 1% premium; 100 when no price is given)

IRR is solved with Brent's method over the annual cash flows.
"""

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np
import pandas as pd
from scipy.optimize import brentq

from credit_model.utils.numeric import pct_of, round_money, round_ratio


PAR = 100.0


@dataclass(frozen=True)
class LenderReturnsInput:
    principal: float = 50_000_000.0
    oid_pct: float = 2.0                 # original issue discount, % of principal
    upfront_fee_pct: float = 1.0
    spread_bps: float = 450.0
    base_rate_pct: float = 5.3
    hold_years: int = 5
    call_prices: Tuple[float, ...] = field(default_factory=lambda: (102.0, 101.0, 100.0, 100.0, 100.0))
    mandatory_amort_pct: float = 1.0

    @property
    def all_in_rate_pct(self) -> float:
        return self.base_rate_pct + self.spread_bps / 100

    @property
    def initial_investment(self) -> float:
        return (self.principal
                - pct_of(self.principal, self.oid_pct)
                - pct_of(self.principal, self.upfront_fee_pct))


@dataclass(frozen=True)
class LenderReturnsResult:
    irr_pct: float
    moic: float
    total_cash_received: float
    total_interest: float
    total_principal: float
    total_fees: float
    average_yield_pct: float
    initial_investment: float
    cash_flows_df: pd.DataFrame


def _irr(initial_investment: float, cash_flows: list[float]) -> float:
    """IRR of [-investment, cf_1, ..., cf_n]; NaN when no root is bracketed."""
    flows = [-initial_investment] + list(cash_flows)

    def npv(r):
        return sum(cf / (1 + r) ** t for t, cf in enumerate(flows))
    try:
        return brentq(npv, -0.999, 100.0, xtol=1e-10, maxiter=500)
    except ValueError:
        return np.nan


def calculate_lender_returns(inputs: LenderReturnsInput) -> LenderReturnsResult:
    if inputs.hold_years < 1:
        raise ValueError("hold_years must be at least 1")
    initial_investment = inputs.initial_investment
    if initial_investment <= 0:
        raise ValueError("OID and fees leave no capital invested")

    rate       = inputs.all_in_rate_pct
    scheduled  = pct_of(inputs.principal, inputs.mandatory_amort_pct)
    principal  = inputs.principal
    cumulative = 0.0
    rows       = []

    for yr in range(1, inputs.hold_years + 1):
        beginning    = principal
        interest     = pct_of(beginning, rate)
        amortization = min(scheduled, beginning)
        is_exit      = yr == inputs.hold_years
        prepayment   = beginning - amortization if is_exit else 0.0

        price   = inputs.call_prices[yr - 1] if yr <= len(inputs.call_prices) else PAR
        premium = prepayment * (price - PAR) / 100 if is_exit else 0.0

        ending     = beginning - amortization - prepayment
        total_cash = interest + amortization + prepayment + premium
        cumulative += total_cash

        rows.append({
            "Year":                yr,
            "Beginning Principal": beginning,
            "Interest":            interest,
            "Amortization":        amortization,
            "Prepayment":          prepayment,
            "Prepayment Premium":  premium,
            "Total Cash":          total_cash,
            "Ending Principal":    ending,
            "Cumulative Cash":     cumulative,
        })
        principal = ending

    cf_df = pd.DataFrame(rows).set_index("Year")

    total_cash  = float(cf_df["Total Cash"].sum())
    fees        = (pct_of(inputs.principal, inputs.oid_pct)
                   + pct_of(inputs.principal, inputs.upfront_fee_pct)
                   + float(cf_df["Prepayment Premium"].sum()))
    irr         = _irr(initial_investment, cf_df["Total Cash"].tolist())
    avg_yield   = (total_cash - initial_investment) / initial_investment / inputs.hold_years * 100

    return LenderReturnsResult(
        irr_pct=round_ratio(irr * 100) if not np.isnan(irr) else np.nan,
        moic=round_ratio(total_cash / initial_investment),
        total_cash_received=round_money(total_cash),
        total_interest=round_money(float(cf_df["Interest"].sum())),
        total_principal=round_money(float((cf_df["Amortization"] + cf_df["Prepayment"]).sum())),
        total_fees=round_money(fees),
        average_yield_pct=round_ratio(avg_yield),
        initial_investment=round_money(initial_investment),
        cash_flows_df=cf_df.round(0),
    )
