"""
assumptions.py
--------------
Input snapshot for one run of the credit projection model.

A run is a single senior tranche projected over a fixed five-year horizon
off the borrower's LTM financials.  Both dataclasses are frozen: the deal
room edits a working copy and re-runs the model on every change, so a
run never sees its inputs move underneath it.

Monetary values are absolute currency units.  Rates and percentages are
whole numbers (9.5 = 9.5%), matching what bookrunners type into the model.
"""

from dataclasses import dataclass, field
from typing import Tuple

from credit_model.utils.numeric import pct_of, round_ratio, safe_ratio


# ---------------------------------------------------------------------------
# Horizon and per-year fallbacks (used when a per-year entry is missing)
# ---------------------------------------------------------------------------
PROJECTION_YEARS = 5

FALLBACK_GROWTH_PCT = 0.0
FALLBACK_MARGIN_PCT = 25.0
FALLBACK_CAPEX_PCT  = 3.0
FALLBACK_ADJUSTMENT = 0.0


class AssumptionsError(ValueError):
    """Raised when an assumptions set is structurally invalid.

    ``errors`` holds every individual problem so a form can flag all of
    them at once instead of one per round-trip.
    """

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


@dataclass(frozen=True)
class DebtTranche:
    """The senior tranche being syndicated."""
    principal: float              # drawn at close
    interest_rate_pct: float      # simple annual coupon on beginning balance
    mandatory_amort_pct: float    # required annual amortization, % of ORIGINAL principal

    @property
    def annual_amort(self) -> float:
        """Scheduled amortization per year, before capping at the balance."""
        return pct_of(self.principal, self.mandatory_amort_pct)

    @property
    def ltm_interest(self) -> float:
        return pct_of(self.principal, self.interest_rate_pct)


@dataclass(frozen=True)
class Assumptions:
    """
    Master container for one what-if run.

    Per-year sequences are indexed 0 = Year 1 ... 4 = Year 5.  They may be
    shorter than the horizon; the normalizer fills the gaps.
    """
    # -----------------------------------------------------------------------
    # LTM baseline
    # -----------------------------------------------------------------------
    ltm_revenue: float
    ltm_ebitda: float

    # -----------------------------------------------------------------------
    # Flat operating / tax assumptions
    # -----------------------------------------------------------------------
    tax_rate_pct: float
    depreciation_pct: float         # D&A as % of revenue

    # -----------------------------------------------------------------------
    # Capital structure
    # -----------------------------------------------------------------------
    debt: DebtTranche
    cash_sweep_pct: float           # % of positive FCF applied to prepayment

    # -----------------------------------------------------------------------
    # Operating projections (per year)
    # -----------------------------------------------------------------------
    revenue_growth_pct: Tuple[float, ...] = field(default_factory=tuple)
    ebitda_margin_pct: Tuple[float, ...]  = field(default_factory=tuple)
    capex_pct: Tuple[float, ...]          = field(default_factory=tuple)
    ebitda_adjustments: Tuple[float, ...] = field(default_factory=tuple)   # absolute add-backs

    def __post_init__(self):
        # accept lists from callers but store tuples so the snapshot stays hashable
        for name in ("revenue_growth_pct", "ebitda_margin_pct",
                     "capex_pct", "ebitda_adjustments"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value) if value is not None else ())

    @property
    def entry_leverage(self) -> float:
        """Principal / LTM EBITDA (0 when LTM EBITDA is not positive)."""
        return round_ratio(safe_ratio(self.debt.principal, self.ltm_ebitda))

    @property
    def ltm_depreciation(self) -> float:
        return pct_of(self.ltm_revenue, self.depreciation_pct)


# ---------------------------------------------------------------------------
# Convenience: the seed deal used by the sandbox and the tests
# ---------------------------------------------------------------------------

def base_case() -> Assumptions:
    return Assumptions(
        ltm_revenue=500_000_000.0,
        ltm_ebitda=125_000_000.0,
        tax_rate_pct=25.0,
        depreciation_pct=4.0,
        debt=DebtTranche(
            principal=400_000_000.0,
            interest_rate_pct=9.5,
            mandatory_amort_pct=1.0,
        ),
        cash_sweep_pct=50.0,
        revenue_growth_pct=(5.0, 6.0, 7.0, 5.0, 4.0),
        ebitda_margin_pct=(25.0, 26.0, 27.0, 27.0, 28.0),
        capex_pct=(3.0, 3.0, 3.0, 2.5, 2.5),
        ebitda_adjustments=(5_000_000.0, 3_000_000.0, 2_000_000.0, 1_000_000.0, 0.0),
    )
