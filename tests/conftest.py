import pytest

from credit_model.model.assumptions import Assumptions, DebtTranche, base_case


@pytest.fixture
def seed_assumptions() -> Assumptions:
    return base_case()


@pytest.fixture
def seed_payload() -> dict:
    return {
        "ltmRevenue": 500_000_000,
        "ltmEbitda": 125_000_000,
        "revenueGrowthPercent": [5, 6, 7, 5, 4],
        "ebitdaMarginPercent": [25, 26, 27, 27, 28],
        "capexPercent": [3, 3, 3, 2.5, 2.5],
        "ebitdaAdjustments": [5_000_000, 3_000_000, 2_000_000, 1_000_000, 0],
        "taxRatePercent": 25,
        "depreciationPercent": 4,
        "debt": {
            "principal": 400_000_000,
            "interestRatePercent": 9.5,
            "mandatoryAmortPercent": 1,
        },
        "cashSweepPercent": 50,
    }


@pytest.fixture
def bare_assumptions() -> Assumptions:
    """Seed deal with every per-year array left empty."""
    return Assumptions(
        ltm_revenue=500_000_000.0,
        ltm_ebitda=125_000_000.0,
        tax_rate_pct=25.0,
        depreciation_pct=4.0,
        debt=DebtTranche(principal=400_000_000.0, interest_rate_pct=9.5, mandatory_amort_pct=1.0),
        cash_sweep_pct=50.0,
    )


@pytest.fixture
def just_over_max_leverage() -> Assumptions:
    """25m of EBITDA a year against 5.003x of bullet debt that never amortizes."""
    return Assumptions(
        ltm_revenue=100_000_000.0,
        ltm_ebitda=25_000_000.0,
        tax_rate_pct=25.0,
        depreciation_pct=4.0,
        debt=DebtTranche(principal=125_075_000.0, interest_rate_pct=5.0, mandatory_amort_pct=0.0),
        cash_sweep_pct=0.0,
        revenue_growth_pct=(0.0,) * 5,
        ebitda_margin_pct=(25.0,) * 5,
        capex_pct=(3.0,) * 5,
        ebitda_adjustments=(0.0,) * 5,
    )
