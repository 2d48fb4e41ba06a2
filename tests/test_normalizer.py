import logging
import math
from dataclasses import replace

import pytest

from credit_model.model.assumptions import (
    AssumptionsError,
    DebtTranche,
    FALLBACK_CAPEX_PCT,
    FALLBACK_MARGIN_PCT,
)
from credit_model.model.normalizer import normalize_assumptions
from credit_model.model.projection import run_projection


class TestLenient:
    def test_empty_arrays_fill_every_year(self, bare_assumptions):
        n = normalize_assumptions(bare_assumptions)
        assert n.revenue_growth_pct == (0.0,) * 5
        assert n.ebitda_margin_pct == (FALLBACK_MARGIN_PCT,) * 5
        assert n.capex_pct == (FALLBACK_CAPEX_PCT,) * 5
        assert n.ebitda_adjustments == (0.0,) * 5

    def test_empty_arrays_still_project_six_rows(self, bare_assumptions):
        result = run_projection(bare_assumptions)
        assert len(result.projections) == 6
        year1 = result.projections[1]
        assert year1.revenue == 500_000_000
        assert year1.gross_ebitda == 125_000_000
        assert year1.capex == 15_000_000
        assert year1.adjustments == 0

    def test_partial_array_keeps_given_years(self, bare_assumptions):
        a = replace(bare_assumptions, revenue_growth_pct=(5.0, 6.0, 7.0))
        assert normalize_assumptions(a).revenue_growth_pct == (5.0, 6.0, 7.0, 0.0, 0.0)

    def test_zero_margin_is_a_value_not_a_gap(self, bare_assumptions):
        a = replace(bare_assumptions, ebitda_margin_pct=(0.0,))
        assert normalize_assumptions(a).ebitda_margin_pct == (0.0, 25.0, 25.0, 25.0, 25.0)

    def test_none_entries_take_fallback(self, bare_assumptions):
        a = replace(bare_assumptions, capex_pct=(2.0, None, 2.0))
        assert normalize_assumptions(a).capex_pct == (2.0, 3.0, 2.0, 3.0, 3.0)

    def test_extra_years_ignored(self, bare_assumptions):
        a = replace(bare_assumptions, revenue_growth_pct=(1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0))
        assert normalize_assumptions(a).revenue_growth_pct == (1.0, 2.0, 3.0, 4.0, 5.0)

    def test_fallback_is_logged(self, bare_assumptions, caplog):
        a = replace(bare_assumptions, revenue_growth_pct=(5.0, 6.0, 7.0))
        with caplog.at_level(logging.WARNING, logger="credit_model.model.normalizer"):
            normalize_assumptions(a)
        messages = " ".join(r.getMessage() for r in caplog.records)
        assert "revenue_growth_pct" in messages
        assert "4, 5" in messages

    def test_complete_input_is_silent(self, seed_assumptions, caplog):
        with caplog.at_level(logging.WARNING):
            normalize_assumptions(seed_assumptions)
        assert not caplog.records

    def test_lists_are_stored_as_tuples(self, bare_assumptions):
        a = replace(bare_assumptions, capex_pct=[2.0, 2.5])
        assert a.capex_pct == (2.0, 2.5)


class TestStrict:
    def test_complete_input_passes(self, seed_assumptions):
        assert normalize_assumptions(seed_assumptions, strict=True) == seed_assumptions

    def test_short_array_rejected(self, seed_assumptions):
        a = replace(seed_assumptions, revenue_growth_pct=(5.0, 6.0, 7.0))
        with pytest.raises(AssumptionsError) as exc:
            run_projection(a, strict=True)
        assert any("revenue_growth_pct" in e for e in exc.value.errors)

    def test_long_array_rejected(self, seed_assumptions):
        a = replace(seed_assumptions, capex_pct=(3.0,) * 6)
        with pytest.raises(AssumptionsError):
            normalize_assumptions(a, strict=True)

    def test_none_entry_rejected(self, seed_assumptions):
        a = replace(seed_assumptions, ebitda_margin_pct=(25.0, None, 27.0, 27.0, 28.0))
        with pytest.raises(AssumptionsError, match=r"ebitda_margin_pct\[1\] is missing"):
            normalize_assumptions(a, strict=True)


class TestScalarValidation:
    @pytest.mark.parametrize("changes, fragment", [
        ({"ltm_revenue": -1.0}, "ltm_revenue"),
        ({"cash_sweep_pct": 150.0}, "cash_sweep_pct"),
        ({"cash_sweep_pct": -5.0}, "cash_sweep_pct"),
        ({"tax_rate_pct": math.nan}, "tax_rate_pct"),
        ({"ltm_ebitda": math.inf}, "ltm_ebitda"),
        ({"ltm_revenue": 10 ** 400}, "ltm_revenue"),
        ({"cash_sweep_pct": True}, "cash_sweep_pct"),
        ({"depreciation_pct": "4"}, "depreciation_pct"),
        ({"debt": DebtTranche(-1.0, 9.5, 1.0)}, "debt.principal"),
        ({"debt": DebtTranche(400.0, -0.5, 1.0)}, "debt.interest_rate_pct"),
        ({"debt": DebtTranche(400.0, 9.5, -1.0)}, "debt.mandatory_amort_pct"),
    ])
    def test_rejected(self, seed_assumptions, changes, fragment):
        with pytest.raises(AssumptionsError) as exc:
            normalize_assumptions(replace(seed_assumptions, **changes))
        assert any(fragment in e for e in exc.value.errors)

    def test_all_problems_reported_together(self, seed_assumptions):
        a = replace(seed_assumptions, ltm_revenue=-1.0, cash_sweep_pct=101.0,
                    revenue_growth_pct=(5.0, "x"))
        with pytest.raises(AssumptionsError) as exc:
            normalize_assumptions(a)
        assert len(exc.value.errors) == 3

    def test_negative_ebitda_is_allowed(self, seed_assumptions):
        a = replace(seed_assumptions, ltm_ebitda=-10_000_000.0)
        assert normalize_assumptions(a).ltm_ebitda == -10_000_000.0

    def test_error_is_a_value_error(self):
        assert issubclass(AssumptionsError, ValueError)
