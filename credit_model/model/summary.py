"""
summary.py
----------
Reduces the six projection rows into the headline credit metrics shown on
the deal card: total paydown, paydown %, entry / exit leverage and the
average debt service coverage over the projected years.

Works off the already-rounded rows so the summary always ties to the
schedule a lender reads.
"""

from typing import Sequence

import numpy as np

from credit_model.model.assumptions import Assumptions
from credit_model.model.records import Summary, YearProjection
from credit_model.utils.numeric import round_money, round_percent, round_ratio, safe_ratio


def summarize(projections: Sequence[YearProjection], assumptions: Assumptions) -> Summary:
    principal = assumptions.debt.principal
    projected = [p for p in projections if p.year > 0]
    exit_row  = projected[-1]

    total_paydown = round_money(principal - exit_row.ending_debt)
    paydown_pct   = round_percent(safe_ratio(total_paydown, principal) * 100)

    # LTM dscr is 0 by construction and stays out of the average
    average_dscr = float(np.mean([p.debt_service_coverage_ratio for p in projected]))

    return Summary(
        total_paydown=total_paydown,
        paydown_pct=paydown_pct,
        entry_leverage=assumptions.entry_leverage,
        exit_leverage=exit_row.leverage_ratio,
        average_dscr=round_ratio(average_dscr),
    )
