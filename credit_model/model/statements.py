"""
statements.py
-------------
pandas views of a ProjectionResult for the export and charting layers.

Wide frames (income statement, cash flow, debt schedule, credit summary)
have one column per period (LTM, Year 1 .. Year 5) and line items on the
index.  projections_df() is the long form, one row per period.
"""

import pandas as pd

from credit_model.model.records import YEAR_FIELDS, ProjectionResult


INCOME_STATEMENT_ROWS = {
    "Revenue":            "revenue",
    "Revenue Growth %":   "revenue_growth_pct",
    "Gross EBITDA":       "gross_ebitda",
    "EBITDA Margin %":    "ebitda_margin_pct",
    "Adjustments":        "adjustments",
    "Adj EBITDA":         "adjusted_ebitda",
    "D&A":                "depreciation_amortization",
    "EBIT":               "ebit",
    "Interest Expense":   "interest_expense",
    "Taxes":              "taxes",
    "Net Income":         "net_income",
}

CASH_FLOW_ROWS = {
    "Net Income":               "net_income",
    "(+) D&A":                  "depreciation_addback",
    "(-) CapEx":                "capex",
    "(-) Mandatory Amort":      "mandatory_amortization",
    "FCF Before Sweep":         "free_cash_flow",
    "(-) Cash Sweep":           "cash_sweep",
}

DEBT_SCHEDULE_ROWS = {
    "Beginning Debt":           "beginning_debt",
    "(-) Mandatory Amort":      "mandatory_amortization",
    "(-) Cash Sweep":           "cash_sweep",
    "Ending Debt":              "ending_debt",
    "Interest Expense":         "interest_expense",
}

CREDIT_ROWS = {
    "Adj EBITDA":               "adjusted_ebitda",
    "Ending Debt":              "ending_debt",
    "Leverage (x)":             "leverage_ratio",
    "DSCR (x)":                 "debt_service_coverage_ratio",
}

# outflow rows shown as negatives in the cash flow view
_NEGATIVE_ROWS = {"(-) CapEx", "(-) Mandatory Amort", "(-) Cash Sweep"}


def _wide(result: ProjectionResult, rows: dict, negate: set = frozenset()) -> pd.DataFrame:
    data = {}
    for p in result.projections:
        col = {}
        for label, field in rows.items():
            value = getattr(p, field)
            col[label] = -value if label in negate and value else value
        data[p.label] = col
    return pd.DataFrame(data)


def income_statement_df(result: ProjectionResult) -> pd.DataFrame:
    return _wide(result, INCOME_STATEMENT_ROWS)


def cash_flow_df(result: ProjectionResult) -> pd.DataFrame:
    return _wide(result, CASH_FLOW_ROWS, negate=_NEGATIVE_ROWS)


def debt_schedule_df(result: ProjectionResult) -> pd.DataFrame:
    return _wide(result, DEBT_SCHEDULE_ROWS)


def credit_summary_df(result: ProjectionResult) -> pd.DataFrame:
    return _wide(result, CREDIT_ROWS)


def projections_df(result: ProjectionResult) -> pd.DataFrame:
    """Long form: one row per period, one column per YearProjection field."""
    df = pd.DataFrame([p.to_dict() for p in result.projections], columns=list(YEAR_FIELDS))
    return df.set_index("label")
