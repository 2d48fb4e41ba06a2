"""
payload.py
----------
Parse boundary between the deal room's JSON model payloads (camelCase)
and the engine's dataclasses.

Validation lives in the pydantic models of schema.py; anything they reject
is re-raised here as an AssumptionsError listing every problem, so a bad
payload never leaks into the projection.  Per-year arrays are optional;
the normalizer decides how short ones are treated.

The output side flattens a ProjectionResult into camelCase records for the
persistence / publishing layer.
"""

from dataclasses import asdict

from pydantic import ValidationError

from credit_model.model.assumptions import Assumptions, AssumptionsError
from credit_model.model.records import ProjectionResult, Summary, YearProjection
from credit_model.model.schema import AssumptionsBlock, ModelEnvelope, validation_messages


# YearProjection field -> payload key
YEAR_KEYS = {
    "year":                        "year",
    "label":                       "label",
    "revenue":                     "revenue",
    "revenue_growth_pct":          "revenueGrowthPercent",
    "gross_ebitda":                "grossEbitda",
    "ebitda_margin_pct":           "ebitdaMarginPercent",
    "adjustments":                 "adjustments",
    "adjusted_ebitda":             "adjustedEbitda",
    "depreciation_amortization":   "depreciationAmortization",
    "ebit":                        "ebit",
    "interest_expense":            "interestExpense",
    "taxes":                       "taxes",
    "net_income":                  "netIncome",
    "depreciation_addback":        "depreciationAddback",
    "capex":                       "capex",
    "mandatory_amortization":      "mandatoryAmortization",
    "free_cash_flow":              "freeCashFlow",
    "beginning_debt":              "beginningDebt",
    "cash_sweep":                  "cashSweep",
    "ending_debt":                 "endingDebt",
    "leverage_ratio":              "leverageRatio",
    "debt_service_coverage_ratio": "debtServiceCoverageRatio",
}

SUMMARY_KEYS = {
    "total_paydown":  "totalPaydown",
    "paydown_pct":    "paydownPercent",
    "entry_leverage": "entryLeverage",
    "exit_leverage":  "exitLeverage",
    "average_dscr":   "averageDSCR",
}


def assumptions_from_dict(payload: dict) -> Assumptions:
    """Build an Assumptions snapshot from a camelCase assumptions block."""
    try:
        block = AssumptionsBlock.model_validate(payload)
    except ValidationError as exc:
        raise AssumptionsError(validation_messages(exc)) from exc
    return block.to_assumptions()


def assumptions_from_model_payload(payload: dict) -> Assumptions:
    """Unwrap a saved-model envelope ({dealId, name, assumptions, isPublished})."""
    try:
        envelope = ModelEnvelope.model_validate(payload)
    except ValidationError as exc:
        raise AssumptionsError(validation_messages(exc)) from exc
    return envelope.assumptions.to_assumptions()


def assumptions_to_dict(assumptions: Assumptions) -> dict:
    block = AssumptionsBlock.model_validate(asdict(assumptions))
    return block.model_dump(by_alias=True)


def year_to_dict(row: YearProjection) -> dict:
    return {key: getattr(row, field) for field, key in YEAR_KEYS.items()}


def summary_to_dict(summary: Summary) -> dict:
    return {key: getattr(summary, field) for field, key in SUMMARY_KEYS.items()}


def result_to_dict(result: ProjectionResult) -> dict:
    """JSON-ready view of a run for the persistence / publishing layer."""
    return {
        "projections": [year_to_dict(p) for p in result.projections],
        "summary":     summary_to_dict(result.summary),
    }
