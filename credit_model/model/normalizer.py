"""
normalizer.py
-------------
Validates an Assumptions snapshot and pads the per-year drivers out to the
five-year horizon.

Two modes:
  - lenient (default): any missing per-year entry takes its fallback
    (growth 0%, margin 25%, capex 3%, adjustment 0).  Entries past Year 5
    are ignored.  Every substitution is logged at WARNING so a short array
    never goes unnoticed.
  - strict: every per-year sequence must hold exactly five numbers.

Scalar problems (non-numeric, NaN/inf, negative principal, sweep outside
0-100, ...) are rejected in both modes.  Zero or negative EBITDA is a
legitimate distressed case, not an error.
"""

import logging
from dataclasses import asdict, replace

from pydantic import ValidationError

from credit_model.model.assumptions import (
    Assumptions,
    AssumptionsError,
    DebtTranche,
    FALLBACK_ADJUSTMENT,
    FALLBACK_CAPEX_PCT,
    FALLBACK_GROWTH_PCT,
    FALLBACK_MARGIN_PCT,
    PROJECTION_YEARS,
)
from credit_model.model.schema import AssumptionsBlock, validation_messages
from credit_model.utils.numeric import is_finite_number

logger = logging.getLogger(__name__)


# field name -> fallback for a missing year
PER_YEAR_FALLBACKS = {
    "revenue_growth_pct": FALLBACK_GROWTH_PCT,
    "ebitda_margin_pct":  FALLBACK_MARGIN_PCT,
    "capex_pct":          FALLBACK_CAPEX_PCT,
    "ebitda_adjustments": FALLBACK_ADJUSTMENT,
}

# Assumptions fields checked against the payload schema
SCALAR_FIELDS = ("ltm_revenue", "ltm_ebitda", "tax_rate_pct", "depreciation_pct",
                 "cash_sweep_pct")


def validate_scalars(assumptions: Assumptions) -> list[str]:
    """Return a list of scalar validation problems (empty when valid)."""
    data = {name: getattr(assumptions, name) for name in SCALAR_FIELDS}
    debt = assumptions.debt
    data["debt"] = asdict(debt) if isinstance(debt, DebtTranche) else debt
    try:
        AssumptionsBlock.model_validate(data)
    except ValidationError as exc:
        return validation_messages(exc, by_alias=False)
    return []


def _fill_series(name: str, values: tuple, fallback: float,
                 strict: bool, errors: list) -> tuple:
    if strict and len(values) != PROJECTION_YEARS:
        errors.append(
            f"{name} must have exactly {PROJECTION_YEARS} entries (got {len(values)})"
        )
        return ()

    filled = []
    defaulted = []
    for i in range(PROJECTION_YEARS):
        value = values[i] if i < len(values) else None
        if value is None:
            if strict:
                errors.append(f"{name}[{i}] is missing")
                continue
            defaulted.append(i + 1)
            filled.append(float(fallback))
        elif not is_finite_number(value):
            errors.append(f"{name}[{i}] must be a finite number (got {value!r})")
        else:
            filled.append(float(value))

    if defaulted:
        logger.warning(
            "%s: no value for year(s) %s, using fallback %g",
            name, ", ".join(str(y) for y in defaulted), fallback,
        )
    if len(values) > PROJECTION_YEARS:
        logger.warning(
            "%s: %d entries supplied, only the first %d are used",
            name, len(values), PROJECTION_YEARS,
        )
    return tuple(filled)


def normalize_assumptions(assumptions: Assumptions, strict: bool = False) -> Assumptions:
    """
    Return a copy of ``assumptions`` with every per-year sequence holding
    exactly five floats.

    Raises AssumptionsError listing every problem found.
    """
    errors = validate_scalars(assumptions)

    series = {}
    for name, fallback in PER_YEAR_FALLBACKS.items():
        series[name] = _fill_series(name, getattr(assumptions, name), fallback, strict, errors)

    if errors:
        raise AssumptionsError(errors)

    return replace(assumptions, **series)
