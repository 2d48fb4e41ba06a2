"""Leveraged-finance credit projection engine for the deal room."""

from credit_model.model.assumptions import (
    Assumptions,
    AssumptionsError,
    DebtTranche,
    base_case,
)
from credit_model.model.projection import run_projection
from credit_model.model.records import ProjectionResult, Summary, YearProjection

__version__ = "0.1.0"

__all__ = [
    "Assumptions",
    "AssumptionsError",
    "DebtTranche",
    "ProjectionResult",
    "Summary",
    "YearProjection",
    "base_case",
    "run_projection",
]
