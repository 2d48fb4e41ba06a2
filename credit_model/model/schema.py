"""
schema.py
---------
pydantic models for the deal room's camelCase JSON.

A saved model arrives as

    {"dealId": ..., "name": ..., "assumptions": {...}, "isPublished": ...}

The assumptions block and its nested debt block validate here: required
scalars present, every number finite (bools, strings and ints too large
for a float are rejected), principal / coupon / amortization >= 0 and the
cash sweep within 0-100.  Per-year arrays are optional and may hold nulls;
the normalizer decides what a short or gappy array means.

Fields are declared in snake_case with camelCase aliases, so the same
models also check an Assumptions dataclass built in Python (see
normalizer.validate_scalars).
"""

from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from credit_model.model.assumptions import Assumptions, DebtTranche
from credit_model.utils.numeric import is_finite_number


def _finite(value):
    if not is_finite_number(value):
        raise ValueError(f"must be a finite number (got {value!r})")
    return float(value)


FiniteFloat = Annotated[float, BeforeValidator(_finite)]
PerYear = Optional[List[Optional[FiniteFloat]]]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class DebtBlock(_CamelModel):
    principal: FiniteFloat = Field(ge=0.0, allow_inf_nan=False)
    interest_rate_pct: FiniteFloat = Field(alias="interestRatePercent", ge=0.0,
                                           allow_inf_nan=False)
    mandatory_amort_pct: FiniteFloat = Field(alias="mandatoryAmortPercent", ge=0.0,
                                             allow_inf_nan=False)

    def to_tranche(self) -> DebtTranche:
        return DebtTranche(**self.model_dump())


class AssumptionsBlock(_CamelModel):
    ltm_revenue: FiniteFloat = Field(alias="ltmRevenue", ge=0.0, allow_inf_nan=False)
    ltm_ebitda: FiniteFloat = Field(alias="ltmEbitda", allow_inf_nan=False)
    tax_rate_pct: FiniteFloat = Field(alias="taxRatePercent", allow_inf_nan=False)
    depreciation_pct: FiniteFloat = Field(alias="depreciationPercent", allow_inf_nan=False)
    cash_sweep_pct: FiniteFloat = Field(alias="cashSweepPercent", ge=0.0, le=100.0,
                                        allow_inf_nan=False)
    debt: DebtBlock

    revenue_growth_pct: PerYear = Field(default=None, alias="revenueGrowthPercent")
    ebitda_margin_pct: PerYear = Field(default=None, alias="ebitdaMarginPercent")
    capex_pct: PerYear = Field(default=None, alias="capexPercent")
    ebitda_adjustments: PerYear = Field(default=None, alias="ebitdaAdjustments")

    def to_assumptions(self) -> Assumptions:
        return Assumptions(
            ltm_revenue=self.ltm_revenue,
            ltm_ebitda=self.ltm_ebitda,
            tax_rate_pct=self.tax_rate_pct,
            depreciation_pct=self.depreciation_pct,
            debt=self.debt.to_tranche(),
            cash_sweep_pct=self.cash_sweep_pct,
            revenue_growth_pct=self.revenue_growth_pct,
            ebitda_margin_pct=self.ebitda_margin_pct,
            capex_pct=self.capex_pct,
            ebitda_adjustments=self.ebitda_adjustments,
        )


class ModelEnvelope(_CamelModel):
    deal_id: str = Field(alias="dealId")
    name: str
    assumptions: AssumptionsBlock
    is_published: bool = Field(default=False, alias="isPublished")


def _labels(by_alias: bool) -> dict:
    labels = {}
    for model in (DebtBlock, AssumptionsBlock, ModelEnvelope):
        for name, info in model.model_fields.items():
            alias = info.alias or name
            labels[name] = labels[alias] = alias if by_alias else name
    return labels


_ALIAS_LABELS = _labels(by_alias=True)
_FIELD_LABELS = _labels(by_alias=False)


def _loc_label(loc: tuple, labels: dict) -> str:
    label = ""
    for part in loc:
        if isinstance(part, int):
            label += f"[{part}]"
        else:
            part = labels.get(part, part)
            label = f"{label}.{part}" if label else part
    return label or "assumptions"


def validation_messages(exc: ValidationError, by_alias: bool = True) -> list[str]:
    """Flatten a ValidationError into one readable line per problem.

    Labels are the camelCase payload keys (``debt.interestRatePercent``),
    or the dataclass field names when ``by_alias`` is False.
    """
    labels = _ALIAS_LABELS if by_alias else _FIELD_LABELS
    messages = []
    for err in exc.errors():
        label = _loc_label(err["loc"], labels)
        if err["type"] == "missing" or err.get("input", "") is None:
            messages.append(f"{label} is required")
        else:
            messages.append(f"{label}: {err['msg']}")
    return messages
