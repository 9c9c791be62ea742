"""Pydantic contracts for calculation input, markup configuration and results.

Every length field carries its unit in the name. Results are frozen: once the
facade builds one it is persisted verbatim and displayed without re-derivation.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from .enums import (
    FabricOrientation,
    MarkupSource,
    OptionPricingMethod,
    TreatmentCategory,
)

Percent = Annotated[float, Field(ge=0, allow_inf_nan=False)]


class Measurements(BaseModel):
    """Window measurements as captured on site, in whole millimetres."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    width_mm: int = Field(gt=0, description="Rail/track or recess width")
    drop_mm: int = Field(gt=0, description="Drop (height) of the treatment")
    depth_mm: Optional[int] = Field(default=None, ge=0, description="Recess depth")


class SelectedOption(BaseModel):
    """An add-on chosen for the treatment (lining, motorisation, tie-backs...)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    option_key: str = Field(min_length=1)
    name: str = ""
    cost_price: float = Field(ge=0, allow_inf_nan=False)
    pricing_method: OptionPricingMethod = OptionPricingMethod.FIXED
    quantity: int = Field(default=1, ge=1)


class CalculationInput(BaseModel):
    """Everything the engine needs to price a single treatment."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    treatment_category: TreatmentCategory
    measurements_mm: Measurements
    fabric_width_cm: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    fullness_ratio: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    seam_hem_allowance_cm: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    header_hem_cm: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    bottom_hem_cm: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    pooling_cm: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    overlap_cm: float = Field(
        default=0.0, ge=0, allow_inf_nan=False, description="Added to the rail width before fullness"
    )
    side_hem_cm: float = Field(
        default=0.0, ge=0, allow_inf_nan=False, description="Per side, per panel"
    )
    panel_count: int = Field(default=1, ge=1)
    return_left_cm: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    return_right_cm: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    join_seam_cm: float = Field(
        default=0.0, ge=0, allow_inf_nan=False, description="Extra fabric per seam joining two widths"
    )
    pattern_repeat_cm: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    fabric_orientation: FabricOrientation = FabricOrientation.VERTICAL
    waste_percent: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    cost_per_unit: float = Field(
        ge=0,
        allow_inf_nan=False,
        description="Cost per metre (linear) or per square metre (area)",
    )
    manufacturing_cost_per_unit: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    options: tuple[SelectedOption, ...] = ()
    material_id: Optional[str] = None
    supplier_id: Optional[str] = None


class MarkupKey(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    category: str = Field(min_length=1)
    material_id: Optional[str] = None
    supplier_id: Optional[str] = None


class MarkupConfig(BaseModel):
    """Markup percentages at each level of specificity."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    default_markup_percent: Optional[Percent] = None
    category_markups: dict[str, Percent] = Field(default_factory=dict)
    material_markups: dict[str, Percent] = Field(default_factory=dict)
    supplier_markups: dict[str, Percent] = Field(default_factory=dict)


class MarkupResult(BaseModel):
    """Which markup rule fired, kept on the result for auditability."""

    model_config = ConfigDict(frozen=True)

    resolved_markup_percent: float
    source_level: MarkupSource
    matched_key: Optional[str] = None
    is_fallback: bool = False


class FormulaBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    steps: tuple[str, ...]
    summary: str


class _ResultBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    treatment_category: TreatmentCategory

    unit_cost: float
    unit_price: float

    material_cost: float
    manufacturing_cost: float
    options_cost: float
    total_cost: float

    material_price: float
    manufacturing_price: float
    options_price: float
    total_price: float

    markup: MarkupResult
    markup_amount: float

    formatted: str
    formula: FormulaBreakdown
    algorithm_version: str

    @model_validator(mode="after")
    def cost_and_price_together(self) -> _ResultBase:
        if self.total_cost < 0 or self.total_price < 0:
            raise ValueError("total_cost and total_price must both be non-negative")
        if self.total_price < self.total_cost:
            raise ValueError(
                f"total_price ({self.total_price}) is below total_cost ({self.total_cost})"
            )
        return self


class LinearCalculationResult(_ResultBase):
    kind: Literal["linear"] = "linear"

    window_width_cm: float
    window_drop_cm: float
    fabric_width_cm: float
    fullness_ratio: float
    fabric_orientation: FabricOrientation
    finished_width_cm: float = 0.0
    total_side_hems_cm: float = 0.0
    total_returns_cm: float = 0.0
    required_width_cm: float
    drops_needed: int
    cut_drop_cm: float
    seams_count: int = 0
    seam_allowance_cm: float = 0.0
    fabric_meters_raw: float
    total_fabric_meters: float

    @property
    def quantity(self) -> float:
        return self.total_fabric_meters


class AreaCalculationResult(_ResultBase):
    kind: Literal["area"] = "area"

    window_width_cm: float
    window_height_cm: float
    area_sqm_raw: float
    area_sqm: float

    @property
    def quantity(self) -> float:
        return self.area_sqm


CalculationResultContract = Annotated[
    Union[LinearCalculationResult, AreaCalculationResult],
    Field(discriminator="kind"),
]

_RESULT_ADAPTER: TypeAdapter[Any] = TypeAdapter(CalculationResultContract)


def parse_result(data: Any) -> Union[LinearCalculationResult, AreaCalculationResult]:
    """Rebuild a stored result from its JSON/dict form."""
    return _RESULT_ADAPTER.validate_python(data)
