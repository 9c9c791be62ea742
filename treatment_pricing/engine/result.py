"""Immutable quantity results produced by the calculation engine."""

from __future__ import annotations

from dataclasses import dataclass

from treatment_pricing.models.enums import FabricOrientation


@dataclass(frozen=True)
class LinearQuantity:
    """Fabric requirement and costs for a width-driven treatment."""

    window_width_cm: float
    window_drop_cm: float
    fabric_width_cm: float
    fullness_ratio: float
    fabric_orientation: FabricOrientation
    finished_width_cm: float
    total_side_hems_cm: float
    total_returns_cm: float
    required_width_cm: float
    drops_needed: int
    cut_drop_cm: float
    seams_count: int
    seam_allowance_cm: float
    fabric_meters_raw: float
    total_fabric_meters: float
    material_cost: float
    manufacturing_cost: float
    options_cost: float
    steps: tuple[str, ...]
    summary: str

    @property
    def quantity(self) -> float:
        return self.total_fabric_meters


@dataclass(frozen=True)
class AreaQuantity:
    """Area requirement and costs for a treatment priced per square metre."""

    window_width_cm: float
    window_height_cm: float
    area_sqm_raw: float
    area_sqm: float
    material_cost: float
    manufacturing_cost: float
    options_cost: float
    steps: tuple[str, ...]
    summary: str

    @property
    def quantity(self) -> float:
        return self.area_sqm
