"""Shared test fixtures for the treatment pricing test suite."""

import pytest

from treatment_pricing.models.contracts import CalculationInput, MarkupConfig


def make_input(**overrides) -> CalculationInput:
    """Curtain input from the reference worked example, with overrides."""
    data = {
        "treatment_category": "curtains",
        "measurements_mm": {"width_mm": 1800, "drop_mm": 2400},
        "fabric_width_cm": 140,
        "fullness_ratio": 2.0,
        "seam_hem_allowance_cm": 20,
        "cost_per_unit": 15,
    }
    data.update(overrides)
    return CalculationInput.model_validate(data)


@pytest.fixture
def curtain_input() -> CalculationInput:
    """1800mm x 2400mm curtain, 2x fullness, 140cm fabric, 20cm allowance, $15/m.

    Reference: 3 drops x 260cm = 7.80m, $117.00 cost.
    """
    return make_input()


@pytest.fixture
def blind_input() -> CalculationInput:
    """1200mm x 1500mm roller blind at $80/sqm -> 1.8 sqm, $144.00 cost."""
    return CalculationInput(
        treatment_category="roller_blinds",
        measurements_mm={"width_mm": 1200, "drop_mm": 1500},
        cost_per_unit=80,
    )


@pytest.fixture
def markup_config() -> MarkupConfig:
    return MarkupConfig(
        default_markup_percent=40,
        category_markups={"curtains": 50, "roller_blinds": 35},
        material_markups={"fab-velvet": 60},
        supplier_markups={"sup-acme": 55},
    )
