"""Tests for the pydantic contracts."""

import pytest
from pydantic import ValidationError

from treatment_pricing.algorithms import calculate_treatment
from treatment_pricing.models.contracts import (
    AreaCalculationResult,
    CalculationInput,
    LinearCalculationResult,
    MarkupConfig,
    parse_result,
)
from treatment_pricing.models.enums import PricingBasis, TreatmentCategory


class TestTreatmentCategory:
    @pytest.mark.parametrize(
        "category", ["curtains", "sheer_curtains", "blockout_curtains", "roman_blinds"]
    )
    def test_linear_categories(self, category):
        assert TreatmentCategory(category).pricing_basis is PricingBasis.LINEAR

    @pytest.mark.parametrize("category", ["roller_blinds", "venetian_blinds", "shutters", "awnings"])
    def test_area_categories(self, category):
        assert TreatmentCategory(category).pricing_basis is PricingBasis.AREA


class TestCalculationInput:
    def test_rejects_unknown_fields(self, curtain_input):
        data = curtain_input.model_dump()
        data["fabric_width_mm"] = 1400
        with pytest.raises(ValidationError):
            CalculationInput.model_validate(data)

    def test_rejects_zero_measurement(self):
        with pytest.raises(ValidationError):
            CalculationInput(
                treatment_category="roller_blinds",
                measurements_mm={"width_mm": 0, "drop_mm": 1500},
                cost_per_unit=80,
            )

    def test_rejects_negative_cost(self):
        with pytest.raises(ValidationError):
            CalculationInput(
                treatment_category="roller_blinds",
                measurements_mm={"width_mm": 1200, "drop_mm": 1500},
                cost_per_unit=-1,
            )

    def test_is_frozen(self, curtain_input):
        with pytest.raises(ValidationError):
            curtain_input.cost_per_unit = 20


class TestMarkupConfig:
    def test_negative_percentage_rejected(self):
        with pytest.raises(ValidationError):
            MarkupConfig(category_markups={"curtains": -5})

    def test_infinite_percentage_rejected(self):
        with pytest.raises(ValidationError):
            MarkupConfig(default_markup_percent=float("inf"))


class TestResultContract:
    def test_stored_result_parses_back_to_its_kind(self, curtain_input, blind_input, markup_config):
        """Results round-trip through JSON with the discriminator intact."""
        linear = calculate_treatment(curtain_input, markup_config)
        area = calculate_treatment(blind_input, markup_config)
        assert parse_result(linear.model_dump(mode="json")) == linear
        parsed = parse_result(area.model_dump(mode="json"))
        assert isinstance(parsed, AreaCalculationResult)
        assert parsed == area

    def test_unknown_kind_rejected(self, blind_input):
        data = calculate_treatment(blind_input).model_dump(mode="json")
        data["kind"] = "volume"
        with pytest.raises(ValidationError):
            parse_result(data)

    def test_price_below_cost_rejected(self, curtain_input, markup_config):
        data = calculate_treatment(curtain_input, markup_config).model_dump()
        data["total_price"] = 100.0
        with pytest.raises(ValidationError, match="below total_cost"):
            LinearCalculationResult.model_validate(data)

    def test_price_is_required(self, curtain_input, markup_config):
        data = calculate_treatment(curtain_input, markup_config).model_dump()
        del data["total_price"]
        with pytest.raises(ValidationError):
            LinearCalculationResult.model_validate(data)

    def test_quantity_property(self, curtain_input, blind_input):
        assert calculate_treatment(curtain_input).quantity == 7.8
        assert calculate_treatment(blind_input).quantity == 1.8
