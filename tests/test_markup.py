"""Tests for markup resolution precedence and application."""

import pytest

from treatment_pricing.errors import InvalidArgument
from treatment_pricing.models.contracts import MarkupConfig, MarkupKey, MarkupResult
from treatment_pricing.models.enums import MarkupSource
from treatment_pricing.pricing.markup import apply_markup, resolve_markup


class TestResolveMarkup:
    def test_material_override_wins(self, markup_config):
        key = MarkupKey(category="curtains", material_id="fab-velvet", supplier_id="sup-acme")
        result = resolve_markup(key, markup_config)
        assert result.resolved_markup_percent == 60
        assert result.source_level == MarkupSource.MATERIAL
        assert result.matched_key == "fab-velvet"

    def test_supplier_beats_category(self, markup_config):
        key = MarkupKey(category="curtains", material_id="unknown", supplier_id="sup-acme")
        result = resolve_markup(key, markup_config)
        assert result.resolved_markup_percent == 55
        assert result.source_level == MarkupSource.SUPPLIER

    def test_category_beats_default(self, markup_config):
        result = resolve_markup(MarkupKey(category="curtains"), markup_config)
        assert result.resolved_markup_percent == 50
        assert result.source_level == MarkupSource.CATEGORY

    def test_default_when_no_override(self, markup_config):
        result = resolve_markup(MarkupKey(category="awnings"), markup_config)
        assert result.resolved_markup_percent == 40
        assert result.source_level == MarkupSource.DEFAULT
        assert result.is_fallback is False

    def test_missing_config_falls_back_to_zero(self):
        result = resolve_markup(MarkupKey(category="curtains"), None)
        assert result.resolved_markup_percent == 0.0
        assert result.source_level == MarkupSource.FALLBACK
        assert result.is_fallback is True

    def test_empty_config_falls_back_to_zero(self):
        result = resolve_markup(MarkupKey(category="curtains"), MarkupConfig())
        assert result.source_level == MarkupSource.FALLBACK

    def test_zero_percent_override_is_honoured(self):
        config = MarkupConfig(default_markup_percent=40, category_markups={"curtains": 0})
        result = resolve_markup(MarkupKey(category="curtains"), config)
        assert result.resolved_markup_percent == 0
        assert result.source_level == MarkupSource.CATEGORY
        assert result.is_fallback is False


class TestApplyMarkup:
    def _markup(self, pct):
        return MarkupResult(resolved_markup_percent=pct, source_level=MarkupSource.DEFAULT)

    def test_basic(self):
        assert apply_markup(100, self._markup(40)) == 140.0

    def test_rounds_to_cents(self):
        # 117 * 1.6 = 187.20000000000002
        assert apply_markup(117, self._markup(60)) == 187.2

    def test_zero_markup_keeps_cost(self):
        assert apply_markup(144.0, self._markup(0)) == 144.0

    def test_negative_cost_raises(self):
        with pytest.raises(InvalidArgument, match="cannot be negative"):
            apply_markup(-1, self._markup(40))
