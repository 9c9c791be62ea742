"""Tests for mapping results onto the stored treatment row."""

from datetime import datetime, timezone

from tests.conftest import make_input
from treatment_pricing.algorithms import calculate_treatment
from treatment_pricing.models.contracts import parse_result
from treatment_pricing.records import to_treatment_record

STAMP = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


def test_record_columns(markup_config):
    calc_input = make_input(
        manufacturing_cost_per_unit=10,
        options=[{"option_key": "tiebacks", "cost_price": 20, "quantity": 2}],
    )
    result = calculate_treatment(calc_input, markup_config)
    record = to_treatment_record(result, calculated_at=STAMP)

    assert record["treatment_category"] == "curtains"
    assert record["material_cost"] == 157.0
    assert record["labor_cost"] == 78.0
    assert record["total_cost"] == 235.0
    assert record["total_price"] == 352.5
    assert record["markup_percent"] == 50
    assert record["markup_source"] == "category"
    assert record["calculated_at"] == "2026-03-01T09:30:00+00:00"


def test_stored_result_is_verbatim(blind_input, markup_config):
    result = calculate_treatment(blind_input, markup_config)
    record = to_treatment_record(result, calculated_at=STAMP)
    assert record["calculation_result"]["kind"] == "area"
    assert parse_result(record["calculation_result"]) == result


def test_default_timestamp_is_utc(blind_input):
    record = to_treatment_record(calculate_treatment(blind_input))
    assert datetime.fromisoformat(record["calculated_at"]).tzinfo is not None
