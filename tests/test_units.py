"""Unit tests for length conversion and rounding."""

import math

import pytest

from treatment_pricing.errors import InvalidArgument
from treatment_pricing.units import (
    ceil_ratio,
    cm_to_m,
    cm_to_mm,
    format_currency,
    mm_to_cm,
    round_to,
)


class TestConversions:
    def test_mm_to_cm(self):
        assert mm_to_cm(1000) == 100

    def test_mm_to_cm_does_not_round(self):
        assert mm_to_cm(1805) == pytest.approx(180.5)
        assert mm_to_cm(3) == pytest.approx(0.3)

    def test_round_trip_for_multiples_of_ten(self):
        for value in range(0, 5000, 10):
            assert cm_to_mm(mm_to_cm(value)) == value

    def test_cm_to_m(self):
        assert cm_to_m(250) == 2.5

    @pytest.mark.parametrize("bad", [-1, -0.5, math.inf, math.nan])
    def test_rejects_negative_and_non_finite(self, bad):
        with pytest.raises(InvalidArgument):
            mm_to_cm(bad)

    def test_rejects_non_numbers(self):
        with pytest.raises(InvalidArgument, match="must be a number"):
            mm_to_cm("1800")


class TestRoundTo:
    def test_half_up(self):
        assert round_to(2.675, 2) == 2.68
        assert round_to(0.125, 2) == 0.13
        assert round_to(1.0005, 3) == 1.001

    def test_rounds_down_below_half(self):
        assert round_to(7.8049, 2) == 7.8

    def test_float_noise_is_cleaned(self):
        assert round_to(7.8 * 15, 2) == 117.0

    def test_zero_decimals(self):
        assert round_to(2.5, 0) == 3.0

    def test_non_finite_raises(self):
        with pytest.raises(InvalidArgument, match="finite"):
            round_to(math.inf, 2)

    def test_negative_decimals_raise(self):
        with pytest.raises(InvalidArgument, match="decimals"):
            round_to(1.5, -1)

    def test_huge_finite_values(self):
        """Values wider than the default decimal precision still round."""
        assert round_to(7.8e27, 2) == 7.8e27
        assert round_to(1e300, 3) == 1e300
        assert round_to(123456789012345.67, 1) == 123456789012345.7

    def test_integer_too_large_for_float(self):
        with pytest.raises(InvalidArgument, match="too large"):
            round_to(10**400, 2)


class TestCeilRatio:
    def test_exact_multiple_not_bumped(self):
        assert ceil_ratio(252.0, 25.2) == 10

    def test_partial_rounds_up(self):
        assert ceil_ratio(360, 140) == 3
        assert ceil_ratio(253, 64) == 4

    def test_overflowing_ratio_raises(self):
        with pytest.raises(InvalidArgument):
            ceil_ratio(1e308, 1e-10)


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(117, "£") == "£117.00"
