"""Length conversions and rounding shared by every pricing path.

Measurements arrive from the database in millimetres, fabric widths and
template allowances in centimetres, and fabric is ordered in metres.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import NewType

from treatment_pricing.errors import InvalidArgument

Millimeters = NewType("Millimeters", float)
Centimeters = NewType("Centimeters", float)
Meters = NewType("Meters", float)
SquareMeters = NewType("SquareMeters", float)


def _as_finite(value: float, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgument(f"{name} must be a number, got {value!r}", field=name)
    try:
        number = float(value)
    except OverflowError as e:
        raise InvalidArgument(f"{name} is too large, got {value}", field=name) from e
    if not math.isfinite(number):
        raise InvalidArgument(f"{name} must be finite, got {value}", field=name)
    return number


def _check_length(value: float, name: str) -> float:
    number = _as_finite(value, name)
    if number < 0:
        raise InvalidArgument(f"{name} cannot be negative, got {value}", field=name)
    return number


def mm_to_cm(value_mm: Millimeters | float) -> Centimeters:
    """Millimetres to centimetres. No rounding is applied."""
    return Centimeters(_check_length(value_mm, "value_mm") / 10)


def cm_to_mm(value_cm: Centimeters | float) -> Millimeters:
    return Millimeters(_check_length(value_cm, "value_cm") * 10)


def cm_to_m(value_cm: Centimeters | float) -> Meters:
    return Meters(_check_length(value_cm, "value_cm") / 100)


def round_to(value: float, decimals: int) -> float:
    """Round half-up to ``decimals`` fractional digits.

    Rounding works on the shortest decimal representation of ``value`` so
    that ``round_to(2.675, 2) == 2.68`` instead of the binary-float 2.67.
    """
    number = _as_finite(value, "value")
    if decimals < 0:
        raise InvalidArgument(f"decimals cannot be negative, got {decimals}", field="decimals")
    exact = Decimal(repr(number))
    if exact.as_tuple().exponent >= -decimals:
        return number
    # precision must cover every integer digit plus the kept decimals
    context = Context(prec=max(28, exact.adjusted() + decimals + 2))
    rounded = exact.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP, context=context)
    return float(rounded)


def ceil_ratio(numerator: float, denominator: float) -> int:
    """``ceil(numerator / denominator)`` tolerant of binary-float noise.

    252.0 / 25.2 evaluates to 10.000000000000002; the quotient is trimmed to
    nine decimals first so exact multiples are not bumped up a whole unit.
    """
    ratio = _as_finite(numerator / denominator, "ratio")
    return math.ceil(round(ratio, 9))


def format_currency(amount: float, symbol: str = "$") -> str:
    return f"{symbol}{round_to(amount, 2):,.2f}"
