"""Option pricing methods, registered by decorator.

Each method turns a selected option into a cost given the quantities the
engine has already produced for the treatment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from treatment_pricing.errors import InvalidConfiguration
from treatment_pricing.models.contracts import SelectedOption
from treatment_pricing.models.enums import OptionPricingMethod, PricingBasis
from treatment_pricing.units import round_to

OptionPricingFn = Callable[[SelectedOption, "OptionContext"], float]

# Global registry -- maps pricing method -> cost function
_REGISTRY: dict[OptionPricingMethod, OptionPricingFn] = {}


@dataclass(frozen=True)
class OptionContext:
    """Quantities an option may be priced against."""

    basis: PricingBasis
    material_cost: float
    linear_meters: Optional[float] = None
    area_sqm: Optional[float] = None


def register_option_pricing(method: OptionPricingMethod) -> Callable:
    """Decorator to register a cost function for an option pricing method."""

    def decorator(fn: OptionPricingFn) -> OptionPricingFn:
        _REGISTRY[method] = fn
        return fn

    return decorator


def get_option_pricing(method: OptionPricingMethod) -> Optional[OptionPricingFn]:
    return _REGISTRY.get(method)


@register_option_pricing(OptionPricingMethod.FIXED)
@register_option_pricing(OptionPricingMethod.PER_UNIT)
def price_per_unit(option: SelectedOption, context: OptionContext) -> float:
    return option.cost_price * option.quantity


@register_option_pricing(OptionPricingMethod.PER_METER)
def price_per_meter(option: SelectedOption, context: OptionContext) -> float:
    if context.basis is not PricingBasis.LINEAR or context.linear_meters is None:
        raise InvalidConfiguration(
            f"Option '{option.option_key}' is priced per metre but the treatment "
            f"is priced by {context.basis.value}",
            section="options",
            missing_fields=["linear_meters"],
        )
    return option.cost_price * context.linear_meters * option.quantity


@register_option_pricing(OptionPricingMethod.PER_SQM)
def price_per_sqm(option: SelectedOption, context: OptionContext) -> float:
    if context.area_sqm is None:
        raise InvalidConfiguration(
            f"Option '{option.option_key}' is priced per sqm but no area is available",
            section="options",
            missing_fields=["area_sqm"],
        )
    return option.cost_price * context.area_sqm * option.quantity


@register_option_pricing(OptionPricingMethod.PERCENTAGE)
def price_percentage(option: SelectedOption, context: OptionContext) -> float:
    """``cost_price`` is read as a percentage of the material cost."""
    return context.material_cost * option.cost_price / 100


def calculate_options_cost(
    options: tuple[SelectedOption, ...] | list[SelectedOption],
    context: OptionContext,
) -> tuple[float, list[str]]:
    """Sum option costs. Returns the rounded total and one breakdown line per option."""
    total = 0.0
    lines: list[str] = []
    for option in options:
        fn = get_option_pricing(option.pricing_method)
        if fn is None:
            raise InvalidConfiguration(
                f"No pricing rule for option method '{option.pricing_method.value}'",
                section="options",
            )
        cost = round_to(fn(option, context), 2)
        total += cost
        lines.append(
            f"Option {option.option_key} ({option.pricing_method.value}): {cost:.2f}"
        )
    return round_to(total, 2), lines
