"""Single entry point for every treatment price calculation.

UI calculators, quotes, work orders and the storefront all call
``calculate_treatment``. Its result carries cost and sell price together and
is stored as-is; it is never recomputed on display.

Unit standards:
    measurements   millimetres (from the database)
    fabric widths  centimetres
    allowances     centimetres
    quantities     metres (linear) or square metres (area)
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from treatment_pricing.engine.calculator import CalculationEngine
from treatment_pricing.engine.result import AreaQuantity, LinearQuantity
from treatment_pricing.errors import CalculationError, InvalidArgument
from treatment_pricing.models.contracts import (
    AreaCalculationResult,
    CalculationInput,
    FormulaBreakdown,
    LinearCalculationResult,
    MarkupConfig,
    MarkupKey,
    MarkupResult,
)
from treatment_pricing.models.enums import OptionPricingMethod, PricingBasis
from treatment_pricing.pricing.markup import apply_markup, resolve_markup
from treatment_pricing.units import format_currency, round_to

logger = logging.getLogger(__name__)

# Increment when any formula changes
ALGORITHM_VERSION = "1.1.0"

CalculationResult = Union[LinearCalculationResult, AreaCalculationResult]

_ENGINE = CalculationEngine()


def _coerce_input(calculation_input: Union[CalculationInput, Mapping[str, Any]]) -> CalculationInput:
    if isinstance(calculation_input, CalculationInput):
        return calculation_input
    if not isinstance(calculation_input, Mapping):
        raise InvalidArgument(
            f"Expected CalculationInput or mapping, got {type(calculation_input).__name__}"
        )
    try:
        return CalculationInput.model_validate(dict(calculation_input))
    except ValidationError as e:
        raise InvalidArgument(f"Malformed calculation input: {e}") from e


def markup_key_for(calc_input: CalculationInput) -> MarkupKey:
    """Markup lookup key derived from the input's category, material and supplier."""
    return MarkupKey(
        category=calc_input.treatment_category.value,
        material_id=calc_input.material_id,
        supplier_id=calc_input.supplier_id,
    )


def calculate_treatment(
    calculation_input: Union[CalculationInput, Mapping[str, Any]],
    markup_config: Optional[MarkupConfig] = None,
    markup_key: Optional[MarkupKey] = None,
    currency_symbol: str = "$",
) -> CalculationResult:
    """Price a treatment: quantity, cost and sell price in one result.

    Pure and re-entrant: identical arguments give structurally equal results.
    Raises ``InvalidArgument`` or ``InvalidConfiguration``; never returns a
    partial result.
    """
    calc_input = _coerce_input(calculation_input)
    try:
        quantity = _ENGINE.calculate(calc_input)
    except CalculationError as e:
        logger.error(
            "Calculation failed for %s: %s", calc_input.treatment_category.value, e
        )
        raise

    if markup_key is None:
        markup_key = markup_key_for(calc_input)
    markup = resolve_markup(markup_key, markup_config)
    return _build_result(calc_input, quantity, markup, currency_symbol)


def _build_result(
    calc_input: CalculationInput,
    quantity: Union[LinearQuantity, AreaQuantity],
    markup: MarkupResult,
    currency_symbol: str,
) -> CalculationResult:
    def money(amount: float) -> str:
        return format_currency(amount, currency_symbol)

    total_cost = round_to(
        quantity.material_cost + quantity.manufacturing_cost + quantity.options_cost, 2
    )
    total_price = apply_markup(total_cost, markup)
    component_prices = _component_prices(
        {
            "material_price": quantity.material_cost,
            "manufacturing_price": quantity.manufacturing_cost,
            "options_price": quantity.options_cost,
        },
        total_price,
        markup,
    )
    pricing = {
        "unit_cost": round_to(calc_input.cost_per_unit, 2),
        "unit_price": apply_markup(calc_input.cost_per_unit, markup),
        "material_cost": quantity.material_cost,
        "manufacturing_cost": quantity.manufacturing_cost,
        "options_cost": quantity.options_cost,
        "total_cost": total_cost,
        **component_prices,
        "total_price": total_price,
        "markup": markup,
        "markup_amount": round_to(total_price - total_cost, 2),
        "algorithm_version": ALGORITHM_VERSION,
    }

    steps = list(quantity.steps)
    steps.append(f"Cost total: {total_cost:.2f}")
    steps.append(
        f"Markup: {markup.resolved_markup_percent:g}% (source: {markup.source_level.value})"
    )
    steps.append(f"Selling total: {total_price:.2f}")
    formula = FormulaBreakdown(steps=tuple(steps), summary=quantity.summary)

    if isinstance(quantity, LinearQuantity):
        formatted = (
            f"{quantity.total_fabric_meters:.2f} m @ {money(calc_input.cost_per_unit)}/m"
            f" | cost {money(total_cost)} | price {money(total_price)}"
        )
        return LinearCalculationResult(
            treatment_category=calc_input.treatment_category,
            formatted=formatted,
            formula=formula,
            window_width_cm=quantity.window_width_cm,
            window_drop_cm=quantity.window_drop_cm,
            fabric_width_cm=quantity.fabric_width_cm,
            fullness_ratio=quantity.fullness_ratio,
            fabric_orientation=quantity.fabric_orientation,
            finished_width_cm=quantity.finished_width_cm,
            total_side_hems_cm=quantity.total_side_hems_cm,
            total_returns_cm=quantity.total_returns_cm,
            required_width_cm=quantity.required_width_cm,
            drops_needed=quantity.drops_needed,
            cut_drop_cm=quantity.cut_drop_cm,
            seams_count=quantity.seams_count,
            seam_allowance_cm=quantity.seam_allowance_cm,
            fabric_meters_raw=quantity.fabric_meters_raw,
            total_fabric_meters=quantity.total_fabric_meters,
            **pricing,
        )

    formatted = (
        f"{quantity.area_sqm:g} sqm @ {money(calc_input.cost_per_unit)}/sqm"
        f" | cost {money(total_cost)} | price {money(total_price)}"
    )
    return AreaCalculationResult(
        treatment_category=calc_input.treatment_category,
        formatted=formatted,
        formula=formula,
        window_width_cm=quantity.window_width_cm,
        window_height_cm=quantity.window_height_cm,
        area_sqm_raw=quantity.area_sqm_raw,
        area_sqm=quantity.area_sqm,
        **pricing,
    )


def _component_prices(
    costs: dict[str, float], total_price: float, markup: MarkupResult
) -> dict[str, float]:
    """Mark up each component so the component prices sum to ``total_price``.

    Components are rounded one by one; the cent left over from rounding goes
    to the most expensive component.
    """
    prices = {name: apply_markup(cost, markup) for name, cost in costs.items()}
    largest = max(costs, key=lambda name: costs[name])
    others = sum(price for name, price in prices.items() if name != largest)
    prices[largest] = round_to(total_price - others, 2)
    return prices


def calculate_treatment_quick(
    calculation_input: Union[CalculationInput, Mapping[str, Any]],
    markup_config: Optional[MarkupConfig] = None,
) -> dict[str, Any]:
    """Preview totals for display while the user is still editing."""
    result = calculate_treatment(calculation_input, markup_config)
    return {
        "kind": result.kind,
        "total_cost": result.total_cost,
        "total_price": result.total_price,
        "linear_meters": result.total_fabric_meters if result.kind == "linear" else None,
        "sqm": result.area_sqm if result.kind == "area" else None,
    }


def validate_calculation_input(data: Union[CalculationInput, Mapping[str, Any]]) -> list[str]:
    """Return human-readable problems with ``data``; an empty list means valid."""
    try:
        calc_input = _coerce_input(data)
    except InvalidArgument as e:
        cause = e.__cause__
        if isinstance(cause, ValidationError):
            return [
                f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}"
                for err in cause.errors()
            ]
        return [str(e)]

    errors: list[str] = []
    if calc_input.treatment_category.pricing_basis is PricingBasis.LINEAR:
        if not calc_input.fabric_width_cm:
            errors.append(
                f"fabric_width_cm: required for {calc_input.treatment_category.value}"
            )
    else:
        for option in calc_input.options:
            if option.pricing_method is OptionPricingMethod.PER_METER:
                errors.append(
                    f"options.{option.option_key}: per_meter pricing needs a linear treatment"
                )
    return errors
