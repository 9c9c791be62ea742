"""Core calculation engine.

Takes a validated CalculationInput -> produces the material quantity and the
cost of material, manufacturing and options. Markup is not applied here.
"""

from __future__ import annotations

import logging
from typing import Union

from treatment_pricing.engine.result import AreaQuantity, LinearQuantity
from treatment_pricing.errors import InvalidArgument, InvalidConfiguration
from treatment_pricing.models.contracts import CalculationInput
from treatment_pricing.models.enums import FabricOrientation, PricingBasis
from treatment_pricing.pricing.options import OptionContext, calculate_options_cost
from treatment_pricing.units import ceil_ratio, cm_to_m, mm_to_cm, round_to

logger = logging.getLogger(__name__)

METER_DECIMALS = 2
SQM_DECIMALS = 3
CURRENCY_DECIMALS = 2
DEFAULT_FULLNESS = 1.0


def _num(value: float) -> str:
    return f"{value:g}"


class CalculationEngine:
    """Stateless engine that turns measurements into quantities and costs."""

    def calculate(self, calc_input: CalculationInput) -> Union[LinearQuantity, AreaQuantity]:
        """Run the linear or area path for the input's treatment category."""
        self._check_measurements(calc_input)
        if calc_input.treatment_category.pricing_basis is PricingBasis.LINEAR:
            return self.calculate_linear(calc_input)
        return self.calculate_area(calc_input)

    def calculate_linear(self, calc_input: CalculationInput) -> LinearQuantity:
        """Fabric metres for curtains and romans, then material cost."""
        self._check_measurements(calc_input)
        fabric_width_cm = calc_input.fabric_width_cm
        if not fabric_width_cm:
            raise InvalidConfiguration(
                f"{calc_input.treatment_category.value} requires a fabric width greater than 0",
                section="fabric",
                missing_fields=["fabric_width_cm"],
            )

        steps: list[str] = []
        width_cm = mm_to_cm(calc_input.measurements_mm.width_mm)
        drop_cm = mm_to_cm(calc_input.measurements_mm.drop_mm)
        fullness = calc_input.fullness_ratio or DEFAULT_FULLNESS

        # overlap goes on before fullness, hems and returns after
        overlap_cm = calc_input.overlap_cm
        finished_width_cm = (width_cm + overlap_cm) * fullness
        if overlap_cm:
            steps.append(
                f"Finished width: ({_num(width_cm)} cm + {_num(overlap_cm)} cm overlap)"
                f" x {_num(fullness)} fullness = {_num(finished_width_cm)} cm"
            )
        else:
            steps.append(
                f"Finished width: {_num(width_cm)} cm x {_num(fullness)} fullness"
                f" = {_num(finished_width_cm)} cm"
            )

        total_side_hems_cm = calc_input.side_hem_cm * 2 * calc_input.panel_count
        total_returns_cm = calc_input.return_left_cm + calc_input.return_right_cm
        required_width_cm = finished_width_cm + total_returns_cm + total_side_hems_cm
        if total_side_hems_cm or total_returns_cm:
            steps.append(
                f"Required width: {_num(finished_width_cm)} cm + {_num(total_returns_cm)} cm returns"
                f" + {_num(total_side_hems_cm)} cm side hems = {_num(required_width_cm)} cm"
            )

        drop_additions = [
            (calc_input.seam_hem_allowance_cm, "allowance"),
            (calc_input.header_hem_cm, "header"),
            (calc_input.bottom_hem_cm, "bottom hem"),
            (calc_input.pooling_cm, "pooling"),
        ]
        cut_drop_cm = drop_cm + sum(amount for amount, _ in drop_additions)
        added = "".join(
            f" + {_num(amount)} cm {label}" for amount, label in drop_additions if amount
        )
        steps.append(f"Cut drop: {_num(drop_cm)} cm{added} = {_num(cut_drop_cm)} cm")

        repeat_cm = calc_input.pattern_repeat_cm
        if repeat_cm and repeat_cm > 0:
            repeats = ceil_ratio(cut_drop_cm, repeat_cm)
            matched_cm = repeats * repeat_cm
            steps.append(
                f"Pattern match: {repeats} x {_num(repeat_cm)} cm repeat"
                f" = {_num(matched_cm)} cm"
            )
            cut_drop_cm = matched_cm

        orientation = calc_input.fabric_orientation
        if orientation is FabricOrientation.RAILROADED:
            # fabric width covers the drop; each piece runs the full required width
            drops_needed = ceil_ratio(cut_drop_cm, fabric_width_cm)
            piece_length_cm = required_width_cm
            steps.append(
                f"Railroaded pieces: ceil({_num(cut_drop_cm)} / {_num(fabric_width_cm)})"
                f" = {drops_needed}"
            )
        else:
            drops_needed = ceil_ratio(required_width_cm, fabric_width_cm)
            piece_length_cm = cut_drop_cm
            steps.append(
                f"Drops needed: ceil({_num(required_width_cm)} / {_num(fabric_width_cm)})"
                f" = {drops_needed}"
            )

        seams_count = max(0, drops_needed - 1)
        seam_allowance_cm = seams_count * calc_input.join_seam_cm
        if seam_allowance_cm:
            steps.append(
                f"Seam allowance: {seams_count} seam(s) x {_num(calc_input.join_seam_cm)} cm"
                f" = {_num(seam_allowance_cm)} cm"
            )
        seams_text = f" + {_num(seam_allowance_cm)} cm seams" if seam_allowance_cm else ""

        fabric_meters_raw = round_to(
            cm_to_m(drops_needed * piece_length_cm + seam_allowance_cm), METER_DECIMALS
        )
        steps.append(
            f"Fabric: {drops_needed} x {_num(piece_length_cm)} cm{seams_text}"
            f" = {fabric_meters_raw:.2f} m"
        )

        total_fabric_meters = self._with_waste(
            fabric_meters_raw, calc_input.waste_percent, METER_DECIMALS, "m", steps
        )

        material_cost = round_to(total_fabric_meters * calc_input.cost_per_unit, CURRENCY_DECIMALS)
        steps.append(
            f"Material cost: {total_fabric_meters:.2f} m x {calc_input.cost_per_unit:.2f}"
            f" = {material_cost:.2f}"
        )
        manufacturing_cost = self._manufacturing_cost(calc_input, total_fabric_meters, "m", steps)

        options_cost, option_lines = calculate_options_cost(
            calc_input.options,
            OptionContext(
                basis=PricingBasis.LINEAR,
                material_cost=material_cost,
                linear_meters=total_fabric_meters,
                area_sqm=round_to(required_width_cm * cut_drop_cm / 10000, SQM_DECIMALS),
            ),
        )
        steps.extend(option_lines)

        summary = (
            f"{orientation.value.upper()}: {drops_needed} drop(s) x {_num(piece_length_cm)} cm"
            f"{seams_text} = {total_fabric_meters:.2f} m"
        )
        logger.debug("Linear calculation for %s: %s", calc_input.treatment_category.value, summary)

        return LinearQuantity(
            window_width_cm=width_cm,
            window_drop_cm=drop_cm,
            fabric_width_cm=fabric_width_cm,
            fullness_ratio=fullness,
            fabric_orientation=orientation,
            finished_width_cm=finished_width_cm,
            total_side_hems_cm=total_side_hems_cm,
            total_returns_cm=total_returns_cm,
            required_width_cm=required_width_cm,
            drops_needed=drops_needed,
            cut_drop_cm=cut_drop_cm,
            seams_count=seams_count,
            seam_allowance_cm=seam_allowance_cm,
            fabric_meters_raw=fabric_meters_raw,
            total_fabric_meters=total_fabric_meters,
            material_cost=material_cost,
            manufacturing_cost=manufacturing_cost,
            options_cost=options_cost,
            steps=tuple(steps),
            summary=summary,
        )

    def calculate_area(self, calc_input: CalculationInput) -> AreaQuantity:
        """Square metres for blinds, shutters and panels, then material cost."""
        self._check_measurements(calc_input)
        steps: list[str] = []
        width_cm = mm_to_cm(calc_input.measurements_mm.width_mm)
        height_cm = mm_to_cm(calc_input.measurements_mm.drop_mm)

        area_sqm_raw = round_to(width_cm * height_cm / 10000, SQM_DECIMALS)
        steps.append(
            f"Area: {_num(width_cm)} cm x {_num(height_cm)} cm / 10000 = {_num(area_sqm_raw)} sqm"
        )
        area_sqm = self._with_waste(
            area_sqm_raw, calc_input.waste_percent, SQM_DECIMALS, "sqm", steps
        )

        material_cost = round_to(area_sqm * calc_input.cost_per_unit, CURRENCY_DECIMALS)
        steps.append(
            f"Material cost: {_num(area_sqm)} sqm x {calc_input.cost_per_unit:.2f}"
            f" = {material_cost:.2f}"
        )
        manufacturing_cost = self._manufacturing_cost(calc_input, area_sqm, "sqm", steps)

        options_cost, option_lines = calculate_options_cost(
            calc_input.options,
            OptionContext(
                basis=PricingBasis.AREA,
                material_cost=material_cost,
                area_sqm=area_sqm,
            ),
        )
        steps.extend(option_lines)

        summary = f"AREA: {_num(width_cm)} cm x {_num(height_cm)} cm = {_num(area_sqm)} sqm"
        logger.debug("Area calculation for %s: %s", calc_input.treatment_category.value, summary)

        return AreaQuantity(
            window_width_cm=width_cm,
            window_height_cm=height_cm,
            area_sqm_raw=area_sqm_raw,
            area_sqm=area_sqm,
            material_cost=material_cost,
            manufacturing_cost=manufacturing_cost,
            options_cost=options_cost,
            steps=tuple(steps),
            summary=summary,
        )

    @staticmethod
    def _check_measurements(calc_input: CalculationInput) -> None:
        """Reject non-positive measurements before any arithmetic runs."""
        measurements = calc_input.measurements_mm
        for name in ("width_mm", "drop_mm"):
            value = getattr(measurements, name)
            if value is None or value <= 0:
                raise InvalidArgument(
                    f"measurements_mm.{name} must be greater than 0, got {value}",
                    field=f"measurements_mm.{name}",
                )

    @staticmethod
    def _with_waste(
        quantity: float,
        waste_percent: float,
        decimals: int,
        unit: str,
        steps: list[str],
    ) -> float:
        if not waste_percent:
            return quantity
        with_waste = round_to(quantity * (1 + waste_percent / 100), decimals)
        steps.append(
            f"With waste: {_num(quantity)} {unit} x (1 + {_num(waste_percent)}%)"
            f" = {_num(with_waste)} {unit}"
        )
        return with_waste

    @staticmethod
    def _manufacturing_cost(
        calc_input: CalculationInput,
        quantity: float,
        unit: str,
        steps: list[str],
    ) -> float:
        rate = calc_input.manufacturing_cost_per_unit
        if not rate:
            return 0.0
        cost = round_to(quantity * rate, CURRENCY_DECIMALS)
        steps.append(f"Manufacturing: {_num(quantity)} {unit} x {rate:.2f} = {cost:.2f}")
        return cost
