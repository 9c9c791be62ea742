"""Map a calculation result onto the stored treatment row.

The row is written once from a facade result and only rewritten by calling
the facade again. Display code reads these fields and never re-derives them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional, Union

from treatment_pricing.models.contracts import AreaCalculationResult, LinearCalculationResult
from treatment_pricing.units import round_to


def to_treatment_record(
    result: Union[LinearCalculationResult, AreaCalculationResult],
    calculated_at: Optional[datetime] = None,
) -> dict[str, Any]:
    """Return the column values to persist for ``result``."""
    stamp = calculated_at or datetime.now(tz=timezone.utc)
    return {
        "treatment_category": result.treatment_category.value,
        "material_cost": round_to(result.material_cost + result.options_cost, 2),
        "labor_cost": result.manufacturing_cost,
        "total_cost": result.total_cost,
        "total_price": result.total_price,
        "markup_percent": result.markup.resolved_markup_percent,
        "markup_source": result.markup.source_level.value,
        "algorithm_version": result.algorithm_version,
        "calculated_at": stamp.isoformat(),
        "calculation_result": result.model_dump(mode="json"),
    }
