"""Audit hooks -- logs every priced calculation for the audit trail."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Union

from treatment_pricing.models.contracts import AreaCalculationResult, LinearCalculationResult

logger = logging.getLogger(__name__)


def log_calculation(
    result: Union[LinearCalculationResult, AreaCalculationResult],
    request_id: Optional[str] = None,
) -> dict[str, Any]:
    """Record a calculation in the audit log.

    Returns the audit entry dict for downstream persistence.
    """
    entry = {
        "request_id": request_id,
        "treatment_category": result.treatment_category.value,
        "kind": result.kind,
        "quantity": result.quantity,
        "total_cost": result.total_cost,
        "total_price": result.total_price,
        "markup_percent": result.markup.resolved_markup_percent,
        "markup_source": result.markup.source_level.value,
        "markup_is_fallback": result.markup.is_fallback,
        "algorithm_version": result.algorithm_version,
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
    }
    if result.markup.is_fallback:
        logger.warning(
            "Calculation audit: %s priced without markup configuration (request %s)",
            result.treatment_category.value,
            request_id,
        )
    else:
        logger.info(
            "Calculation audit: %s → cost %.2f / price %.2f (request %s)",
            result.treatment_category.value,
            result.total_cost,
            result.total_price,
            request_id,
        )
    return entry
