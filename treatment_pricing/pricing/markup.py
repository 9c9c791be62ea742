"""Markup resolution: turn a cost into a sell price.

Resolution order, most specific first:
    material-id override -> supplier override -> category override
    -> global default -> hard-coded 0% fallback

Resolution never raises; a missing configuration lands on the fallback tier
and the result is flagged so the UI can show "pricing not configured".
"""

from __future__ import annotations

import logging
from typing import Optional

from treatment_pricing.errors import InvalidArgument
from treatment_pricing.models.contracts import MarkupConfig, MarkupKey, MarkupResult
from treatment_pricing.models.enums import MarkupSource
from treatment_pricing.units import round_to

logger = logging.getLogger(__name__)

FALLBACK_MARKUP_PERCENT = 0.0
CURRENCY_DECIMALS = 2


def resolve_markup(key: MarkupKey, config: Optional[MarkupConfig]) -> MarkupResult:
    """Pick the markup percentage that applies to ``key``."""
    if config is not None:
        tiers = (
            (MarkupSource.MATERIAL, key.material_id, config.material_markups),
            (MarkupSource.SUPPLIER, key.supplier_id, config.supplier_markups),
            (MarkupSource.CATEGORY, key.category, config.category_markups),
        )
        for source, lookup, table in tiers:
            if lookup is not None and lookup in table:
                return MarkupResult(
                    resolved_markup_percent=table[lookup],
                    source_level=source,
                    matched_key=lookup,
                )

        if config.default_markup_percent is not None:
            return MarkupResult(
                resolved_markup_percent=config.default_markup_percent,
                source_level=MarkupSource.DEFAULT,
            )

    logger.info(
        "No markup configured for category=%s material=%s; using %.1f%% fallback",
        key.category,
        key.material_id,
        FALLBACK_MARKUP_PERCENT,
    )
    return MarkupResult(
        resolved_markup_percent=FALLBACK_MARKUP_PERCENT,
        source_level=MarkupSource.FALLBACK,
        is_fallback=True,
    )


def apply_markup(
    cost: float,
    markup: MarkupResult,
    decimals: int = CURRENCY_DECIMALS,
) -> float:
    """Sell price = cost * (1 + markup%/100), rounded half-up."""
    if cost < 0:
        raise InvalidArgument(f"cost cannot be negative, got {cost}", field="cost")
    return round_to(cost * (1 + markup.resolved_markup_percent / 100), decimals)
