"""Error types raised by the pricing core.

Only two kinds reach callers: ``InvalidArgument`` (the input is malformed or
out of range) and ``InvalidConfiguration`` (pricing setup is incomplete).
Both are terminal for the call.
"""

from __future__ import annotations

from typing import Optional


class CalculationError(Exception):
    """Base class for every pricing-core failure."""


class InvalidArgument(CalculationError, ValueError):
    """Bad shape or out-of-range input. Not retryable without fixing input."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidConfiguration(CalculationError):
    """Pricing or template setup is incomplete for the requested calculation."""

    def __init__(
        self,
        message: str,
        section: str = "pricing",
        missing_fields: Optional[list[str]] = None,
    ):
        super().__init__(message)
        self.section = section
        self.missing_fields = missing_fields or []
