"""Load and validate markup configuration from JSON files."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from treatment_pricing.errors import InvalidConfiguration
from treatment_pricing.models.contracts import MarkupConfig

# Default directory for bundled markup configs
_CONFIG_DIR = Path(__file__).parent / "configs"


def load_markup_config(file_path: Path | None = None) -> MarkupConfig:
    """Load and validate a markup config from a JSON file.

    If no path is provided, loads the bundled default config.
    """
    if file_path is None:
        file_path = _CONFIG_DIR / "default_markup.json"

    if not file_path.exists():
        raise FileNotFoundError(f"Markup config not found: {file_path}")

    with open(file_path, "r") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidConfiguration(
                f"Markup config {file_path} is not valid JSON: {e}", section="markup"
            ) from e

    try:
        return MarkupConfig.model_validate(raw)
    except ValidationError as e:
        raise InvalidConfiguration(
            f"Markup config {file_path} is invalid: {e}", section="markup"
        ) from e


def get_default_markup_config() -> MarkupConfig:
    """Load the bundled default markup config."""
    return load_markup_config()
