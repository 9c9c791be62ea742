from .loader import get_default_markup_config, load_markup_config
from .markup import apply_markup, resolve_markup

__all__ = ["apply_markup", "resolve_markup", "load_markup_config", "get_default_markup_config"]
