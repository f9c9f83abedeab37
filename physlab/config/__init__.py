"""Typed config models and parsers."""

from .models import DEFAULT_TIME_STEPS, EXPORT_FORMATS, CompareConfig, ExportConfig, RunDeck
from .parser import (
    HEAT_KEY_ALIASES,
    parse_compare_config,
    parse_deck,
    parse_export_config,
    parse_heat_params,
    parse_projectile_params,
)
from .validators import as_mapping, ensure_choice, opt_mapping, pick, required, to_float, to_float_list

__all__ = [
    "CompareConfig",
    "DEFAULT_TIME_STEPS",
    "EXPORT_FORMATS",
    "ExportConfig",
    "HEAT_KEY_ALIASES",
    "RunDeck",
    "as_mapping",
    "ensure_choice",
    "opt_mapping",
    "parse_compare_config",
    "parse_deck",
    "parse_export_config",
    "parse_heat_params",
    "parse_projectile_params",
    "pick",
    "required",
    "to_float",
    "to_float_list",
]
