"""Role colors and harmony palettes derived from a single brand primary."""

from .catalog import SCALE_STEPS, Token, TokenCatalog, load_catalog_csv
from .color import PerceptualColor
from .config import DEFAULT_CONFIG, DerivationConfig, load_config
from .derive import CatalogMode, DerivedColor, DerivedColorSet, derive_key_colors
from .harmony import HARMONY_SCHEMES, HarmonyPaletteResult, HarmonySelector
from .hues import (
    CatalogHue,
    HueFamily,
    HueMapper,
    hue_distance,
    nearest_hue,
    normalize_hue,
    to_catalog_hue,
)
from .solver import find_tone_for_contrast
from .steps import (
    SelectionContext,
    select_multiple_steps,
    select_step,
    select_step_for_contrast,
)

__version__ = "0.1.0"

__all__ = [
    "CatalogHue",
    "CatalogMode",
    "DEFAULT_CONFIG",
    "DerivationConfig",
    "DerivedColor",
    "DerivedColorSet",
    "HARMONY_SCHEMES",
    "HarmonyPaletteResult",
    "HarmonySelector",
    "HueFamily",
    "HueMapper",
    "PerceptualColor",
    "SCALE_STEPS",
    "SelectionContext",
    "Token",
    "TokenCatalog",
    "derive_key_colors",
    "find_tone_for_contrast",
    "hue_distance",
    "load_catalog_csv",
    "load_config",
    "nearest_hue",
    "normalize_hue",
    "select_multiple_steps",
    "select_step",
    "select_step_for_contrast",
    "to_catalog_hue",
]
