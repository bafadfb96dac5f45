"""Resolve palette color references and pick WCAG-accessible contrast pairs."""

from palette_contrast.adjust import AdjustmentRegistry, get_registry
from palette_contrast.color import BLACK, WHITE, Color, parse_color
from palette_contrast.contrast import (
    THRESHOLDS,
    ContrastCheck,
    apply_contrasted,
    check_contrast,
    contrast_ratio,
    luminance,
    rank_contrast,
    select_best_contrast,
)
from palette_contrast.errors import (
    CyclicColorReference,
    InsufficientContrastOptions,
    InvalidColorDescription,
    NotAColor,
    PaletteContrastError,
    PaletteError,
    UnknownAdjustmentFunction,
    UnknownContrastStandard,
)
from palette_contrast.palette import load_palette, merge_palettes
from palette_contrast.resolve import Resolver, resolve

__version__ = "0.1.0"

__all__ = [
    "AdjustmentRegistry",
    "BLACK",
    "Color",
    "ContrastCheck",
    "CyclicColorReference",
    "InsufficientContrastOptions",
    "InvalidColorDescription",
    "NotAColor",
    "PaletteContrastError",
    "PaletteError",
    "Resolver",
    "THRESHOLDS",
    "UnknownAdjustmentFunction",
    "UnknownContrastStandard",
    "WHITE",
    "apply_contrasted",
    "check_contrast",
    "contrast_ratio",
    "get_registry",
    "load_palette",
    "luminance",
    "merge_palettes",
    "parse_color",
    "rank_contrast",
    "resolve",
    "select_best_contrast",
]
