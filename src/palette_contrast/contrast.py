"""
WCAG relative luminance, contrast ratios and best-contrast selection.

The public entry points resolve their color arguments first (so palette names
and adjustment chains are accepted anywhere a color is); the arithmetic
itself only ever sees concrete :class:`Color` values or luminance numbers.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from numbers import Real
from types import MappingProxyType
from typing import Any, Sequence

import numpy as np

from palette_contrast.adjust import AdjustmentRegistry
from palette_contrast.color import Color
from palette_contrast.config import get_settings
from palette_contrast.errors import (
    InsufficientContrastOptions,
    NotAColor,
    UnknownContrastStandard,
)
from palette_contrast.resolve import Palette, Resolver

logger = logging.getLogger("palette_contrast.contrast")

# WCAG 2.x minimum ratios
THRESHOLDS = MappingProxyType({"aa-large": 3.0, "aa": 4.5, "aaa": 7.0})

LINEAR_CUTOFF = 0.03928
CHANNEL_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])


# ============================================================
# Luminance / ratio
# ============================================================


def luminance(color: Color) -> float:
    """
    WCAG relative luminance of a concrete color; alpha is ignored.

    Each channel is normalised to [0, 1], linearised (``v / 12.92`` below
    0.03928, ``((v + 0.055) / 1.055) ** 2.4`` otherwise) and the three are
    summed with weights 0.2126 / 0.7152 / 0.0722.
    """
    if not isinstance(color, Color):
        raise NotAColor(f"Luminance needs a resolved color, got {color!r}")
    v = color.to_unit()
    linear = np.where(v < LINEAR_CUTOFF, v / 12.92, ((v + 0.055) / 1.055) ** 2.4)
    return float(np.dot(linear, CHANNEL_WEIGHTS))


def _is_luminance(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def ratio_of(lum_a: float, lum_b: float) -> float:
    darker, lighter = sorted((float(lum_a), float(lum_b)))
    return (lighter + 0.05) / (darker + 0.05)


def threshold_for(require: Any) -> float | None:
    """
    Minimum ratio named by ``require``.

    ``None``/``False`` mean no requirement; names are looked up
    case-insensitively in THRESHOLDS; numbers and numeric strings pass
    through.
    """
    if require is None or require is False:
        return None
    if _is_luminance(require) and math.isfinite(require):
        return float(require)
    if isinstance(require, str):
        key = require.strip().lower()
        if key in THRESHOLDS:
            return THRESHOLDS[key]
        try:
            minimum = float(key)
        except ValueError:
            minimum = math.nan
        if math.isfinite(minimum):
            return minimum
    raise UnknownContrastStandard(
        f"Unknown contrast standard {require!r}; expected one of "
        f"{', '.join(k.upper() for k in THRESHOLDS)} or a number"
    )


@dataclass(frozen=True)
class ContrastCheck:
    ratio: float
    minimum: float | None

    @property
    def passes(self) -> bool:
        return self.minimum is None or self.ratio >= self.minimum


def _luminance_of(value: Any, resolver: Resolver) -> float:
    if _is_luminance(value):
        if not math.isfinite(value) or value < 0:
            raise NotAColor(f"Luminance must be a finite number >= 0, got {value!r}")
        return float(value)
    return luminance(resolver.resolve(value))


def check_contrast(
    a: Any,
    b: Any,
    require: Any = None,
    palette: Palette | None = None,
    registry: AdjustmentRegistry | None = None,
) -> ContrastCheck:
    """Ratio between ``a`` and ``b`` together with the requirement it was held to."""
    minimum = threshold_for(require)
    resolver = Resolver(palette, registry)
    ratio = ratio_of(_luminance_of(a, resolver), _luminance_of(b, resolver))
    return ContrastCheck(ratio=ratio, minimum=minimum)


def contrast_ratio(
    a: Any,
    b: Any,
    require: Any = None,
    palette: Palette | None = None,
    registry: AdjustmentRegistry | None = None,
) -> float | bool:
    """
    WCAG contrast ratio between ``a`` and ``b``.

    Either argument may be a color description or a precomputed luminance.
    When ``require`` is given and the ratio falls short of it, ``False`` is
    returned instead of the ratio. Use :func:`check_contrast` to get both.
    """
    check = check_contrast(a, b, require, palette, registry)
    if not check.passes:
        logger.debug("Ratio %.2f below required %.2f", check.ratio, check.minimum)
        return False
    return check.ratio


# ============================================================
# Selection
# ============================================================


@dataclass(frozen=True)
class Candidate:
    option: Any
    color: Color
    ratio: float


def default_options(palette: Palette | None) -> list[Any]:
    """The light/dark fallback pair, preferring the palette's own entries."""
    settings = get_settings()
    palette = palette or {}
    light = settings.light_key if settings.light_key in palette else settings.contrast_light
    dark = settings.dark_key if settings.dark_key in palette else settings.contrast_dark
    return [light, dark]


def rank_contrast(
    subject: Any,
    options: Sequence[Any] | None = None,
    palette: Palette | None = None,
    registry: AdjustmentRegistry | None = None,
) -> list[Candidate]:
    """Every option with its resolved color and ratio against ``subject``, in input order."""
    if options is None or len(options) == 0:
        options = default_options(palette)
    elif isinstance(options, str):
        raise InsufficientContrastOptions(
            f"Options must be a list of colors, got the single string {options!r}"
        )
    if len(options) < 2:
        raise InsufficientContrastOptions(
            f"Need at least two contrast options, got {len(options)}"
        )

    resolver = Resolver(palette, registry)
    subject_lum = luminance(resolver.resolve(subject))

    ranked = []
    for option in options:
        color = resolver.resolve(option)
        ranked.append(Candidate(option, color, ratio_of(subject_lum, luminance(color))))
    return ranked


def best_candidate(ranked: Sequence[Candidate]) -> Candidate:
    """Highest ratio wins; only a strictly higher ratio displaces an earlier option."""
    best = ranked[0]
    for cand in ranked[1:]:
        if cand.ratio > best.ratio:
            best = cand
    return best


def select_best_contrast(
    subject: Any,
    options: Sequence[Any] | None = None,
    palette: Palette | None = None,
    registry: AdjustmentRegistry | None = None,
) -> Color:
    """
    The option with the highest contrast against ``subject``.

    Ties go to the earliest option in input order.
    """
    best = best_candidate(rank_contrast(subject, options, palette, registry))
    logger.debug("Best contrast for %r: %s (%.2f)", subject, best.color, best.ratio)
    return best.color


def apply_contrasted(
    background: Any,
    options: Sequence[Any] | None = None,
    palette: Palette | None = None,
    registry: AdjustmentRegistry | None = None,
) -> tuple[Color, Color]:
    """Resolved background paired with its best-contrasting foreground."""
    bg = Resolver(palette, registry).resolve(background)
    return bg, select_best_contrast(bg, options, palette, registry)
