"""
Color adjustment primitives and the name -> primitive registry.

Every primitive is a pure function ``f(color, *args) -> Color``. Lightness,
saturation and hue changes are done in HSL via colour-science; mixing is done
per channel in sRGB with alpha-aware weighting.
"""

from __future__ import annotations

import inspect
import logging
from numbers import Real
from typing import Any, Callable, Iterable, Sequence

import colour
import numpy as np

from palette_contrast.color import BLACK, WHITE, Color, clamp, parse_color
from palette_contrast.errors import (
    InvalidColorDescription,
    NotAColor,
    UnknownAdjustmentFunction,
)

logger = logging.getLogger("palette_contrast.adjust")

Adjustment = Callable[..., Color]


# ============================================================
# Argument parsing
# ============================================================


def _number(value: Any, suffix: str) -> tuple[float, bool]:
    if isinstance(value, bool):
        raise InvalidColorDescription(f"Expected a number, got {value!r}")
    if isinstance(value, Real):
        return float(value), False
    if isinstance(value, str):
        s = value.strip()
        has_suffix = bool(suffix) and s.endswith(suffix)
        if has_suffix:
            s = s[: -len(suffix)]
        try:
            return float(s), has_suffix
        except ValueError:
            pass
    raise InvalidColorDescription(f"Expected a number, got {value!r}")


def percent(value: Any) -> float:
    """'15%' and 15 both mean 0.15."""
    v, _ = _number(value, "%")
    return v / 100.0


def alpha_amount(value: Any) -> float:
    """'10%' means 0.1; bare numbers are already fractions."""
    v, was_percent = _number(value, "%")
    return v / 100.0 if was_percent else v


def degrees(value: Any) -> float:
    v, _ = _number(value, "deg")
    return v


def _color_arg(value: Any) -> Color:
    try:
        return parse_color(value)
    except NotAColor as exc:
        raise InvalidColorDescription(str(exc)) from exc


# ============================================================
# HSL helpers
# ============================================================


def _to_hsl(color: Color) -> np.ndarray:
    return np.asarray(colour.RGB_to_HSL(color.to_unit()), dtype=float)


def _from_hsl(hsl: np.ndarray, alpha: float) -> Color:
    return Color.from_unit(colour.HSL_to_RGB(hsl), alpha)


def _shift_hsl(color: Color, index: int, delta: float) -> Color:
    hsl = _to_hsl(color)
    hsl[index] = clamp(hsl[index] + delta, 0.0, 1.0)
    return _from_hsl(hsl, color.alpha)


# ============================================================
# Primitives
# ============================================================


def lighten(color: Color, amount: Any) -> Color:
    return _shift_hsl(color, 2, percent(amount))


def darken(color: Color, amount: Any) -> Color:
    return _shift_hsl(color, 2, -percent(amount))


def saturate(color: Color, amount: Any) -> Color:
    return _shift_hsl(color, 1, percent(amount))


def desaturate(color: Color, amount: Any) -> Color:
    return _shift_hsl(color, 1, -percent(amount))


def adjust_hue(color: Color, angle: Any) -> Color:
    hsl = _to_hsl(color)
    hsl[0] = (hsl[0] + degrees(angle) / 360.0) % 1.0
    return _from_hsl(hsl, color.alpha)


def grayscale(color: Color) -> Color:
    hsl = _to_hsl(color)
    hsl[1] = 0.0
    return _from_hsl(hsl, color.alpha)


def complement(color: Color) -> Color:
    return adjust_hue(color, 180)


def mix(color: Color, other: Any, weight: Any = "50%") -> Color:
    """
    Blend ``color`` with ``other``; ``weight`` is the share of ``color``.

    Alpha differences shift the effective weight toward the more opaque
    color, the same way Sass' ``mix`` does.
    """
    other = _color_arg(other)
    p = clamp(percent(weight), 0.0, 1.0)

    w = p * 2.0 - 1.0
    a = color.alpha - other.alpha
    if w * a == -1:
        w1 = (w + 1.0) / 2.0
    else:
        w1 = ((w + a) / (1.0 + w * a) + 1.0) / 2.0
    w2 = 1.0 - w1

    rgb = color.to_unit() * w1 + other.to_unit() * w2
    alpha = color.alpha * p + other.alpha * (1.0 - p)
    return Color.from_unit(rgb, alpha)


def tint(color: Color, amount: Any) -> Color:
    return mix(WHITE, color, amount)


def shade(color: Color, amount: Any) -> Color:
    return mix(BLACK, color, amount)


def invert(color: Color, weight: Any = "100%") -> Color:
    inverted = Color(255 - color.red, 255 - color.green, 255 - color.blue, color.alpha)
    if percent(weight) >= 1.0:
        return inverted
    return mix(inverted, color, weight)


def opacify(color: Color, amount: Any) -> Color:
    return color.with_alpha(color.alpha + alpha_amount(amount))


def transparentize(color: Color, amount: Any) -> Color:
    return color.with_alpha(color.alpha - alpha_amount(amount))


# ============================================================
# Registry
# ============================================================


def normalize_name(name: str) -> str:
    return name.strip().lower().replace("_", "-")


class AdjustmentRegistry:
    """Map of short adjustment names to primitives.

    Usage::

        registry = AdjustmentRegistry()
        registry.register("lighten", lighten)
        registry.apply("lighten", color, ["10%"])
    """

    def __init__(self) -> None:
        self._funcs: dict[str, Adjustment] = {}

    def register(
        self, name: str, func: Adjustment, aliases: Iterable[str] = ()
    ) -> None:
        for key in (name, *aliases):
            self._funcs[normalize_name(key)] = func
        logger.debug("Registered adjustment %s -> %s", name, func.__name__)

    def get(self, name: str) -> Adjustment:
        if not isinstance(name, str):
            raise InvalidColorDescription(
                f"Adjustment name must be a string, got {name!r}"
            )
        try:
            return self._funcs[normalize_name(name)]
        except KeyError:
            raise UnknownAdjustmentFunction(name) from None

    def apply(self, name: str, color: Color, args: Sequence[Any] = ()) -> Color:
        func = self.get(name)
        try:
            signature = inspect.signature(func)
        except ValueError:
            signature = None  # builtins without introspectable signatures
        try:
            if signature is not None:
                signature.bind(color, *args)
        except TypeError as exc:
            raise InvalidColorDescription(
                f"Bad arguments for {name!r}: {list(args)!r} ({exc})"
            ) from exc
        result = func(color, *args)
        logger.debug("%s(%s, %s) -> %s", name, color, list(args), result)
        return result

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._funcs

    @property
    def names(self) -> list[str]:
        return sorted(self._funcs)


_registry: AdjustmentRegistry | None = None


def get_registry() -> AdjustmentRegistry:
    """Return the default registry, creating it if needed."""
    global _registry
    if _registry is None:
        _registry = _build_default_registry()
    return _registry


def _build_default_registry() -> AdjustmentRegistry:
    registry = AdjustmentRegistry()
    registry.register("lighten", lighten)
    registry.register("darken", darken)
    registry.register("saturate", saturate)
    registry.register("desaturate", desaturate)
    registry.register("adjust-hue", adjust_hue, aliases=["spin"])
    registry.register("grayscale", grayscale, aliases=["greyscale"])
    registry.register("complement", complement)
    registry.register("invert", invert)
    registry.register("mix", mix)
    registry.register("tint", tint)
    registry.register("shade", shade)
    registry.register("opacify", opacify, aliases=["fade-in"])
    registry.register("transparentize", transparentize, aliases=["fade-out"])
    return registry
