"""
Concrete color values and the literal color parser.

``parse_color`` is the only place raw color syntax is understood. It accepts
hex strings, CSS ``rgb()``/``hsl()`` functions, CSS named colors and plain
channel sequences, and always returns a :class:`Color`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any, Sequence

import colour
import numpy as np
import webcolors

from palette_contrast.errors import NotAColor

HEX_RE = re.compile(r"^#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
FUNC_RE = re.compile(r"^(rgba?|hsla?)\(\s*(.*?)\s*\)$", re.IGNORECASE)


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


# ============================================================
# Color value
# ============================================================


@dataclass(frozen=True)
class Color:
    red: int
    green: int
    blue: int
    alpha: float = 1.0

    def __post_init__(self):
        for name in ("red", "green", "blue"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, Integral):
                raise NotAColor(f"{name} channel must be an integer, got {v!r}")
            if not 0 <= v <= 255:
                raise NotAColor(f"{name} channel out of range [0, 255]: {v}")
            object.__setattr__(self, name, int(v))
        a = self.alpha
        if isinstance(a, bool) or not isinstance(a, Real) or not 0.0 <= a <= 1.0:
            raise NotAColor(f"alpha must be a number in [0, 1], got {a!r}")
        object.__setattr__(self, "alpha", float(a))

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    @property
    def hex(self) -> str:
        out = f"#{self.red:02x}{self.green:02x}{self.blue:02x}"
        if self.alpha < 1.0:
            out += f"{int(round(self.alpha * 255)):02x}"
        return out

    def to_unit(self) -> np.ndarray:
        """Channels as floats in [0, 1] (alpha dropped)."""
        return np.array(self.rgb, dtype=float) / 255.0

    @classmethod
    def from_unit(cls, rgb: Sequence[float], alpha: float = 1.0) -> "Color":
        rgb = np.clip(np.asarray(rgb, dtype=float), 0.0, 1.0)
        r, g, b = (rgb * 255.0 + 0.5).astype(int)
        return cls(int(r), int(g), int(b), clamp(float(alpha), 0.0, 1.0))

    def with_alpha(self, alpha: float) -> "Color":
        return Color(self.red, self.green, self.blue, clamp(float(alpha), 0.0, 1.0))

    def __str__(self) -> str:
        return self.hex


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)


# ============================================================
# Parsing
# ============================================================


def _parse_hex(digits: str) -> Color:
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    alpha = int(digits[6:8], 16) / 255.0 if len(digits) == 8 else 1.0
    return Color(r, g, b, alpha)


def _split_args(body: str) -> tuple[list[str], str | None]:
    alpha = None
    if "/" in body:
        body, alpha = (p.strip() for p in body.split("/", 1))
    parts = [p for p in re.split(r"[\s,]+", body) if p]
    return parts, alpha


def _unit_value(token: str, scale: float) -> float:
    """'50%' -> 0.5, '128' with scale 255 -> 0.50196..."""
    if token.endswith("%"):
        return float(token[:-1]) / 100.0
    return float(token) / scale


def _parse_function(kind: str, body: str, raw: str) -> Color:
    parts, alpha_tok = _split_args(body)
    if alpha_tok is None and len(parts) == 4:
        alpha_tok = parts.pop()
    if len(parts) != 3:
        raise NotAColor(f"Expected three channels in {raw!r}")
    try:
        alpha = _unit_value(alpha_tok, 1.0) if alpha_tok is not None else 1.0
        if kind.startswith("rgb"):
            rgb = [_unit_value(p, 255.0) for p in parts]
        else:
            h = float(parts[0].removesuffix("deg")) % 360.0
            s = _unit_value(parts[1], 100.0)
            l = _unit_value(parts[2], 100.0)
            rgb = colour.HSL_to_RGB(np.array([h / 360.0, s, l]))
    except ValueError as exc:
        raise NotAColor(f"Cannot parse color {raw!r}: {exc}") from exc
    return Color.from_unit(rgb, alpha)


def parse_color(value: Any) -> Color:
    """
    Turn a literal color value into a Color.

    Raises NotAColor when the value is not recognisable color syntax.
    """
    if isinstance(value, Color):
        return value

    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        if all(isinstance(v, Real) and not isinstance(v, bool) for v in value):
            return Color(*value)

    if not isinstance(value, str):
        raise NotAColor(f"Not a color: {value!r}")

    raw = value.strip()
    if not raw:
        raise NotAColor("Empty color value")

    m = HEX_RE.match(raw)
    if m:
        return _parse_hex(m.group(1))

    m = FUNC_RE.match(raw)
    if m:
        return _parse_function(m.group(1).lower(), m.group(2), raw)

    lname = raw.lower()
    if lname == "transparent":
        return Color(0, 0, 0, 0.0)
    try:
        return _parse_hex(webcolors.name_to_hex(lname)[1:])
    except ValueError:
        raise NotAColor(f"Not a color: {value!r}") from None
