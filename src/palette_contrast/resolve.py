"""
Resolve color descriptions against a palette.

A description is one of:

* a :class:`Color`, or a 3/4-item channel sequence -- already concrete;
* a string -- a palette name when the palette holds it, otherwise literal
  color syntax handed to :func:`parse_color`;
* ``(origin, adjustments)`` or ``{"origin": ..., "adjust": [...]}`` -- the
  origin is resolved first, then each ``(name, args)`` adjustment is applied
  left to right through the adjustment registry.

Palette entries may themselves be any of the above, so resolution recurses.
The names being expanded are carried down the recursion as a tuple; meeting
one of them again raises :class:`CyclicColorReference`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from numbers import Real
from typing import Any, Sequence

from palette_contrast.adjust import AdjustmentRegistry, get_registry
from palette_contrast.color import Color, parse_color
from palette_contrast.errors import CyclicColorReference, InvalidColorDescription

logger = logging.getLogger("palette_contrast.resolve")

Palette = Mapping[str, Any]
AdjustmentStep = tuple[str, tuple]


def _is_channels(value: Any) -> bool:
    return (
        isinstance(value, (tuple, list))
        and len(value) in (3, 4)
        and all(isinstance(v, Real) and not isinstance(v, bool) for v in value)
    )


def _parse_step(step: Any) -> AdjustmentStep:
    if isinstance(step, str):
        raise InvalidColorDescription(
            f"Adjustment must be a (name, args) pair, got bare string {step!r}"
        )
    if not isinstance(step, (tuple, list)) or len(step) not in (1, 2):
        raise InvalidColorDescription(
            f"Adjustment must be a (name, args) pair, got {step!r}"
        )
    name = step[0]
    if not isinstance(name, str):
        raise InvalidColorDescription(f"Adjustment name must be a string: {step!r}")
    args = step[1] if len(step) == 2 else ()
    if not isinstance(args, (tuple, list)):
        raise InvalidColorDescription(
            f"Arguments for {name!r} must be a list, got {args!r}"
        )
    return name, tuple(args)


def split_description(description: Any) -> tuple[Any, list[AdjustmentStep]]:
    """
    Split a description into its origin and its (possibly empty) adjustments.
    """
    if isinstance(description, Mapping):
        if "origin" not in description:
            raise InvalidColorDescription(
                f"Color description mapping needs an 'origin' key: {description!r}"
            )
        origin = description["origin"]
        adjustments = description.get("adjust", ())
    elif isinstance(description, (tuple, list)) and not _is_channels(description):
        if len(description) != 2:
            raise InvalidColorDescription(
                f"Expected (origin, adjustments), got {description!r}"
            )
        origin, adjustments = description
    else:
        return description, []

    if origin is None:
        raise InvalidColorDescription(f"Missing origin in {description!r}")
    if isinstance(adjustments, str) or not isinstance(adjustments, (tuple, list)):
        raise InvalidColorDescription(
            f"Adjustments must be a list of (name, args) pairs, got {adjustments!r}"
        )
    return origin, [_parse_step(s) for s in adjustments]


class Resolver:
    """Resolves descriptions against one read-only palette.

    The palette is never written to; a Resolver can be shared between
    threads since the in-progress name chain lives on the call stack.
    """

    def __init__(
        self,
        palette: Palette | None = None,
        registry: AdjustmentRegistry | None = None,
    ) -> None:
        self.palette: Palette = palette if palette is not None else {}
        self.registry = registry if registry is not None else get_registry()

    def resolve(self, description: Any) -> Color:
        return self._resolve(description, ())

    def _expand(self, name: str, chain: tuple[str, ...]) -> tuple[Any, tuple[str, ...]]:
        if name in chain:
            raise CyclicColorReference(chain + (name,))
        logger.debug("Expanding %s (chain: %s)", name, " -> ".join(chain) or "-")
        return self.palette[name], chain + (name,)

    def _resolve(self, description: Any, chain: tuple[str, ...]) -> Color:
        if isinstance(description, str) and description in self.palette:
            description, chain = self._expand(description, chain)

        origin, adjustments = split_description(description)

        if isinstance(origin, str) and origin in self.palette:
            color = self._resolve(origin, chain)
        elif isinstance(origin, (Mapping, tuple, list)) and not _is_channels(origin):
            color = self._resolve(origin, chain)
        else:
            color = parse_color(origin)

        for name, args in adjustments:
            color = self.registry.apply(name, color, args)
        return color


def resolve(
    description: Any,
    palette: Palette | None = None,
    registry: AdjustmentRegistry | None = None,
) -> Color:
    """Resolve ``description`` against ``palette`` into a concrete Color."""
    return Resolver(palette, registry).resolve(description)


def resolve_all(
    names: Sequence[str],
    palette: Palette,
    registry: AdjustmentRegistry | None = None,
) -> dict[str, Color]:
    resolver = Resolver(palette, registry)
    return {name: resolver.resolve(name) for name in names}
