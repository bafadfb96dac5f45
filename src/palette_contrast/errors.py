"""
Error taxonomy for palette resolution and contrast checks.

Every failure is raised synchronously to the caller of the top-level
operation; nothing here is retried or degraded into a partial result.
"""


class PaletteContrastError(Exception):
    """Base class for all palette-contrast failures."""


class UnknownAdjustmentFunction(PaletteContrastError, KeyError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown adjustment function: {self.name!r}"


class InvalidColorDescription(PaletteContrastError, ValueError):
    pass


class CyclicColorReference(PaletteContrastError):
    def __init__(self, chain: tuple[str, ...]):
        self.chain = tuple(chain)
        super().__init__("Cyclic color reference: " + " -> ".join(self.chain))


class UnknownContrastStandard(PaletteContrastError, ValueError):
    pass


class InsufficientContrastOptions(PaletteContrastError, ValueError):
    pass


class NotAColor(PaletteContrastError, ValueError):
    pass


class PaletteError(PaletteContrastError):
    """Palette file could not be read or holds no colors."""
