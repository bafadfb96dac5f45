"""
Palette files: loading and merging.

Palettes are plain ``{name: description}`` mappings. Two on-disk formats are
read:

* JSON objects, where values are any color description (strings, channel
  lists, ``[origin, [[name, args], ...]]`` pairs or ``{"origin", "adjust"}``
  objects);
* Lua theme tables of ``name = "#rrggbb"`` / ``name = '#rrggbb'`` lines, as
  written for Catppuccin-style Neovim themes.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Mapping

from palette_contrast.errors import PaletteError

logger = logging.getLogger("palette_contrast.palette")

LUA_KV_RE = re.compile(r"""([\w-]+)\s*=\s*["'](#?[0-9a-fA-F]{3,8})["']""")


def merge_palettes(*palettes: Mapping[str, Any]) -> dict[str, Any]:
    """Union of all keys; later palettes win on duplicates."""
    merged: dict[str, Any] = {}
    for pal in palettes:
        merged.update(pal)
    return merged


def parse_lua_palette(text: str) -> dict[str, str]:
    colors = {}
    for name, val in LUA_KV_RE.findall(text):
        colors[name] = val.lower() if val.startswith("#") else f"#{val.lower()}"
    return colors


def load_palette(path: str | Path) -> dict[str, Any]:
    """
    Load a palette file into a dict:
    { color_name: description }
    """
    path = Path(path)
    if not path.is_file():
        raise PaletteError(f"Palette file not found: {path}")
    text = path.read_text(encoding="utf-8")

    if path.suffix == ".lua":
        colors: Any = parse_lua_palette(text)
    else:
        try:
            colors = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PaletteError(f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(colors, dict):
            raise PaletteError(f"{path} must hold a JSON object of colors")

    if not colors:
        raise PaletteError(f"No colors found in {path}")

    logger.info("Loaded %d colors from %s", len(colors), path)
    return colors


def load_palettes(paths: list[Path]) -> dict[str, Any]:
    return merge_palettes(*(load_palette(p) for p in paths))
