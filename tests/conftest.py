"""Shared fixtures for the palette-contrast test suite."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import pytest

from palette_contrast.config import get_settings


# ---------------------------------------------------------------------------
# Settings isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Drop PALETTE_CONTRAST_* variables and the cached Settings around each test."""
    for key in list(os.environ):
        if key.startswith("PALETTE_CONTRAST_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Palettes
# ---------------------------------------------------------------------------

BRAND_PALETTE: dict[str, Any] = {
    "brand": "#3366cc",
    "brand-dark": ["brand", [["darken", ["10%"]]]],
    "button": "brand-dark",
    "link": "#ff0000",
    "focus": {"origin": "brand", "adjust": [["lighten", ["20%"]]]},
    "text": "#222222",
    "muted": "#999999",
}

LUA_THEME = """\
local painting = {
  base = '#1e1e2e',
  surface1 = '#45475a',
  text = "#cdd6f4",
  red = 'f38ba8',
}
"""


@pytest.fixture
def brand_palette() -> dict[str, Any]:
    return json.loads(json.dumps(BRAND_PALETTE))


@pytest.fixture
def palette_json(tmp_path: Path, brand_palette) -> Path:
    path = tmp_path / "brand.json"
    path.write_text(json.dumps(brand_palette))
    return path


@pytest.fixture
def palette_lua(tmp_path: Path) -> Path:
    path = tmp_path / "painting_theme.lua"
    path.write_text(LUA_THEME)
    return path
