"""Rich table rendering for the command line."""

from __future__ import annotations

from typing import Mapping, Sequence

import pandas as pd
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from palette_contrast.color import Color
from palette_contrast.contrast import THRESHOLDS, Candidate, luminance

LEVELS = ["aa-large", "aa", "aaa"]


def swatch(color: Color) -> Text:
    r, g, b = color.rgb
    return Text("   ", style=Style(bgcolor=f"#{r:02x}{g:02x}{b:02x}"))


def mark(ok: bool) -> str:
    return "[green]✓[/green]" if ok else "[red]✗[/red]"


def render_colors(colors: Mapping[str, Color], console: Console | None = None) -> None:
    console = console or Console()
    table = Table(title="Resolved colors")

    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Hex", no_wrap=True)
    table.add_column(" ")
    table.add_column("Luminance", justify="right")

    for name, color in colors.items():
        table.add_row(name, color.hex, swatch(color), f"{luminance(color):.4f}")

    console.print(table)


def render_ranking(
    subject: Color,
    ranked: Sequence[Candidate],
    best: Candidate,
    console: Console | None = None,
) -> None:
    console = console or Console()
    table = Table(title=f"Contrast against {subject.hex}")

    table.add_column("Option", style="cyan", no_wrap=True)
    table.add_column("Hex", no_wrap=True)
    table.add_column(" ")
    table.add_column("Ratio", justify="right")
    for level in LEVELS:
        table.add_column(level.upper(), justify="center")
    table.add_column("Best", justify="center")

    for cand in ranked:
        table.add_row(
            str(cand.option),
            cand.color.hex,
            swatch(cand.color),
            f"{cand.ratio:.2f}:1",
            *(mark(cand.ratio >= THRESHOLDS[level]) for level in LEVELS),
            "★" if cand is best else "",
        )

    console.print(table)


def render_report(df: pd.DataFrame, background: Color, console: Console | None = None) -> None:
    console = console or Console()
    table = Table(title=f"Palette report on {background.hex}")

    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Hex", no_wrap=True)
    table.add_column("Ratio", justify="right")
    for level in LEVELS:
        table.add_column(level.upper(), justify="center")

    for row in df.itertuples(index=False):
        table.add_row(
            row.name,
            row.hex,
            f"{row.ratio:.2f}:1",
            *(mark(bool(getattr(row, level.replace("-", "_")))) for level in LEVELS),
        )

    console.print(table)
