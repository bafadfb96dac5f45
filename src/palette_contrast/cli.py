"""
Command line entry point: ``palette-contrast``.

Palettes are loaded with ``--palette`` (repeatable, merged in order, later
files win) and shared by every subcommand.
"""

from __future__ import annotations

import logging
import re
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import click
import pandas as pd
from rich.console import Console
from rich.logging import RichHandler

from palette_contrast.config import get_settings
from palette_contrast.contrast import (
    THRESHOLDS,
    best_candidate,
    check_contrast,
    luminance,
    rank_contrast,
    ratio_of,
)
from palette_contrast.display import render_colors, render_ranking, render_report
from palette_contrast.errors import PaletteContrastError
from palette_contrast.palette import load_palettes
from palette_contrast.resolve import Resolver

logger = logging.getLogger("palette_contrast.cli")

# commas inside rgb(...)/hsl(...) belong to the color
ARG_SPLIT_RE = re.compile(r",(?![^()]*\))")


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@contextmanager
def library_errors():
    try:
        yield
    except PaletteContrastError as exc:
        raise click.ClickException(str(exc)) from exc


def parse_adjust_option(value: str) -> tuple[str, list[str]]:
    """'darken:15%' -> ('darken', ['15%']); 'mix:white,20%' -> ('mix', ['white', '20%'])"""
    name, _, rest = value.partition(":")
    args = [a.strip() for a in ARG_SPLIT_RE.split(rest) if a.strip()] if rest else []
    return name.strip(), args


# ============================================================
# CLI
# ============================================================


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--palette",
    "palette_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Palette file (.json or .lua); repeat to merge, later files win.",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level [default: from settings]",
)
@click.pass_context
def main(ctx: click.Context, palette_files: tuple[Path, ...], log_level: Optional[str]):
    """
    Resolve palette colors and check WCAG contrast.
    """
    setup_logging(log_level or get_settings().log_level)
    with library_errors():
        ctx.obj = load_palettes(list(palette_files)) if palette_files else {}


@main.command("resolve")
@click.argument("descriptions", nargs=-1)
@click.option(
    "--adjust",
    "adjustments",
    multiple=True,
    help="Adjustment applied to every color, e.g. 'darken:15%'. Repeatable.",
)
@click.option("--no-render", is_flag=True, default=False, help="Plain output.")
@click.pass_obj
def resolve_cmd(palette: dict, descriptions: tuple[str, ...], adjustments, no_render: bool):
    """
    Resolve palette names or literal colors (all palette entries if none given).
    """
    names = list(descriptions) or list(palette)
    if not names:
        raise click.ClickException("Nothing to resolve: give colors or --palette")
    steps = [parse_adjust_option(a) for a in adjustments]

    resolver = Resolver(palette)
    with library_errors():
        colors = {
            name: resolver.resolve((name, steps) if steps else name) for name in names
        }

    if no_render:
        for name, color in colors.items():
            click.echo(f"{name}\t{color.hex}")
    else:
        render_colors(colors)


@main.command("ratio")
@click.argument("first")
@click.argument("second")
@click.option(
    "--require",
    default=None,
    help=f"Minimum ratio: {', '.join(k.upper() for k in THRESHOLDS)} or a number.",
)
@click.pass_obj
def ratio_cmd(palette: dict, first: str, second: str, require: Optional[str]):
    """
    Contrast ratio between two colors; exits 1 when --require is not met.
    """
    with library_errors():
        check = check_contrast(first, second, require, palette)

    click.echo(f"{check.ratio:.2f}:1")
    if not check.passes:
        click.echo(f"✗ below {require} ({check.minimum:g}:1)", err=True)
        sys.exit(1)


@main.command("pick")
@click.argument("subject")
@click.argument("options", nargs=-1)
@click.option("--no-render", is_flag=True, default=False, help="Plain output.")
@click.pass_obj
def pick_cmd(palette: dict, subject: str, options: tuple[str, ...], no_render: bool):
    """
    Pick the option with the best contrast against SUBJECT.

    Without options the palette's contrast-light/contrast-dark (or white and
    black) are compared.
    """
    with library_errors():
        ranked = rank_contrast(subject, list(options) or None, palette)
        subject_color = Resolver(palette).resolve(subject)
    best = best_candidate(ranked)

    if no_render:
        click.echo(best.color.hex)
    else:
        render_ranking(subject_color, ranked, best)


@main.command("report")
@click.option("--background", required=True, help="Background color or palette name.")
@click.option(
    "--out",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the report as CSV.",
)
@click.option("--no-render", is_flag=True, default=False, help="Disable rich table output.")
@click.pass_obj
def report_cmd(palette: dict, background: str, out: Optional[Path], no_render: bool):
    """
    Contrast of every palette entry against a background.
    """
    if not palette:
        raise click.ClickException("report needs at least one --palette")

    resolver = Resolver(palette)
    rows = []
    with library_errors():
        bg = resolver.resolve(background)
        bg_lum = luminance(bg)
        for name in palette:
            color = resolver.resolve(name)
            ratio = ratio_of(bg_lum, luminance(color))
            rows.append(
                {
                    "name": name,
                    "hex": color.hex,
                    "luminance": luminance(color),
                    "ratio": ratio,
                    "aa_large": ratio >= THRESHOLDS["aa-large"],
                    "aa": ratio >= THRESHOLDS["aa"],
                    "aaa": ratio >= THRESHOLDS["aaa"],
                }
            )

    logger.info("Report on %s: %d entries", bg.hex, len(rows))
    df = pd.DataFrame(rows).sort_values("ratio", ascending=False, kind="stable")

    if out is not None:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(df.to_csv(index=False))
        click.echo(f"✓ Wrote {out} ({len(df)} rows)")

    if not no_render:
        render_report(df, bg)


if __name__ == "__main__":
    main()
