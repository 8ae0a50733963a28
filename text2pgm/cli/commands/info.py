"""Info command - report a font's identity and coverage of a text."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from text2pgm.cli.common import console, fail
from text2pgm.config import Config
from text2pgm.exceptions import FontLoadError
from text2pgm.fonts.report import read_font_info


@click.command()
@click.argument("font", type=click.Path(path_type=Path))
@click.option("--text", "-t", help="Text to check coverage for (default: configured text)")
@click.option("--face-index", type=int, help="Face index inside a font collection")
@click.pass_context
def info(ctx: click.Context, font: Path, text: str | None, face_index: int | None) -> None:
    """Show FONT's names and metrics and the characters it cannot render."""
    config = ctx.obj.get("config", Config())
    if text is None:
        text = config.text
    if face_index is None:
        face_index = config.face_index

    try:
        font_info = read_font_info(font, face_index)
    except FontLoadError as e:
        fail(str(e), e)

    table = Table(title=f"Font {font.name}")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Family", font_info.family)
    table.add_row("Style", font_info.style)
    table.add_row("PostScript name", font_info.postscript_name)
    table.add_row("Face index", str(font_info.face_index))
    table.add_row("Units per em", str(font_info.units_per_em))
    table.add_row("Glyphs", str(font_info.num_glyphs))
    table.add_row("Mapped characters", str(len(font_info.codepoints)))
    console.print(table)

    missing = font_info.missing_characters(text)
    if missing:
        listed = " ".join(f"U+{ord(c):04X}" for c in missing)
        console.print(f"[yellow]Missing {len(missing)} characters:[/yellow] {listed}")
    else:
        console.print("[green]All characters covered[/green]")
