"""Render command - rasterize text with a font and emit PGM."""

from __future__ import annotations

from pathlib import Path

import click

from text2pgm.api import TextRasterizer
from text2pgm.cli.common import err_console, fail
from text2pgm.config import ADVANCE_SOURCES, DIRECTIONS, SHAPING_DIRECTIONS, Config
from text2pgm.exceptions import Text2PgmError
from text2pgm.raster.pgm import save_image

OUTPUT_FORMATS = ("pgm", "p5", "png")


@click.command()
@click.argument("font", type=click.Path(path_type=Path))
@click.option("--text", "-t", help="Text to render (default: configured sample text)")
@click.option(
    "--text-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the text to render from a UTF-8 file",
)
@click.option("--direction", type=click.Choice(DIRECTIONS), help="Paragraph base direction")
@click.option(
    "--shaping-direction",
    type=click.Choice(SHAPING_DIRECTIONS),
    help="Direction handed to the shaper",
)
@click.option("--script", help="ISO 15924 script tag, e.g. Arab, Hebr, Latn")
@click.option("--language", help="BCP 47 language tag for shaping")
@click.option("--size", "font_size", type=int, help="Font size in points")
@click.option("--dpi", type=int, help="Rendering resolution")
@click.option("--face-index", type=int, help="Face index inside a font collection")
@click.option(
    "--advance-source",
    type=click.Choice(ADVANCE_SOURCES),
    help="Advance the pen by rasterizer or shaper advances",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: PGM on stdout)",
)
@click.option(
    "--format",
    "image_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="pgm",
    show_default=True,
    help="Output format; p5 and png need --output",
)
@click.pass_context
def render(
    ctx: click.Context,
    font: Path,
    text: str | None,
    text_file: Path | None,
    direction: str | None,
    shaping_direction: str | None,
    script: str | None,
    language: str | None,
    font_size: int | None,
    dpi: int | None,
    face_index: int | None,
    advance_source: str | None,
    output: Path | None,
    image_format: str,
) -> None:
    """Render text with FONT and write a grayscale image.

    FONT: Path to a TrueType/OpenType font file.
    """
    if text is not None and text_file is not None:
        fail("--text and --text-file are mutually exclusive")
    if image_format != "pgm" and output is None:
        fail(f"--format {image_format} requires --output")

    if text_file is not None:
        try:
            text = text_file.read_text(encoding="utf-8").rstrip("\n")
        except (OSError, UnicodeDecodeError) as e:
            fail(f"Cannot read text file {text_file}: {e}", e)

    try:
        config = ctx.obj.get("config", Config()).with_overrides(
            direction=direction,
            shaping_direction=shaping_direction,
            script=script,
            language=language,
            font_size=font_size,
            dpi=dpi,
            face_index=face_index,
            advance_source=advance_source,
        )
        result = TextRasterizer(config).render(font, text)
    except Text2PgmError as e:
        fail(str(e), e)

    if output is None:
        click.echo(result.pgm, nl=False)
        return

    try:
        if image_format == "pgm":
            output.write_text(result.pgm, encoding="ascii")
        else:
            save_image(result.canvas, output, image_format)
    except Text2PgmError as e:
        fail(str(e), e)
    except OSError as e:
        fail(f"Cannot write {output}: {e}", e)

    width, height = result.size
    err_console.print(f"[green]Wrote[/green] {output} ({width}x{height})")
