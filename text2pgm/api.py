"""High-level API: render logical-order text to a PGM raster.

Stages run strictly in order and each consumes only the previous stage's
output:

    RAW_TEXT -> REORDERED -> SHAPED -> MEASURED -> COMPOSITED -> SERIALIZED

Any failure aborts the render; there is no partial output and no retry.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from text2pgm.config import Config
from text2pgm.exceptions import PipelineError, Text2PgmError
from text2pgm.fonts.session import FontSession
from text2pgm.raster.canvas import Canvas
from text2pgm.raster.compositor import composite_run
from text2pgm.raster.glyph import Rasterizer
from text2pgm.raster.metrics import Measurement, measure_run
from text2pgm.raster.pgm import serialize_pgm
from text2pgm.shaping.bidi import BidiReorderer, Reorderer
from text2pgm.shaping.harfbuzz import GlyphRun, Shaper

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Stage(enum.IntEnum):
    RAW_TEXT = 0
    REORDERED = 1
    SHAPED = 2
    MEASURED = 3
    COMPOSITED = 4
    SERIALIZED = 5


@dataclass
class RenderResult:
    """Outputs of one render, filled in stage by stage."""

    text: str
    stage: Stage = Stage.RAW_TEXT
    visual_text: str | None = None
    glyph_run: GlyphRun | None = None
    measurement: Measurement | None = None
    canvas: Canvas | None = None
    pgm: str | None = None

    @property
    def success(self) -> bool:
        return self.stage is Stage.SERIALIZED

    @property
    def size(self) -> tuple[int, int]:
        if self.canvas is None:
            return (0, 0)
        return self.canvas.size


class TextRasterizer:
    """Render text in a complex script to a single grayscale raster.

    Example:
        >>> rasterizer = TextRasterizer(Config(font_size=32))
        >>> result = rasterizer.render("NotoNaskhArabic-Regular.ttf", "أهلاً بالعالم")
        >>> print(result.pgm)
    """

    def __init__(
        self,
        config: Config | None = None,
        reorderer: Reorderer | None = None,
    ) -> None:
        self.config = config or Config()
        self.reorderer = reorderer or BidiReorderer()

    def render(self, font_path: str | Path, text: str | None = None) -> RenderResult:
        """Render ``text`` (default: the configured text) with the font at ``font_path``.

        Raises:
            FontLoadError: If the font cannot be opened.
            PipelineError: If any stage fails.
        """
        cfg = self.config
        with FontSession(
            font_path,
            font_size=cfg.font_size,
            dpi=cfg.dpi,
            face_index=cfg.face_index,
            language=cfg.language,
        ) as session:
            return self.render_with(
                cfg.text if text is None else text,
                shaper=session.shaper,
                rasterizer=session.rasterizer,
            )

    def render_with(self, text: str, shaper: Shaper, rasterizer: Rasterizer) -> RenderResult:
        """Run every stage with explicit collaborators."""
        cfg = self.config
        result = RenderResult(text=text)

        result.visual_text = self._run_stage(
            result, Stage.REORDERED, lambda: self.reorderer.reorder(text, cfg.direction)
        )
        result.glyph_run = self._run_stage(
            result,
            Stage.SHAPED,
            lambda: shaper.shape(result.visual_text, cfg.script, cfg.shaping_direction),
        )
        result.measurement = self._run_stage(
            result,
            Stage.MEASURED,
            lambda: measure_run(result.glyph_run, rasterizer, cfg.advance_source),
        )
        if result.measurement.is_empty:
            logger.warning(
                "Nothing to draw (%d glyphs, %d missing); rendering an empty 0x0 image",
                result.measurement.glyph_count,
                result.measurement.blank_count,
            )
        result.canvas = self._run_stage(
            result, Stage.COMPOSITED, lambda: self._composite(result, rasterizer)
        )
        result.pgm = self._run_stage(
            result, Stage.SERIALIZED, lambda: serialize_pgm(result.canvas)
        )
        return result

    def _composite(self, result: RenderResult, rasterizer: Rasterizer) -> Canvas:
        canvas = Canvas.for_box(result.measurement.bbox)
        composite_run(
            result.glyph_run,
            rasterizer,
            canvas,
            result.measurement,
            self.config.advance_source,
        )
        return canvas

    def _run_stage(self, result: RenderResult, stage: Stage, func: Callable[[], T]) -> T:
        logger.debug("Stage %s", stage.name)
        try:
            value = func()
        except PipelineError as e:
            if e.stage is None:
                e.stage = stage
            raise
        except Text2PgmError:
            raise
        except Exception as e:
            raise PipelineError(f"{stage.name} stage failed: {e}", stage=stage) from e
        result.stage = stage
        return value


def render_text(
    font_path: str | Path,
    text: str | None = None,
    config: Config | None = None,
) -> str:
    """Render text and return the plain-text PGM."""
    return TextRasterizer(config).render(font_path, text).pgm
