"""Measure pass: size the canvas before anything is drawn."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from text2pgm.raster.glyph import (
    BoundingBox,
    Pen,
    Rasterizer,
    to_pixels_floor,
    union_boxes,
    walk_run,
)

if TYPE_CHECKING:
    from text2pgm.shaping.harfbuzz import GlyphRun

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Measurement:
    """Result of the measure pass.

    Attributes:
        bbox: Union of every glyph's control box in run space, or None when
            there is nothing to draw: an empty run, every glyph missing, or
            only zero-area boxes (a run of spaces).
        above_origin_shift: Largest ``height - bearing_y`` over the measured
            glyphs, in 26.6 units. The draw pen starts this far above the
            canvas bottom so the deepest descender still fits.
        glyph_count: Glyphs traversed.
        blank_count: Glyphs that degraded to blanks.
    """

    bbox: BoundingBox | None
    above_origin_shift: int = 0
    glyph_count: int = 0
    blank_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.bbox is None

    @property
    def canvas_size(self) -> tuple[int, int]:
        """``(width, height)`` in pixels; ``(0, 0)`` for an empty box."""
        if self.bbox is None:
            return (0, 0)
        return (self.bbox.pixel_width, self.bbox.pixel_height)

    @property
    def origin_x(self) -> int:
        """Pixel column of the box's left edge in run space."""
        if self.bbox is None:
            return 0
        return to_pixels_floor(self.bbox.x_min)


def measure_run(
    run: GlyphRun,
    rasterizer: Rasterizer,
    advance_source: str = "rasterizer",
) -> Measurement:
    """Walk the run once, accumulating the bounding box and baseline shift."""
    bbox: BoundingBox | None = None
    shift: int | None = None
    blanks = 0

    for _pen, raster in walk_run(run, rasterizer, Pen(0, 0), advance_source):
        if raster.is_blank:
            blanks += 1
            continue
        bbox = union_boxes(bbox, raster.bbox)
        shift = raster.descent if shift is None else max(shift, raster.descent)

    if bbox is not None and not bbox.has_area:
        bbox = None

    measurement = Measurement(
        bbox=bbox,
        above_origin_shift=shift or 0,
        glyph_count=len(run),
        blank_count=blanks,
    )
    logger.debug(
        "Measured %d glyphs: bbox=%s shift=%d",
        measurement.glyph_count,
        measurement.bbox,
        measurement.above_origin_shift,
    )
    return measurement
