"""Draw pass: composite glyph coverage onto the canvas.

Coverage is merged with a bitwise OR, a saturating union. This is not alpha
blending: where two antialiased edges overlap, the result can look harder
than either glyph alone. Keep it that way; output is compared byte for byte.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from text2pgm.raster.canvas import Canvas
from text2pgm.raster.glyph import GlyphRaster, Pen, Rasterizer, walk_run
from text2pgm.raster.metrics import Measurement

if TYPE_CHECKING:
    from text2pgm.shaping.harfbuzz import GlyphRun

logger = logging.getLogger(__name__)


def draw_bitmap(canvas: Canvas, bitmap: np.ndarray, x: int, y: int) -> int:
    """OR ``bitmap`` into ``canvas`` with its top-left corner at column ``x``, row ``y``.

    Pixels falling outside the canvas are dropped.

    Returns:
        Number of source pixels that were clipped.
    """
    rows, cols = bitmap.shape
    if rows == 0 or cols == 0:
        return 0

    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + cols, canvas.width), min(y + rows, canvas.height)
    if x0 >= x1 or y0 >= y1:
        return rows * cols

    src = bitmap[y0 - y : y1 - y, x0 - x : x1 - x]
    np.bitwise_or(canvas.pixels[y0:y1, x0:x1], src, out=canvas.pixels[y0:y1, x0:x1])
    return rows * cols - src.size


def place_glyph(canvas: Canvas, raster: GlyphRaster, origin_x: int = 0) -> int:
    """Draw one raster; its bitmap's top-left lands at ``(left - origin_x, height - top)``.

    ``top`` counts rows upward from the canvas bottom edge while canvas rows
    count downward from the top edge.
    """
    return draw_bitmap(canvas, raster.bitmap, raster.left - origin_x, canvas.height - raster.top)


def composite_run(
    run: GlyphRun,
    rasterizer: Rasterizer,
    canvas: Canvas,
    measurement: Measurement,
    advance_source: str = "rasterizer",
) -> None:
    """Re-render every glyph of ``run`` and merge it into ``canvas`` in place.

    The draw pen starts at ``(0, above_origin_shift)``, which lifts the
    baseline so the deepest descender ends on the last canvas row.
    """
    if canvas.is_empty:
        return

    start = Pen(0, measurement.above_origin_shift)
    clipped = 0
    for _pen, raster in walk_run(run, rasterizer, start, advance_source):
        clipped += place_glyph(canvas, raster, measurement.origin_x)

    if clipped:
        logger.debug("Clipped %d glyph pixels at the canvas edges", clipped)
