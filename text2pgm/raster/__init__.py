"""Glyph rasterization and compositing for text2pgm.

This subpackage provides:
- FreeType glyph rasterization at sub-pixel pen positions
- The measure pass (bounding box and baseline shift)
- The coverage canvas and the draw pass (bitwise-OR compositing)
- PGM serialization
"""

from text2pgm.raster.canvas import Canvas
from text2pgm.raster.compositor import composite_run, draw_bitmap, place_glyph
from text2pgm.raster.ft_rasterizer import FreeTypeRasterizer
from text2pgm.raster.glyph import (
    UNITS_PER_PIXEL,
    BoundingBox,
    GlyphRaster,
    Pen,
    Rasterizer,
    rasterize_or_blank,
    walk_run,
)
from text2pgm.raster.metrics import Measurement, measure_run
from text2pgm.raster.pgm import parse_pgm, save_image, serialize_pgm, write_pgm

__all__ = [
    "Canvas",
    "composite_run",
    "draw_bitmap",
    "place_glyph",
    "FreeTypeRasterizer",
    "UNITS_PER_PIXEL",
    "BoundingBox",
    "GlyphRaster",
    "Pen",
    "Rasterizer",
    "rasterize_or_blank",
    "walk_run",
    "Measurement",
    "measure_run",
    "parse_pgm",
    "save_image",
    "serialize_pgm",
    "write_pgm",
]
