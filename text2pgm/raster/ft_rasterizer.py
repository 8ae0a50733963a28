"""FreeType rasterizer for text2pgm.

Renders one glyph at a sub-pixel pen translation with ``FT_Set_Transform``,
so the returned bitmap placement and control box are already in run space.
The transform is stored on the face, so one face must not serve two runs at
the same time.
"""

from __future__ import annotations

import freetype
import numpy as np

from text2pgm.exceptions import MissingGlyphError, RasterizeError
from text2pgm.raster.glyph import BoundingBox, GlyphRaster, Pen

# 16.16 identity matrix
_IDENTITY = (0x10000, 0, 0, 0x10000)


def bitmap_to_array(bitmap) -> np.ndarray:
    """Copy a FreeType bitmap into a ``(rows, width)`` uint8 array.

    8-bit gray bitmaps are copied as-is; 1-bit bitmaps (embedded strikes)
    are expanded to 0/255.
    """
    rows, width, pitch = bitmap.rows, bitmap.width, abs(bitmap.pitch)
    if rows == 0 or width == 0:
        return np.zeros((rows, width), dtype=np.uint8)

    data = np.array(bitmap.buffer, dtype=np.uint8).reshape(rows, pitch)
    if bitmap.pixel_mode == freetype.FT_PIXEL_MODE_MONO:
        return np.unpackbits(data, axis=1)[:, :width] * np.uint8(255)
    if bitmap.pixel_mode != freetype.FT_PIXEL_MODE_GRAY:
        raise RasterizeError(
            "Unsupported bitmap pixel mode",
            details={"pixel_mode": bitmap.pixel_mode},
        )
    return data[:, :width].copy()


class FreeTypeRasterizer:
    """Rasterizer backed by a sized ``freetype.Face``."""

    def __init__(self, face: freetype.Face, load_flags: int = freetype.FT_LOAD_RENDER) -> None:
        self.face = face
        self.load_flags = load_flags

    def rasterize(self, glyph_id: int, pen: Pen) -> GlyphRaster:
        """Render ``glyph_id`` translated by ``pen``.

        Raises:
            MissingGlyphError: If the glyph id is out of range or FreeType
                cannot load it.
        """
        if glyph_id < 0 or glyph_id >= self.face.num_glyphs:
            raise MissingGlyphError(glyph_id, details={"num_glyphs": self.face.num_glyphs})

        self.face.set_transform(freetype.FT_Matrix(*_IDENTITY), freetype.FT_Vector(pen.x, pen.y))
        try:
            self.face.load_glyph(glyph_id, self.load_flags)
        except freetype.FT_Exception as e:
            raise MissingGlyphError(glyph_id, details={"error": str(e)}) from e

        slot = self.face.glyph
        cbox = slot.get_glyph().get_cbox(freetype.FT_GLYPH_BBOX_SUBPIXELS)
        return GlyphRaster(
            bitmap=bitmap_to_array(slot.bitmap),
            left=slot.bitmap_left,
            top=slot.bitmap_top,
            bbox=BoundingBox(cbox.xMin, cbox.yMin, cbox.xMax, cbox.yMax),
            advance_x=slot.advance.x,
            advance_y=slot.advance.y,
            height=slot.metrics.height,
            bearing_y=slot.metrics.horiBearingY,
        )
