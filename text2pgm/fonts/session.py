"""Font session: the FreeType face and HarfBuzz font for one render."""

from __future__ import annotations

import logging
from pathlib import Path

import freetype
import uharfbuzz as hb

from text2pgm.exceptions import FontLoadError
from text2pgm.raster.ft_rasterizer import FreeTypeRasterizer
from text2pgm.shaping.harfbuzz import HarfBuzzShaper, create_hb_font

logger = logging.getLogger(__name__)


class FontSession:
    """Open a font for FreeType rasterization and HarfBuzz shaping.

    Use as a context manager; both handles are dropped on exit, including
    when the render fails.

    Example:
        >>> with FontSession("NotoNaskhArabic-Regular.ttf") as session:
        ...     run = session.shaper.shape(text, "Arab", "ltr")
    """

    def __init__(
        self,
        path: str | Path,
        font_size: int = 40,
        dpi: int = 72,
        face_index: int = 0,
        language: str | None = None,
    ) -> None:
        self.path = Path(path)
        self.font_size = font_size
        self.dpi = dpi
        self.face_index = face_index
        self.language = language
        self._ft_face: freetype.Face | None = None
        self._hb_font: hb.Font | None = None

    @property
    def scale(self) -> int:
        """Pixel size in 26.6 units."""
        return round(self.font_size * 64 * self.dpi / 72)

    @property
    def is_open(self) -> bool:
        return self._ft_face is not None

    def open(self) -> FontSession:
        """Load the font file into FreeType and HarfBuzz.

        Raises:
            FontLoadError: If the file is missing, unreadable, not a font, or
                cannot be set to the requested size.
        """
        if self.is_open:
            return self
        if not self.path.is_file():
            raise FontLoadError(self.path, details={"error": "no such file"})

        try:
            font_data = self.path.read_bytes()
        except OSError as e:
            raise FontLoadError(self.path, details={"error": str(e)}) from e

        try:
            face = freetype.Face(str(self.path), self.face_index)
            face.set_char_size(self.font_size * 64, 0, self.dpi, self.dpi)
        except freetype.FT_Exception as e:
            raise FontLoadError(self.path, details={"error": str(e)}) from e

        try:
            hb_font = create_hb_font(font_data, self.face_index, self.scale)
        except Exception as e:
            raise FontLoadError(self.path, details={"error": f"HarfBuzz: {e}"}) from e

        self._ft_face = face
        self._hb_font = hb_font
        logger.debug(
            "Opened %s (face %d, %d glyphs) at %dpt/%ddpi",
            self.path,
            self.face_index,
            face.num_glyphs,
            self.font_size,
            self.dpi,
        )
        return self

    def close(self) -> None:
        """Release both handles. Safe to call more than once."""
        if self.is_open:
            logger.debug("Closing %s", self.path)
        self._ft_face = None
        self._hb_font = None

    def __enter__(self) -> FontSession:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _require_open(self) -> None:
        if not self.is_open:
            raise FontLoadError(self.path, details={"error": "session is not open"})

    @property
    def face(self) -> freetype.Face:
        self._require_open()
        return self._ft_face

    @property
    def hb_font(self) -> hb.Font:
        self._require_open()
        return self._hb_font

    @property
    def rasterizer(self) -> FreeTypeRasterizer:
        return FreeTypeRasterizer(self.face)

    @property
    def shaper(self) -> HarfBuzzShaper:
        return HarfBuzzShaper(self.hb_font, language=self.language)
