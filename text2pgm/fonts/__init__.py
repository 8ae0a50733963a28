"""Font handling for text2pgm.

This subpackage provides:
- FontSession: scoped FreeType face + HarfBuzz font for one render
- Font reports (names, metrics, cmap coverage) via fontTools
"""

from text2pgm.fonts.report import FontInfo, read_font_info
from text2pgm.fonts.session import FontSession

__all__ = ["FontInfo", "FontSession", "read_font_info"]
