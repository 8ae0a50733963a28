"""Text shaping for text2pgm.

This subpackage provides:
- BiDi (bidirectional) reordering into visual order
- HarfBuzz text shaping into glyph runs
"""

from text2pgm.shaping.bidi import (
    BidiReorderer,
    Reorderer,
    apply_bidi_algorithm,
    detect_base_direction,
    is_rtl_text,
)
from text2pgm.shaping.harfbuzz import (
    GlyphRun,
    HarfBuzzShaper,
    ShapedGlyph,
    Shaper,
    create_hb_font,
)

__all__ = [
    "BidiReorderer",
    "Reorderer",
    "apply_bidi_algorithm",
    "detect_base_direction",
    "is_rtl_text",
    "GlyphRun",
    "HarfBuzzShaper",
    "ShapedGlyph",
    "Shaper",
    "create_hb_font",
]
