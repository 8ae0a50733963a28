"""text2pgm: Render complex-script text to a grayscale PGM raster.

This library provides a small text-layout-to-bitmap pipeline:
- BiDi reordering into visual order (python-bidi)
- HarfBuzz text shaping for contextual forms and ligatures
- FreeType glyph rasterization at sub-pixel pen positions
- Tight canvas sizing, bitwise-OR compositing and plain-text PGM output

Example:
    >>> from text2pgm import TextRasterizer
    >>> result = TextRasterizer().render("NotoNaskhArabic-Regular.ttf", "مرحبا")
    >>> print(result.pgm)
"""

from text2pgm.api import RenderResult, Stage, TextRasterizer, render_text
from text2pgm.config import Config
from text2pgm.exceptions import (
    CanvasError,
    ConfigError,
    FontLoadError,
    MissingGlyphError,
    PipelineError,
    RasterizeError,
    ReorderError,
    ShapingError,
    Text2PgmError,
)

__version__ = "0.1.0"

__all__ = [
    # Main API
    "TextRasterizer",
    "RenderResult",
    "Stage",
    "render_text",
    "Config",
    # Exceptions
    "Text2PgmError",
    "ConfigError",
    "FontLoadError",
    "PipelineError",
    "ReorderError",
    "ShapingError",
    "RasterizeError",
    "CanvasError",
    "MissingGlyphError",
    # Metadata
    "__version__",
]
