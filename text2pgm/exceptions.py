"""Exception hierarchy for text2pgm.

All errors raised by the pipeline derive from Text2PgmError so callers
(and the CLI) can catch a single type. Fatal errors abort the render;
MissingGlyphError is the one non-fatal condition and is absorbed by the
measure and draw passes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class Text2PgmError(Exception):
    """Base exception for text2pgm."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        extra = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({extra})"


class ConfigError(Text2PgmError):
    """Invalid configuration file or value."""


class FontLoadError(Text2PgmError):
    """The font resource could not be opened, parsed or sized."""

    def __init__(self, path: str | Path, details: dict[str, Any] | None = None) -> None:
        self.path = Path(path)
        super().__init__(f"Could not load the font '{path}'", details)


class PipelineError(Text2PgmError):
    """A render stage failed. ``stage`` names the stage that was running."""

    def __init__(
        self,
        message: str,
        stage: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.stage = stage


class ReorderError(PipelineError):
    """The bidirectional reordering collaborator failed."""


class ShapingError(PipelineError):
    """The shaping collaborator failed."""


class RasterizeError(PipelineError):
    """The rasterizer failed for a reason other than a missing glyph."""


class CanvasError(Text2PgmError):
    """The canvas cannot be allocated or saved."""


class MissingGlyphError(Text2PgmError):
    """The rasterizer cannot render a glyph identifier.

    Not fatal: the glyph keeps its advance and draws nothing.
    """

    def __init__(self, glyph_id: int, details: dict[str, Any] | None = None) -> None:
        self.glyph_id = glyph_id
        super().__init__(f"Glyph {glyph_id} cannot be rendered", details)
