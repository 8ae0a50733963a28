"""Glyph-level data model shared by the measure and draw passes.

Coordinates are 26.6 fixed point (64 units per pixel) unless a field says
pixels. Y grows upward, as in font space.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

import numpy as np

from text2pgm.exceptions import MissingGlyphError

if TYPE_CHECKING:
    from text2pgm.shaping.harfbuzz import GlyphRun

logger = logging.getLogger(__name__)

UNITS_PER_PIXEL = 64


def to_pixels_floor(value: int) -> int:
    return value // UNITS_PER_PIXEL


def to_pixels_ceil(value: int) -> int:
    return -(-value // UNITS_PER_PIXEL)


@dataclass(frozen=True)
class Pen:
    """Pen position in 26.6 units. Immutable; ``advance`` returns a new pen."""

    x: int = 0
    y: int = 0

    def advance(self, dx: int, dy: int) -> Pen:
        return Pen(self.x + dx, self.y + dy)

    @property
    def pixel_x(self) -> int:
        return to_pixels_floor(self.x)

    @property
    def pixel_y(self) -> int:
        return to_pixels_floor(self.y)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in 26.6 units. An empty box is ``None``, never a BoundingBox."""

    x_min: int
    y_min: int
    x_max: int
    y_max: int

    def __post_init__(self) -> None:
        if self.x_min > self.x_max or self.y_min > self.y_max:
            raise ValueError(
                f"Inverted bounding box ({self.x_min}, {self.y_min}, {self.x_max}, {self.y_max})"
            )

    def union(self, other: BoundingBox | None) -> BoundingBox:
        if other is None:
            return self
        return BoundingBox(
            min(self.x_min, other.x_min),
            min(self.y_min, other.y_min),
            max(self.x_max, other.x_max),
            max(self.y_max, other.y_max),
        )

    @property
    def has_area(self) -> bool:
        return self.x_max > self.x_min and self.y_max > self.y_min

    @property
    def pixel_width(self) -> int:
        return to_pixels_ceil(self.x_max - self.x_min)

    @property
    def pixel_height(self) -> int:
        return to_pixels_ceil(self.y_max - self.y_min)


def union_boxes(box: BoundingBox | None, other: BoundingBox | None) -> BoundingBox | None:
    """Union two optional boxes; ``None`` is the identity."""
    if box is None:
        return other
    return box.union(other)


@dataclass(frozen=True)
class GlyphRaster:
    """One rendered glyph.

    Attributes:
        bitmap: ``(rows, width)`` uint8 coverage.
        left: Pixel column of the bitmap's left edge, pen translation included.
        top: Pixel row of the bitmap's top edge above the baseline, pen
            translation included (FreeType's ``bitmap_top``).
        bbox: Control box in run space, or None for a blank glyph.
        advance_x: Horizontal advance.
        advance_y: Vertical advance.
        height: Glyph height from its own metrics (untranslated).
        bearing_y: Glyph ascent above the baseline (untranslated).
    """

    bitmap: np.ndarray = field(repr=False)
    left: int
    top: int
    bbox: BoundingBox | None
    advance_x: int
    advance_y: int
    height: int = 0
    bearing_y: int = 0

    @classmethod
    def blank(cls, advance_x: int, advance_y: int) -> GlyphRaster:
        """Zero-size placeholder that only advances the pen."""
        return cls(
            bitmap=np.zeros((0, 0), dtype=np.uint8),
            left=0,
            top=0,
            bbox=None,
            advance_x=advance_x,
            advance_y=advance_y,
        )

    @property
    def is_blank(self) -> bool:
        return self.bbox is None

    @property
    def descent(self) -> int:
        """Extent below the baseline (``height - bearing_y``)."""
        return self.height - self.bearing_y


class Rasterizer(Protocol):
    """Capability: render one glyph at a pen translation.

    Implementations raise MissingGlyphError for glyph ids they cannot render.
    """

    def rasterize(self, glyph_id: int, pen: Pen) -> GlyphRaster: ...


def rasterize_or_blank(
    rasterizer: Rasterizer,
    glyph_id: int,
    pen: Pen,
    advance_x: int,
    advance_y: int,
) -> GlyphRaster:
    """Rasterize a glyph, degrading a missing glyph to a blank raster.

    The blank keeps the shaped advance so the pen still moves.
    """
    try:
        return rasterizer.rasterize(glyph_id, pen)
    except MissingGlyphError as e:
        logger.warning("%s; drawing nothing and keeping its advance", e)
        return GlyphRaster.blank(advance_x, advance_y)


def walk_run(
    run: GlyphRun,
    rasterizer: Rasterizer,
    start: Pen,
    advance_source: str = "rasterizer",
) -> Iterator[tuple[Pen, GlyphRaster]]:
    """Traverse a run once, yielding ``(pen, raster)`` per glyph.

    Each call owns a fresh pen starting at ``start``. With ``advance_source``
    ``rasterizer`` the pen moves by the rasterizer's advance; with ``shaper``
    it moves by the shaped advance and each glyph is translated by its
    shaped offset.
    """
    if advance_source not in ("rasterizer", "shaper"):
        raise ValueError(f"Unknown advance source {advance_source!r}")

    pen = start
    for glyph in run:
        translation = pen
        if advance_source == "shaper":
            translation = pen.advance(glyph.x_offset, glyph.y_offset)
        raster = rasterize_or_blank(
            rasterizer, glyph.glyph_id, translation, glyph.advance_x, glyph.advance_y
        )
        yield translation, raster
        if advance_source == "shaper":
            pen = pen.advance(glyph.advance_x, glyph.advance_y)
        else:
            pen = pen.advance(raster.advance_x, raster.advance_y)
