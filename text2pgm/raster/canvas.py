"""Single-channel coverage canvas."""

from __future__ import annotations

import numpy as np

from text2pgm.exceptions import CanvasError
from text2pgm.raster.glyph import BoundingBox


class Canvas:
    """A ``width x height`` grid of uint8 coverage, row 0 at the top.

    ``pixels`` is indexed ``[row, column]``.
    """

    __slots__ = ("width", "height", "pixels")

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise CanvasError(
                "Canvas dimensions must be non-negative",
                details={"width": width, "height": height},
            )
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width), dtype=np.uint8)

    @classmethod
    def for_box(cls, bbox: BoundingBox | None) -> Canvas:
        """Allocate a canvas covering ``bbox``; an empty box gives a 0x0 canvas."""
        if bbox is None:
            return cls(0, 0)
        return cls(bbox.pixel_width, bbox.pixel_height)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def rows(self):
        """Iterate over rows top to bottom as uint8 arrays."""
        return iter(self.pixels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Canvas):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.pixels, other.pixels)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"
