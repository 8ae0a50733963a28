"""HarfBuzz shaping for text2pgm.

Shapes visually-ordered text into a GlyphRun: glyph ids in rendering order
with 26.6 advances and offsets.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

import uharfbuzz as hb

from text2pgm.exceptions import ShapingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShapedGlyph:
    """One shaped glyph. Advances and offsets are 26.6 fixed point."""

    glyph_id: int
    advance_x: int
    advance_y: int = 0
    x_offset: int = 0
    y_offset: int = 0
    cluster: int = 0


class GlyphRun(Sequence[ShapedGlyph]):
    """Immutable, visually-ordered sequence of shaped glyphs."""

    __slots__ = ("_glyphs",)

    def __init__(self, glyphs: Iterable[ShapedGlyph] = ()) -> None:
        self._glyphs: tuple[ShapedGlyph, ...] = tuple(glyphs)

    @classmethod
    def from_advances(cls, items: Sequence[tuple[int, int, int]]) -> GlyphRun:
        """Build a run from ``(glyph_id, advance_x, advance_y)`` triples."""
        return cls(ShapedGlyph(gid, ax, ay) for gid, ax, ay in items)

    def __getitem__(self, index):  # type: ignore[override]
        if isinstance(index, slice):
            return GlyphRun(self._glyphs[index])
        return self._glyphs[index]

    def __len__(self) -> int:
        return len(self._glyphs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GlyphRun):
            return NotImplemented
        return self._glyphs == other._glyphs

    def __hash__(self) -> int:
        return hash(self._glyphs)

    def __repr__(self) -> str:
        return f"GlyphRun({list(self._glyphs)!r})"

    @property
    def glyph_ids(self) -> list[int]:
        return [g.glyph_id for g in self._glyphs]

    @property
    def total_advance(self) -> tuple[int, int]:
        return (
            sum(g.advance_x for g in self._glyphs),
            sum(g.advance_y for g in self._glyphs),
        )


class Shaper(Protocol):
    """Capability: visual-order text -> GlyphRun."""

    def shape(self, text: str, script: str, direction: str) -> GlyphRun: ...


def create_hb_font(font_data: bytes, face_index: int, scale: int) -> hb.Font:
    """Create a HarfBuzz font whose positions come out in 26.6 pixel units.

    Args:
        font_data: Raw font file bytes.
        face_index: Face inside a collection (TTC) file.
        scale: Pixel size times 64.
    """
    hb_face = hb.Face(hb.Blob(font_data), face_index)
    hb_font = hb.Font(hb_face)
    hb_font.scale = (scale, scale)
    return hb_font


class HarfBuzzShaper:
    """Shaper backed by a uharfbuzz font."""

    def __init__(
        self,
        hb_font: hb.Font,
        language: str | None = None,
    ) -> None:
        self.hb_font = hb_font
        self.language = language

    def shape(self, text: str, script: str, direction: str) -> GlyphRun:
        """Shape ``text`` with an explicit script and direction.

        The text is already in visual order, so the direction is not guessed.

        Raises:
            ShapingError: If HarfBuzz rejects the buffer settings or fails.
        """
        if not text:
            return GlyphRun()

        try:
            buf = hb.Buffer()
            buf.add_str(text)
            buf.direction = direction
            buf.script = script
            if self.language:
                buf.language = self.language
            buf.guess_segment_properties()
            hb.shape(self.hb_font, buf)
        except Exception as e:
            raise ShapingError(
                f"HarfBuzz shaping failed: {e}",
                details={"script": script, "direction": direction},
            ) from e

        glyphs = [
            ShapedGlyph(
                glyph_id=info.codepoint,
                advance_x=pos.x_advance,
                advance_y=pos.y_advance,
                x_offset=pos.x_offset,
                y_offset=pos.y_offset,
                cluster=info.cluster,
            )
            for info, pos in zip(buf.glyph_infos, buf.glyph_positions)
        ]
        logger.debug("Shaped %d characters into %d glyphs", len(text), len(glyphs))
        return GlyphRun(glyphs)
