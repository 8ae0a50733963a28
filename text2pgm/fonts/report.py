"""Font report: names, metrics and character coverage read with fontTools."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from pathlib import Path

from fontTools.ttLib import TTFont

from text2pgm.exceptions import FontLoadError


@dataclass
class FontInfo:
    path: Path
    face_index: int
    family: str
    style: str
    postscript_name: str
    units_per_em: int
    num_glyphs: int
    codepoints: frozenset[int] = field(default_factory=frozenset, repr=False)

    def missing_characters(self, text: str) -> list[str]:
        """Distinct characters of ``text`` the cmap does not map, in first-seen order.

        Control and format characters (bidi marks, joiners) are ignored since
        shapers consume them without a glyph.
        """
        seen: set[str] = set()
        missing = []
        for char in text:
            if char in seen:
                continue
            seen.add(char)
            if unicodedata.category(char).startswith("C"):
                continue
            if ord(char) not in self.codepoints:
                missing.append(char)
        return missing


def read_font_info(path: str | Path, face_index: int = 0) -> FontInfo:
    """Read a font's identity and cmap coverage.

    Raises:
        FontLoadError: If fontTools cannot parse the file.
    """
    path = Path(path)
    try:
        with TTFont(path, fontNumber=face_index, lazy=True) as ttfont:
            name_table = ttfont["name"]
            cmap = ttfont.getBestCmap() or {}
            return FontInfo(
                path=path,
                face_index=face_index,
                family=name_table.getBestFamilyName() or "Unknown",
                style=name_table.getBestSubFamilyName() or "Regular",
                postscript_name=name_table.getDebugName(6) or "",
                units_per_em=ttfont["head"].unitsPerEm,
                num_glyphs=ttfont["maxp"].numGlyphs,
                codepoints=frozenset(cmap),
            )
    except Exception as e:
        raise FontLoadError(path, details={"error": str(e)}) from e
