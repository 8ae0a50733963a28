"""Pytest configuration and shared fixtures for text2pgm tests."""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pytest

import text2pgm.config as config_module
from text2pgm.exceptions import MissingGlyphError
from text2pgm.raster.glyph import BoundingBox, GlyphRaster, Pen
from text2pgm.shaping.harfbuzz import GlyphRun

# Paths
PROJECT_ROOT = Path(__file__).parent.parent

# Fonts with Latin coverage, in order of preference
_FONT_CANDIDATES = (
    "DejaVuSans.ttf",
    "LiberationSans-Regular.ttf",
    "FreeSans.ttf",
    "NotoSans-Regular.ttf",
    "Arial.ttf",
    "Helvetica.ttc",
)
_FONT_DIRS = (
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path("/System/Library/Fonts"),
    Path("/Library/Fonts"),
    Path("C:/Windows/Fonts"),
)


def find_system_font() -> Path | None:
    """Return the first preferred Latin font installed on this machine."""
    for name in _FONT_CANDIDATES:
        for font_dir in _FONT_DIRS:
            if not font_dir.exists():
                continue
            direct = font_dir / name
            if direct.is_file():
                return direct
            for match in font_dir.rglob(name):
                return match
    return None


SYSTEM_FONT = find_system_font()


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep user config files and $TEXT2PGM_CONFIG out of every test."""
    monkeypatch.delenv(config_module.CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "no-such-config.yaml")
    yield


@pytest.fixture
def system_font() -> Path:
    """Path to an installed Latin font; skips the test when none exists."""
    if SYSTEM_FONT is None:
        pytest.skip("No Latin system font available")
    return SYSTEM_FONT


# ---------------------------------------------------------------------------
# Stub collaborators
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StubGlyph:
    """Canned glyph: a solid box of ``fill`` unless ``bitmap`` is given. Sizes in pixels."""

    width: int
    ascent: int
    descent: int
    advance: int
    fill: int = 255
    bearing_x: int = 0
    bitmap: np.ndarray | None = None


class StubRasterizer:
    """Rasterizer returning canned rasters translated by the pen, like FreeType does."""

    def __init__(self, glyphs: dict[int, StubGlyph]) -> None:
        self.glyphs = glyphs
        self.calls: list[tuple[int, Pen]] = []

    def rasterize(self, glyph_id: int, pen: Pen) -> GlyphRaster:
        self.calls.append((glyph_id, pen))
        try:
            g = self.glyphs[glyph_id]
        except KeyError:
            raise MissingGlyphError(glyph_id) from None

        rows = g.ascent + g.descent
        if g.bitmap is not None:
            bitmap = g.bitmap
        else:
            bitmap = np.full((rows, g.width), g.fill, dtype=np.uint8)
        left = pen.x // 64 + g.bearing_x
        top = pen.y // 64 + g.ascent
        return GlyphRaster(
            bitmap=bitmap,
            left=left,
            top=top,
            bbox=BoundingBox(left * 64, (top - rows) * 64, (left + g.width) * 64, top * 64),
            advance_x=g.advance * 64,
            advance_y=0,
            height=rows * 64,
            bearing_y=g.ascent * 64,
        )


class StubShaper:
    """Shaper returning a canned run and recording its inputs."""

    def __init__(self, run: GlyphRun) -> None:
        self.run = run
        self.calls: list[tuple[str, str, str]] = []

    def shape(self, text: str, script: str, direction: str) -> GlyphRun:
        self.calls.append((text, script, direction))
        return self.run


class StubReorderer:
    """Reorderer that reverses the text when the direction is rtl."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def reorder(self, text: str, direction: str) -> str:
        self.calls.append((text, direction))
        return text[::-1] if direction == "rtl" else text


def pixel_run(*items: tuple[int, int]) -> GlyphRun:
    """Build a run from ``(glyph_id, advance_px)`` pairs."""
    return GlyphRun.from_advances([(gid, adv * 64, 0) for gid, adv in items])


@pytest.fixture
def three_glyphs() -> dict[int, StubGlyph]:
    """Three left-to-right glyphs with advances 10, 12, 8 and a common ascent/descent."""
    return {
        1: StubGlyph(width=10, ascent=7, descent=3, advance=10, fill=10),
        2: StubGlyph(width=12, ascent=7, descent=3, advance=12, fill=20),
        3: StubGlyph(width=8, ascent=7, descent=3, advance=8, fill=40),
    }


@pytest.fixture
def three_glyph_run() -> GlyphRun:
    return pixel_run((1, 10), (2, 12), (3, 8))


@pytest.fixture
def tall_deep_glyphs() -> dict[int, StubGlyph]:
    """One tall glyph (large ascent) and one deep glyph (large descent)."""
    return {
        1: StubGlyph(width=5, ascent=12, descent=0, advance=5),
        2: StubGlyph(width=5, ascent=2, descent=6, advance=5),
    }
