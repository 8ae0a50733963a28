"""Tests for BiDi reordering and HarfBuzz shaping (text2pgm.shaping)."""

from pathlib import Path
from unittest.mock import patch

import pytest

from text2pgm.exceptions import ReorderError, ShapingError
from text2pgm.shaping.bidi import (
    BidiReorderer,
    apply_bidi_algorithm,
    detect_base_direction,
    is_rtl_text,
)
from text2pgm.shaping.harfbuzz import GlyphRun, HarfBuzzShaper, ShapedGlyph, create_hb_font


class TestBidiReorderer:
    def test_latin_text_is_unchanged(self) -> None:
        assert BidiReorderer().reorder("Hello world", "ltr") == "Hello world"

    def test_hebrew_word_is_reversed(self) -> None:
        assert BidiReorderer().reorder("אבג", "ltr") == "גבא"

    def test_mixed_text_keeps_latin_order(self) -> None:
        visual = BidiReorderer().reorder("abc אבג", "ltr")
        assert visual == "abc גבא"

    def test_rtl_paragraph_places_latin_run_on_the_left(self) -> None:
        visual = BidiReorderer().reorder("אבג abc", "rtl")
        assert visual == "abc גבא"

    def test_auto_direction_is_accepted(self) -> None:
        assert BidiReorderer().reorder("abc", "auto") == "abc"

    def test_empty_text_is_returned_as_is(self) -> None:
        assert BidiReorderer().reorder("", "rtl") == ""

    def test_visual_text_keeps_every_character(self) -> None:
        text = "قد ماتَ قـومٌ 123"
        assert sorted(BidiReorderer().reorder(text, "ltr")) == sorted(text)

    def test_unknown_direction_raises(self) -> None:
        with pytest.raises(ReorderError, match="Unknown paragraph direction"):
            BidiReorderer().reorder("abc", "ttb")

    def test_algorithm_failure_is_wrapped(self) -> None:
        with patch("text2pgm.shaping.bidi.get_display", side_effect=RuntimeError("boom")):
            with pytest.raises(ReorderError, match="boom"):
                BidiReorderer().reorder("abc", "ltr")

    def test_apply_bidi_algorithm_helper(self) -> None:
        assert apply_bidi_algorithm("אב") == "בא"


class TestDirectionDetection:
    def test_first_strong_character_wins(self) -> None:
        assert detect_base_direction("123 مرحبا abc") == "rtl"
        assert detect_base_direction("123 abc مرحبا") == "ltr"

    def test_neutral_text_defaults_to_ltr(self) -> None:
        assert detect_base_direction("123 ...") == "ltr"

    def test_is_rtl_text(self) -> None:
        assert is_rtl_text("abc שלום")
        assert not is_rtl_text("abc 123")


class TestGlyphRun:
    def test_run_is_an_immutable_sequence(self) -> None:
        run = GlyphRun.from_advances([(5, 640, 0), (6, 768, 0)])
        assert len(run) == 2
        assert run[0] == ShapedGlyph(5, 640, 0)
        assert run.glyph_ids == [5, 6]
        assert run.total_advance == (1408, 0)
        assert isinstance(run[0:1], GlyphRun)
        with pytest.raises(AttributeError):
            run[0].glyph_id = 7  # type: ignore[misc]

    def test_runs_compare_by_content(self) -> None:
        a = GlyphRun.from_advances([(1, 64, 0)])
        b = GlyphRun.from_advances([(1, 64, 0)])
        assert a == b
        assert hash(a) == hash(b)


class TestHarfBuzzShaper:
    def test_empty_text_gives_empty_run(self) -> None:
        shaper = HarfBuzzShaper(hb_font=None)  # type: ignore[arg-type]
        assert len(shaper.shape("", "Arab", "ltr")) == 0

    def test_hb_failure_is_wrapped(self) -> None:
        with patch("text2pgm.shaping.harfbuzz.hb.shape", side_effect=RuntimeError("bad font")):
            shaper = HarfBuzzShaper(hb_font=object())  # type: ignore[arg-type]
            with pytest.raises(ShapingError, match="bad font") as excinfo:
                shaper.shape("abc", "Latn", "ltr")
        assert excinfo.value.details["script"] == "Latn"

    def test_shapes_latin_with_system_font(self, system_font: Path) -> None:
        hb_font = create_hb_font(system_font.read_bytes(), 0, 40 * 64)
        run = HarfBuzzShaper(hb_font).shape("Hello", "Latn", "ltr")
        assert len(run) == 5
        assert all(g.glyph_id > 0 for g in run)
        assert all(g.advance_x > 0 for g in run)
        # Both 'l' glyphs map to the same glyph id
        assert run[2].glyph_id == run[3].glyph_id

    def test_shaping_is_deterministic(self, system_font: Path) -> None:
        hb_font = create_hb_font(system_font.read_bytes(), 0, 40 * 64)
        shaper = HarfBuzzShaper(hb_font)
        assert shaper.shape("Shaping", "Latn", "ltr") == shaper.shape("Shaping", "Latn", "ltr")
