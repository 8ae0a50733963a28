"""BiDi reordering for text2pgm.

Turns logical-order text into visual order with python-bidi. Characters on
right-to-left embedding levels are mirrored (rule L4), so ``(`` in Arabic
text comes out as ``)``.
"""

from __future__ import annotations

import logging
import unicodedata
from typing import Protocol

from bidi.algorithm import get_display

from text2pgm.exceptions import ReorderError

logger = logging.getLogger(__name__)

# Paragraph direction -> python-bidi base_dir ("auto" lets the algorithm decide)
_BASE_DIRS: dict[str, str | None] = {"ltr": "L", "rtl": "R", "auto": None}

_RTL_CLASSES = frozenset({"R", "AL", "RLE", "RLO", "RLI"})
_LTR_CLASSES = frozenset({"L", "LRE", "LRO", "LRI"})


class Reorderer(Protocol):
    """Capability: logical-order text + base direction -> visual-order text."""

    def reorder(self, text: str, direction: str) -> str: ...


def detect_base_direction(text: str) -> str:
    """Return ``rtl`` or ``ltr`` from the first strong character (rules P2/P3)."""
    for char in text:
        bidi_class = unicodedata.bidirectional(char)
        if bidi_class in _RTL_CLASSES:
            return "rtl"
        if bidi_class in _LTR_CLASSES:
            return "ltr"
    return "ltr"


def is_rtl_text(text: str) -> bool:
    """True if the text contains any strong right-to-left character."""
    return any(unicodedata.bidirectional(c) in ("R", "AL") for c in text)


class BidiReorderer:
    """Reorderer backed by python-bidi's ``get_display``."""

    def reorder(self, text: str, direction: str) -> str:
        """Reorder ``text`` into visual order.

        Args:
            text: Logical-order text.
            direction: ``ltr``, ``rtl`` or ``auto``.

        Raises:
            ReorderError: For an unknown direction or an algorithm failure.
        """
        if direction not in _BASE_DIRS:
            raise ReorderError(
                f"Unknown paragraph direction {direction!r}",
                details={"allowed": ", ".join(_BASE_DIRS)},
            )
        if not text:
            return text

        try:
            visual = get_display(text, base_dir=_BASE_DIRS[direction])
        except Exception as e:
            raise ReorderError(f"BiDi reordering failed: {e}") from e

        if len(visual) < len(text):
            raise ReorderError(
                "BiDi reordering dropped characters",
                details={"logical": len(text), "visual": len(visual)},
            )
        logger.debug("Reordered %d characters (base direction %s)", len(text), direction)
        return visual


def apply_bidi_algorithm(text: str, direction: str = "ltr") -> str:
    """Reorder with a default BidiReorderer."""
    return BidiReorderer().reorder(text, direction)
