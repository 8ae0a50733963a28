"""Configuration for text2pgm.

Settings come from a YAML file (explicit path, ``$TEXT2PGM_CONFIG`` or
``~/.config/text2pgm/config.yaml``) layered over built-in defaults, then
CLI overrides on top.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from text2pgm.exceptions import ConfigError

CONFIG_ENV_VAR = "TEXT2PGM_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "text2pgm" / "config.yaml"

# Sample verse rendered when no text is supplied (Arabic, mixed kashida).
DEFAULT_TEXT = (
    "قد ماتَ قـومٌ ومَا مَاتَتْ مـكـارِمُهم        "
    "وعَاشَ قومٌ وهُم فِي النَّاس ِأمْواتُ"
)

DIRECTIONS = ("ltr", "rtl", "auto")
SHAPING_DIRECTIONS = ("ltr", "rtl")
ADVANCE_SOURCES = ("rasterizer", "shaper")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Config:
    """Render settings.

    Attributes:
        font_size: Character size in points.
        dpi: Horizontal and vertical resolution.
        face_index: Face to open inside a font collection.
        direction: Paragraph base direction for reordering.
        shaping_direction: Direction handed to the shaper. Reordered text is
            already in visual order, so this is normally ``ltr``.
        script: ISO 15924 script tag handed to the shaper.
        language: Optional BCP 47 language tag for the shaper.
        advance_source: ``rasterizer`` advances the pen by FreeType's glyph
            advances; ``shaper`` uses HarfBuzz advances and glyph offsets.
        text: Text rendered when none is given on the command line.
        log_level: Logging level name.
    """

    font_size: int = 40
    dpi: int = 72
    face_index: int = 0
    direction: str = "ltr"
    shaping_direction: str = "ltr"
    script: str = "Arab"
    language: str | None = None
    advance_source: str = "rasterizer"
    text: str = DEFAULT_TEXT
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise ConfigError if any value is out of range."""
        if not isinstance(self.font_size, int) or self.font_size <= 0:
            raise ConfigError(f"font_size must be a positive integer, got {self.font_size!r}")
        if not isinstance(self.dpi, int) or self.dpi <= 0:
            raise ConfigError(f"dpi must be a positive integer, got {self.dpi!r}")
        if not isinstance(self.face_index, int) or self.face_index < 0:
            raise ConfigError(f"face_index must be >= 0, got {self.face_index!r}")
        if self.direction not in DIRECTIONS:
            raise ConfigError(f"direction must be one of {DIRECTIONS}, got {self.direction!r}")
        if self.shaping_direction not in SHAPING_DIRECTIONS:
            raise ConfigError(
                f"shaping_direction must be one of {SHAPING_DIRECTIONS}, "
                f"got {self.shaping_direction!r}"
            )
        if not isinstance(self.script, str) or len(self.script) != 4:
            raise ConfigError(f"script must be a 4-letter ISO 15924 tag, got {self.script!r}")
        if self.advance_source not in ADVANCE_SOURCES:
            raise ConfigError(
                f"advance_source must be one of {ADVANCE_SOURCES}, got {self.advance_source!r}"
            )
        if not isinstance(self.text, str):
            raise ConfigError("text must be a string")
        if str(self.log_level).upper() not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {LOG_LEVELS}, got {self.log_level!r}")

    @property
    def log_level_value(self) -> int:
        """Numeric logging level."""
        return logging.getLevelName(str(self.log_level).upper())

    def with_overrides(self, **overrides: Any) -> Config:
        """Return a copy with the given values replaced. ``None`` values are skipped."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @classmethod
    def load(cls, path: str | Path | None = None) -> Config:
        """Load config from YAML.

        Args:
            path: Explicit config file. Must exist when given.

        Returns:
            Config with file values over defaults.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid.
        """
        if path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            if env_path:
                path = Path(env_path)
            elif DEFAULT_CONFIG_PATH.exists():
                path = DEFAULT_CONFIG_PATH
            else:
                return cls()

        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return cls.from_dict(data)
