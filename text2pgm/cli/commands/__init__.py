"""CLI commands for text2pgm."""

from text2pgm.cli.commands.info import info
from text2pgm.cli.commands.render import render

__all__ = ["render", "info"]
