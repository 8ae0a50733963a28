"""Shared console and exit handling for CLI commands."""

from __future__ import annotations

from typing import NoReturn

from rich.console import Console
from rich.markup import escape

# Exit status for every initialization, load, argument or pipeline failure
EXIT_FAILURE = -1

console = Console()
err_console = Console(stderr=True)


def fail(message: str, cause: BaseException | None = None) -> NoReturn:
    """Print a red diagnostic on stderr and exit with EXIT_FAILURE."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise SystemExit(EXIT_FAILURE) from cause
