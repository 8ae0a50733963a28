"""Command-line entry point for text2pgm."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.logging import RichHandler

from text2pgm import __version__
from text2pgm.cli.commands import info, render
from text2pgm.cli.common import EXIT_FAILURE, err_console, fail
from text2pgm.config import LOG_LEVELS, Config
from text2pgm.exceptions import ConfigError


class Text2PgmGroup(click.Group):
    """Click group that reports usage errors with EXIT_FAILURE instead of 2.

    An argument that names no subcommand is taken as the font path, so
    ``text2pgm FONT`` is the same as ``text2pgm render FONT``.
    """

    default_command = "render"

    def resolve_command(self, ctx, args):  # type: ignore[override]
        name = args[0]
        if self.get_command(ctx, name) is None and not name.startswith("-"):
            return self.default_command, self.get_command(ctx, self.default_command), args
        return super().resolve_command(ctx, args)

    def main(self, *args, **kwargs):  # type: ignore[override]
        kwargs["standalone_mode"] = False
        try:
            rv = super().main(*args, **kwargs)
        except click.exceptions.Abort:
            err_console.print("[red]Aborted[/red]")
            sys.exit(EXIT_FAILURE)
        except click.exceptions.ClickException as e:
            e.show()
            sys.exit(EXIT_FAILURE)
        sys.exit(rv if isinstance(rv, int) else 0)


def setup_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.group(cls=Text2PgmGroup, subcommand_metavar="FONT [OPTIONS] | COMMAND [ARGS]...")
@click.version_option(__version__, prog_name="text2pgm")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file (default: $TEXT2PGM_CONFIG or ~/.config/text2pgm/config.yaml)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level for diagnostics on stderr",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str | None) -> None:
    """Render complex-script text to a grayscale PGM image.

    Run `text2pgm FONT` to print the configured text as PGM on stdout; see
    `text2pgm render --help` for the rendering options.
    """
    ctx.ensure_object(dict)
    try:
        config = Config.load(config_path)
        if log_level:
            config = config.with_overrides(log_level=log_level.upper())
    except ConfigError as e:
        fail(str(e), e)

    setup_logging(config.log_level)
    ctx.obj["config"] = config
    ctx.obj["log_level"] = config.log_level


cli.add_command(render)
cli.add_command(info)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
