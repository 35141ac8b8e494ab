"""segment-bidi command line entry point."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from segment_bidi import __version__
from segment_bidi.cli.commands import levels, reorder, resolve
from segment_bidi.config import LOG_LEVELS, Config
from segment_bidi.exceptions import ConfigError

console = Console(stderr=True)


@click.group()
@click.version_option(__version__, prog_name="segment-bidi")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    help="YAML configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level (overrides config)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str | None) -> None:
    """Resolve bidirectional levels and visual order of text."""
    try:
        config = Config.load(config_path)
    except (FileNotFoundError, ConfigError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    level_name = (log_level or config.log_level).upper()
    logging.basicConfig(level=level_name, format="%(levelname)s %(name)s: %(message)s")

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["log_level"] = level_name


cli.add_command(levels)
cli.add_command(reorder)
cli.add_command(resolve)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
