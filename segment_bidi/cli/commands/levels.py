"""Levels command - resolved embedding level of every code point."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from segment_bidi.api import BidiResolver
from segment_bidi.cli.output import print_segments
from segment_bidi.config import DIRECTIONS, Config
from segment_bidi.exceptions import SegmentBidiError

console = Console()
err_console = Console(stderr=True)


@click.command()
@click.argument("text")
@click.option(
    "--direction",
    "-d",
    type=click.Choice(DIRECTIONS, case_sensitive=False),
    help="Paragraph direction (default from config)",
)
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.pass_context
def levels(ctx: click.Context, text: str, direction: str | None, as_json: bool) -> None:
    """Show the bidi class and resolved level of each character of TEXT."""
    obj = ctx.ensure_object(dict)
    config = obj.get("config") or Config.load()
    resolver = BidiResolver(config=config, log_level=obj.get("log_level"))

    try:
        result = resolver.resolve_text(text, direction)
    except SegmentBidiError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    if as_json or config.output_format == "json":
        console.print_json(data=result.to_dict())
        return

    level = result.paragraph.paragraph_level.number
    print_segments(console, result, f"Levels (paragraph level {level})")
