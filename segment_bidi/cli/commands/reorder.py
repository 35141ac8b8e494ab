"""Reorder command - display order of a line of text."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from segment_bidi.api import BidiResolver
from segment_bidi.cli.output import print_runs
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
def reorder(ctx: click.Context, text: str, direction: str | None, as_json: bool) -> None:
    """Print TEXT in visual (left-to-right display) order.

    Characters inside right-to-left runs are reversed; mirroring of glyphs
    is left to the renderer.
    """
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

    console.print(f"[bold]Display:[/bold] {escape(result.display or '')}", highlight=False)
    print_runs(console, result)
