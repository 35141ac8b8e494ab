"""Resolve command - run the engine directly on bidi class names."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from segment_bidi.api import BidiResolver
from segment_bidi.cli.output import print_runs, print_segments
from segment_bidi.config import Config
from segment_bidi.exceptions import SegmentBidiError

console = Console()
err_console = Console(stderr=True)


def _parse_brackets(values: tuple[str, ...]) -> dict[int, str]:
    brackets: dict[int, str] = {}
    for value in values:
        index, sep, char = value.partition("=")
        if not sep or not index.strip().isdigit() or len(char) != 1:
            raise click.BadParameter(
                f"expected INDEX=CHAR, got {value!r}", param_hint="--bracket"
            )
        brackets[int(index)] = char
    return brackets


@click.command()
@click.argument("classes", nargs=-1, required=True)
@click.option(
    "--level",
    "-l",
    "paragraph_level",
    type=click.IntRange(0, 125),
    help="Paragraph embedding level (default from config direction)",
)
@click.option(
    "--bracket",
    "-b",
    "bracket_values",
    multiple=True,
    help="Mark segment INDEX as bracket CHAR, e.g. 1='('",
)
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.pass_context
def resolve(
    ctx: click.Context,
    classes: tuple[str, ...],
    paragraph_level: int | None,
    bracket_values: tuple[str, ...],
    as_json: bool,
) -> None:
    """Resolve levels and visual runs for a sequence of bidi CLASSES.

    CLASSES: Bidi class names such as L R AL EN ON LRI PDI.
    """
    obj = ctx.ensure_object(dict)
    config = obj.get("config") or Config.load()
    brackets = _parse_brackets(bracket_values)
    resolver = BidiResolver(config=config, log_level=obj.get("log_level"))

    try:
        result = resolver.resolve_classes(list(classes), paragraph_level, brackets)
    except SegmentBidiError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    if as_json or config.output_format == "json":
        console.print_json(data=result.to_dict())
        return

    level = result.paragraph.paragraph_level.number
    print_segments(console, result, f"Levels (paragraph level {level})")
    print_runs(console, result)
