"""Rendering of resolve results for the CLI."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from segment_bidi.api import ResolveResult


def codepoint(char: str) -> str:
    return f"U+{ord(char):04X}"


def print_segments(console: Console, result: ResolveResult, title: str) -> None:
    """Print one row per segment with its class and resolved level."""
    table = Table(title=title)
    table.add_column("Index", style="dim", justify="right")
    if result.text is not None:
        table.add_column("Char", style="cyan")
    table.add_column("Class", style="green")
    table.add_column("Level", style="yellow", justify="right")

    for index, (bidi_class, level) in enumerate(zip(result.classes, result.levels)):
        row = [str(index)]
        if result.text is not None:
            row.append(codepoint(result.text[index]))
        row.extend([str(bidi_class), str(level.number)])
        table.add_row(*row)

    console.print(table)


def print_runs(console: Console, result: ResolveResult) -> None:
    """Print the visual runs and the segment order."""
    runs = ", ".join(
        f"{run.start}..{run.stop}@{result.levels[run.start].number}"
        for run in result.runs
    )
    console.print(f"[bold]Visual runs:[/bold] {runs or '-'}", highlight=False)
    order = " ".join(str(i) for i in result.order)
    console.print(f"[bold]Order:[/bold] {order or '-'}", highlight=False)
