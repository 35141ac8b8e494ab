"""CLI commands for segment-bidi."""

from segment_bidi.cli.commands.levels import levels
from segment_bidi.cli.commands.reorder import reorder
from segment_bidi.cli.commands.resolve import resolve

__all__ = ["levels", "reorder", "resolve"]
