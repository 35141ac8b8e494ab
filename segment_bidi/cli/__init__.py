"""Command line interface for segment-bidi."""
