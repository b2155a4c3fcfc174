"""Command-line interface for toolpick."""
