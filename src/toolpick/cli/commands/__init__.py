"""toolpick CLI commands."""
