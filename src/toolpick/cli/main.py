"""Entry point for the toolpick command-line interface."""

import click

from toolpick import __version__
from toolpick.cli.commands.cache import cache
from toolpick.cli.commands.quality import quality
from toolpick.cli.commands.select import select
from toolpick.lib.logging_config import setup_logging


@click.group()
@click.version_option(__version__, prog_name="toolpick")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors")
def cli(verbose: bool, quiet: bool) -> None:
    """Pick the most relevant tools for a task from a large catalog."""
    setup_logging(verbose=verbose, quiet=quiet)


cli.add_command(select)
cli.add_command(quality)
cli.add_command(cache)


def main() -> None:
    """Run the toolpick CLI."""
    cli()


if __name__ == "__main__":
    main()
