"""Shared error handling for toolpick CLI commands."""

import sys
from collections.abc import Generator
from contextlib import contextmanager

import click

from toolpick.lib.errors import (
    ConfigError,
    PersistenceError,
    SelectorError,
    ToolPickError,
)
from toolpick.lib.logging_config import get_logger

logger = get_logger(__name__)


@contextmanager
def handle_cli_errors() -> Generator[None, None, None]:
    """Map toolpick exceptions to user feedback and exit codes.

    Exit codes:
        2: Configuration error
        3: Selection, persistence or unexpected error
    """
    try:
        yield
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        click.secho("Error: Configuration error", fg="red", err=True)
        click.echo(f"  {e.field}: {e.message}", err=True)
        sys.exit(2)
    except SelectorError as e:
        logger.error(f"Selection error: {e}")
        click.secho(f"Error: {e.strategy} selection failed", fg="red", err=True)
        click.echo(f"  {e.message}", err=True)
        sys.exit(3)
    except PersistenceError as e:
        logger.error(f"Persistence error: {e}")
        click.secho(f"Error: Could not save {e.store}", fg="red", err=True)
        click.echo(f"  {e.path}: {e.message}", err=True)
        sys.exit(3)
    except ToolPickError as e:
        logger.error(f"toolpick error: {e}")
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(3)
