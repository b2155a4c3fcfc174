"""CLI commands for managing the toolpick cache directory."""

from pathlib import Path

import click

from toolpick.cli.errors import handle_cli_errors
from toolpick.config.loader import load_config
from toolpick.lib.cache.embedding_cache import EMBEDDING_CACHE_FILENAME
from toolpick.lib.errors import PersistenceError
from toolpick.lib.logging_config import get_logger
from toolpick.lib.ranking.quality import QUALITY_FILENAME

logger = get_logger(__name__)


@click.group(name="cache")
def cache() -> None:
    """Manage cached embeddings and quality data."""
    pass


@cache.command(name="clear")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="toolpick configuration file (default: ./toolpick.yaml if present)",
)
@click.option(
    "--include-quality",
    is_flag=True,
    help="Also delete recorded tool quality data",
)
def clear(config_path: Path | None, include_quality: bool) -> None:
    """Delete the on-disk embedding cache."""
    with handle_cli_errors():
        config = load_config(config_path)
        cache_dir = Path(config.cache_dir)

        targets = [(EMBEDDING_CACHE_FILENAME, "embeddings")]
        if include_quality:
            targets.append((QUALITY_FILENAME, "quality"))

        removed = 0
        for filename, store in targets:
            path = cache_dir / filename
            if not path.exists():
                continue
            try:
                path.unlink()
            except OSError as e:
                raise PersistenceError(store, str(path), str(e)) from e
            logger.debug(f"Removed {path}")
            removed += 1

        if removed:
            click.secho(f"Removed {removed} cache file(s) from {cache_dir}", fg="green")
        else:
            click.echo(f"Nothing to clear in {cache_dir}")
