"""CLI command for inspecting recorded tool quality."""

import json
from pathlib import Path

import click

from toolpick.cli.errors import handle_cli_errors
from toolpick.config.loader import load_config
from toolpick.lib.ranking.quality import QUALITY_FILENAME, QualityManager, quality_score


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="toolpick configuration file (default: ./toolpick.yaml if present)",
)
@click.option("--json", "as_json", is_flag=True, help="Output the report as JSON")
def quality(config_path: Path | None, as_json: bool) -> None:
    """Show the stored quality report for every tracked tool."""
    with handle_cli_errors():
        config = load_config(config_path)
        manager = QualityManager(Path(config.cache_dir) / QUALITY_FILENAME)
        manager.load()
        report = manager.report()

        if as_json:
            payload = {
                name: {
                    **record.model_dump(mode="json"),
                    "quality": quality_score(record),
                }
                for name, record in report.items()
            }
            click.echo(json.dumps(payload, indent=2))
            return

        if not report:
            click.echo("No quality data recorded yet.")
            return

        click.echo(f"{'TOOL':<30} {'CALLS':>6} {'SUCCESS':>8} {'DESC':>5} {'SCORE':>6}")
        ranked = sorted(report.values(), key=quality_score, reverse=True)
        for record in ranked:
            click.echo(
                f"{record.name:<30} {record.call_count:>6} "
                f"{record.success_rate:>8.1%} {record.description_quality:>5.2f} "
                f"{quality_score(record):>6.3f}"
            )
