"""CLI command for selecting tools for a task.

Implements the 'toolpick select' command, which loads a YAML tool catalog,
runs the configured selection strategy and prints the ranked tools.
"""

import asyncio
import json
from pathlib import Path
from typing import Any

import click

from toolpick.cli.errors import handle_cli_errors
from toolpick.config.loader import load_config
from toolpick.lib.errors import ConfigError
from toolpick.lib.logging_config import get_logger
from toolpick.lib.service_factory import create_completion, create_embedder
from toolpick.models.config import ToolPickConfig
from toolpick.models.selection import SelectionResult
from toolpick.services.tool_selection import ToolSelectionService
from toolpick.tools.registry import load_catalog_file

logger = get_logger(__name__)


def _apply_overrides(
    config: ToolPickConfig, strategy: str | None, max_tools: int | None
) -> ToolPickConfig:
    """Return config with command-line overrides applied and re-validated."""
    overrides: dict[str, Any] = {}
    if strategy is not None:
        overrides["strategy"] = strategy
    if max_tools is not None:
        overrides["max_tools"] = max_tools
    if not overrides:
        return config
    data = config.model_dump()
    data.update(overrides)
    return ToolPickConfig.model_validate(data)


def _display_result(result: SelectionResult) -> None:
    source = " (cached)" if result.from_cache else ""
    click.secho(
        f"Selected {len(result.tools)} tools with {result.strategy}{source} "
        f"in {result.elapsed_seconds * 1000:.1f}ms",
        fg="green",
    )
    click.echo()
    for index, tool in enumerate(result.tools, start=1):
        score = result.scores.get(tool.name, 0.0)
        click.echo(f"  {index:2d}. {tool.name:<30} {score:.3f}  {tool.description}")
    if result.group_breakdown:
        click.echo()
        breakdown = sorted(result.group_breakdown.items())
        groups = ", ".join(f"{group}={count}" for group, count in breakdown)
        click.echo(f"Groups: {groups}")
    click.echo()
    click.echo(result.reasoning)


@click.command()
@click.argument("task")
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="YAML file listing the available tools",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="toolpick configuration file (default: ./toolpick.yaml if present)",
)
@click.option(
    "--strategy",
    type=click.Choice(["semantic", "llm_filter", "hybrid"]),
    default=None,
    help="Override the configured selection strategy",
)
@click.option(
    "--max-tools",
    type=click.IntRange(min=1, max=200),
    default=None,
    help="Maximum number of tools to select",
)
@click.option("--json", "as_json", is_flag=True, help="Output the result as JSON")
def select(
    task: str,
    catalog_path: Path,
    config_path: Path | None,
    strategy: str | None,
    max_tools: int | None,
    as_json: bool,
) -> None:
    """Select the most relevant tools for TASK.

    \b
    EXAMPLES:

        toolpick select "what is the weather in Tokyo" --catalog tools.yaml

        toolpick select "open a pull request" --catalog tools.yaml \\
            --strategy semantic --max-tools 5 --json
    """
    with handle_cli_errors():
        config = _apply_overrides(load_config(config_path), strategy, max_tools)
        if strategy is None and config.strategy != "semantic" and config.llm is None:
            logger.warning(
                f"Strategy '{config.strategy}' needs an 'llm' provider, "
                "falling back to semantic selection"
            )
            config = _apply_overrides(config, "semantic", None)
        catalog = load_catalog_file(catalog_path)
        if len(catalog) == 0:
            raise ConfigError("catalog", f"{catalog_path} does not define any tools")

        service = ToolSelectionService(
            catalog,
            config,
            embedder=create_embedder(config),
            completion=create_completion(config),
        )
        result = asyncio.run(service.select_tools(task))
        service.save()

        if as_json:
            payload = result.model_dump(mode="json")
            payload["tool_names"] = result.tool_names
            click.echo(json.dumps(payload, indent=2))
        else:
            _display_result(result)
