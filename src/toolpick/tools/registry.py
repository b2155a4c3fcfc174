"""Explicit registry of tool handlers keyed by name.

Each tool is a ``ToolSchema`` plus a handler closure taking the argument
dict. Handlers may be plain functions or coroutines and may return a
``ToolResponse`` or any value, which becomes the response content.

Usage:
    registry = ToolRegistry()

    @registry.tool("weather_get", "Get current weather for a city")
    async def weather_get(args: dict[str, Any]) -> str:
        return f"Sunny in {args['city']}"

    response = await registry.invoke("weather_get", {"city": "Tokyo"})
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from toolpick.config.validator import flatten_pydantic_errors
from toolpick.lib.errors import ConfigError, ToolNotFoundError
from toolpick.lib.logging_config import get_logger
from toolpick.models.tool import ToolResponse, ToolSchema

logger = get_logger(__name__)

ToolHandler = Callable[[dict[str, Any]], Any | Awaitable[Any]]


class ToolRegistry:
    """In-memory tool catalog backed by handler closures.

    Attributes:
        schemas: Registered schemas keyed by name, in registration order.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self.schemas: dict[str, ToolSchema] = {}
        self._handlers: dict[str, ToolHandler] = {}

    def __len__(self) -> int:
        return len(self.schemas)

    def __contains__(self, name: object) -> bool:
        return name in self.schemas

    def register(self, schema: ToolSchema, handler: ToolHandler | None = None) -> None:
        """Register a tool.

        Args:
            schema: Tool schema; its name must be unique.
            handler: Callable executing the tool. Schema-only tools can be
                listed and selected but not invoked.

        Raises:
            ValueError: If a tool with the same name is already registered.
        """
        if schema.name in self.schemas:
            raise ValueError(f"Tool '{schema.name}' is already registered")
        self.schemas[schema.name] = schema
        if handler is not None:
            self._handlers[schema.name] = handler
        logger.debug(f"Registered tool: {schema.name}")

    def tool(
        self,
        name: str,
        description: str,
        parameters: dict[str, Any] | None = None,
    ) -> Callable[[ToolHandler], ToolHandler]:
        """Decorator form of ``register``."""

        def decorator(handler: ToolHandler) -> ToolHandler:
            schema = ToolSchema(
                name=name, description=description, parameters=parameters or {}
            )
            self.register(schema, handler)
            return handler

        return decorator

    def list_tool_schemas(self) -> list[ToolSchema]:
        """Return all schemas in registration order."""
        return list(self.schemas.values())

    async def invoke(self, name: str, args: dict[str, Any]) -> ToolResponse:
        """Execute a registered tool.

        Raises:
            ToolNotFoundError: If no handler is registered under ``name``.
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise ToolNotFoundError(name)

        result = handler(args)
        if inspect.isawaitable(result):
            result = await result

        if isinstance(result, ToolResponse):
            return result
        return ToolResponse(content=result)


def load_catalog_file(path: Path) -> ToolRegistry:
    """Build a schema-only registry from a YAML catalog file.

    The file holds a ``tools`` list (or a bare list) of
    ``{name, description, parameters}`` entries.

    Raises:
        ConfigError: If the file cannot be read or is invalid.
    """
    try:
        content = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError("catalog", f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError("catalog", f"Invalid YAML in {path}: {e}") from e

    entries = content.get("tools", []) if isinstance(content, dict) else content
    if not isinstance(entries, list):
        raise ConfigError("catalog", f"{path} must contain a list of tools")

    registry = ToolRegistry()
    for index, entry in enumerate(entries):
        try:
            schema = ToolSchema.model_validate(entry)
        except PydanticValidationError as e:
            raise ConfigError(
                f"tools[{index}]", "; ".join(flatten_pydantic_errors(e))
            ) from e
        try:
            registry.register(schema)
        except ValueError as e:
            raise ConfigError(f"tools[{index}]", str(e)) from e

    logger.debug(f"Loaded {len(registry)} tools from {path}")
    return registry
