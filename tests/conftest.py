"""Pytest configuration and shared fixtures for toolpick tests."""

import logging
import re
import shutil
import tempfile
from collections.abc import Generator, Sequence
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from toolpick.lib.logging_config import ROOT_LOGGER_NAME
from toolpick.models.tool import ToolSchema

EMPTY_CLASSIFICATION = '{"utility_tools": [], "relevant_groups": [], "relevant_tools": []}'


class VocabularyEmbedder:
    """Deterministic embedder with one dimension per vocabulary word.

    Vectors count occurrences of each vocabulary word, so similarity is
    exact and free of hash collisions. Every batch is recorded in ``calls``.
    """

    def __init__(self, vocabulary: Sequence[str], model_id: str = "vocab-test") -> None:
        self.vocabulary = list(vocabulary)
        self.model_id = model_id
        self.calls: list[list[str]] = []

    def embed_text(self, text: str) -> list[float]:
        tokens = re.findall(r"[a-z0-9]+", text.lower())
        return [float(tokens.count(word)) for word in self.vocabulary]

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self.embed_text(text) for text in texts]


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Create a temporary directory for test file operations.

    Yields:
        Path to temporary directory

    Cleanup:
        Automatically removes directory after test
    """
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_toolpick_logging() -> Generator[None]:
    """Undo handlers installed by setup_logging so caplog keeps working."""
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.propagate = True
    root.setLevel(logging.NOTSET)


@pytest.fixture
def embedder() -> VocabularyEmbedder:
    """Vocabulary embedder covering the sample tool catalog."""
    return VocabularyEmbedder(
        [
            "weather",
            "forecast",
            "city",
            "tokyo",
            "calc",
            "add",
            "numbers",
            "file",
            "read",
            "disk",
            "web",
            "search",
        ]
    )


@pytest.fixture
def sample_tools() -> list[ToolSchema]:
    """Three-tool catalog with one tool per group."""
    return [
        ToolSchema(name="weather_get", description="Get the current weather for a city"),
        ToolSchema(name="calc_add", description="Add two numbers"),
        ToolSchema(name="file_read", description="Read a file from disk"),
    ]


@pytest.fixture
def six_tools() -> list[ToolSchema]:
    """Six-tool catalog spread over three groups."""
    return [
        ToolSchema(name="weather_get", description="Get the current weather for a city"),
        ToolSchema(name="weather_forecast", description="Weather forecast for a city"),
        ToolSchema(name="calc_add", description="Add two numbers"),
        ToolSchema(name="calc_multiply", description="Multiply two numbers"),
        ToolSchema(name="file_read", description="Read a file from disk"),
        ToolSchema(name="file_write", description="Write a file to disk"),
    ]


@pytest.fixture
def mock_completion() -> MagicMock:
    """Text-completion service returning an empty classification."""
    completion = MagicMock()
    completion.complete = AsyncMock(return_value=EMPTY_CLASSIFICATION)
    return completion
