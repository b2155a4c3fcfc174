"""Build the configured selection strategy."""

from toolpick.lib.cache.embedding_cache import EmbeddingCache
from toolpick.lib.completion import TextCompletion
from toolpick.lib.embeddings.base import Embedder
from toolpick.lib.errors import ConfigError
from toolpick.lib.selectors.base import ToolSelector
from toolpick.lib.selectors.hybrid import HybridSelector
from toolpick.lib.selectors.llm_filter import LLMFilterSelector
from toolpick.lib.selectors.semantic import SemanticSelector
from toolpick.models.config import ToolPickConfig


def create_selector(
    config: ToolPickConfig,
    embedder: Embedder,
    embedding_cache: EmbeddingCache,
    completion: TextCompletion | None = None,
) -> ToolSelector:
    """Create the selector named by ``config.strategy``.

    Args:
        config: Selection configuration.
        embedder: Embedding provider for semantic ranking.
        embedding_cache: Tool embedding cache.
        completion: Text-completion service, required by LLM strategies.

    Returns:
        Configured selector.

    Raises:
        ConfigError: If an LLM strategy is configured without a completion
            service.
    """
    if config.strategy == "semantic":
        return SemanticSelector(embedder, embedding_cache)

    if completion is None:
        raise ConfigError(
            "strategy",
            f"'{config.strategy}' requires a text-completion service; "
            "configure 'llm' or use the 'semantic' strategy",
        )

    llm_filter = LLMFilterSelector(
        completion, config.llm_model, always_include=config.always_include
    )
    if config.strategy == "llm_filter":
        return llm_filter

    return HybridSelector(
        SemanticSelector(embedder, embedding_cache),
        llm_filter,
        llm_threshold=config.llm_threshold,
    )
