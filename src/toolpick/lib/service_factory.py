"""Create embedding and completion services from provider configuration.

The services created here use Semantic Kernel connector classes, which are
lightweight wrappers around the OpenAI, Azure OpenAI and Ollama APIs and do
not require a full kernel.
"""

from __future__ import annotations

from typing import Any

from toolpick.lib.completion import KernelTextCompletion, TextCompletion
from toolpick.lib.embeddings.base import Embedder
from toolpick.lib.embeddings.hashing import HashingEmbedder
from toolpick.lib.embeddings.kernel import KernelEmbedder
from toolpick.lib.errors import ConfigError
from toolpick.lib.logging_config import get_logger
from toolpick.models.config import ProviderConfig, ProviderEnum, ToolPickConfig

logger = get_logger(__name__)


def _create_embedding_service(config: ProviderConfig) -> Any:
    from semantic_kernel.connectors.ai.open_ai import (
        AzureTextEmbedding,
        OpenAITextEmbedding,
    )

    if config.provider == ProviderEnum.OPENAI:
        return OpenAITextEmbedding(ai_model_id=config.model, api_key=config.api_key)

    if config.provider == ProviderEnum.AZURE_OPENAI:
        if not config.endpoint:
            raise ConfigError("embedding.endpoint", "Azure OpenAI requires an endpoint")
        return AzureTextEmbedding(
            deployment_name=config.model,
            endpoint=config.endpoint,
            api_key=config.api_key,
        )

    try:
        from semantic_kernel.connectors.ai.ollama import OllamaTextEmbedding
    except ImportError as exc:
        raise ConfigError(
            "embedding.provider",
            "Ollama provider requires 'ollama' package. "
            "Install with: pip install ollama",
        ) from exc

    return OllamaTextEmbedding(ai_model_id=config.model, host=config.endpoint)


def _create_chat_service(config: ProviderConfig) -> Any:
    from semantic_kernel.connectors.ai.open_ai import (
        AzureChatCompletion,
        OpenAIChatCompletion,
    )

    if config.provider == ProviderEnum.OPENAI:
        return OpenAIChatCompletion(ai_model_id=config.model, api_key=config.api_key)

    if config.provider == ProviderEnum.AZURE_OPENAI:
        if not config.endpoint:
            raise ConfigError("llm.endpoint", "Azure OpenAI requires an endpoint")
        return AzureChatCompletion(
            deployment_name=config.model,
            endpoint=config.endpoint,
            api_key=config.api_key,
        )

    try:
        from semantic_kernel.connectors.ai.ollama import OllamaChatCompletion
    except ImportError as exc:
        raise ConfigError(
            "llm.provider",
            "Ollama provider requires 'ollama' package. "
            "Install with: pip install ollama",
        ) from exc

    return OllamaChatCompletion(ai_model_id=config.model, host=config.endpoint)


def create_embedder(config: ToolPickConfig) -> Embedder:
    """Create the embedder described by ``config.embedding``.

    Falls back to the offline ``HashingEmbedder`` when no provider is set.
    """
    if config.embedding is None:
        logger.debug("No embedding provider configured, using hashing embedder")
        return HashingEmbedder()

    logger.debug(
        f"Creating embedding service: model={config.embedding.model}, "
        f"provider={config.embedding.provider.value}"
    )
    service = _create_embedding_service(config.embedding)
    return KernelEmbedder(service, model_id=config.embedding.model)


def create_completion(config: ToolPickConfig) -> TextCompletion | None:
    """Create the text-completion service described by ``config.llm``.

    Returns:
        Completion adapter, or None when no provider is configured.
    """
    if config.llm is None:
        return None

    logger.debug(
        f"Creating chat completion service: model={config.llm.model}, "
        f"provider={config.llm.provider.value}"
    )
    return KernelTextCompletion(_create_chat_service(config.llm))
