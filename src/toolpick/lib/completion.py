"""Text-completion contract and Semantic Kernel adapter.

The LLM filtering strategy only needs single-turn completions: a prompt and a
model name in, text out. ``KernelTextCompletion`` provides that on top of any
Semantic Kernel chat completion service, with exponential backoff retries.
"""

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from toolpick.lib.errors import CompletionError
from toolpick.lib.logging_config import get_logger

if TYPE_CHECKING:
    from semantic_kernel.connectors.ai.chat_completion_client_base import (
        ChatCompletionClientBase,
    )
    from semantic_kernel.connectors.ai.prompt_execution_settings import (
        PromptExecutionSettings,
    )

logger = get_logger(__name__)


@runtime_checkable
class TextCompletion(Protocol):
    """Single-turn text completion service."""

    async def complete(
        self, prompt: str, model: str, system_prompt: str | None = None
    ) -> str:
        """Return the model's completion for a prompt."""
        ...


@dataclass
class RetryConfig:
    """Configuration for exponential backoff retry logic.

    Attributes:
        max_retries: Maximum number of attempts (default: 3).
        base_delay: Initial delay in seconds before first retry (default: 1.0).
        exponential_base: Multiplier for exponential backoff (default: 2.0).
        max_delay: Maximum delay between retries in seconds (default: 10.0).

    Example:
        With defaults, delays are: 1s, 2s (capped at max_delay if exceeded).
    """

    max_retries: int = 3
    base_delay: float = 1.0
    exponential_base: float = 2.0
    max_delay: float = 10.0


class KernelTextCompletion:
    """Text completion backed by a Semantic Kernel chat completion service.

    Example:
        >>> from semantic_kernel.connectors.ai.open_ai import OpenAIChatCompletion
        >>> service = OpenAIChatCompletion(ai_model_id="gpt-4o-mini")
        >>> completion = KernelTextCompletion(service)
        >>> text = await completion.complete("Classify these tools", "gpt-4o-mini")
    """

    def __init__(
        self,
        chat_service: "ChatCompletionClientBase",
        execution_settings: "PromptExecutionSettings | None" = None,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            chat_service: Semantic Kernel chat completion service instance.
            execution_settings: Optional prompt execution settings. If not
                provided, deterministic settings for the requested model are
                used.
            retry_config: Configuration for retry logic.
        """
        self._chat_service = chat_service
        self._execution_settings = execution_settings
        self._retry_config = retry_config or RetryConfig()

    async def _call_llm(
        self, prompt: str, model: str, system_prompt: str | None
    ) -> str:
        # Import here to allow mocking and keep SK optional at import time
        from semantic_kernel.connectors.ai.open_ai import (
            OpenAIChatPromptExecutionSettings,
        )
        from semantic_kernel.contents import ChatHistory

        chat_history = ChatHistory()
        if system_prompt:
            chat_history.add_system_message(system_prompt)
        chat_history.add_user_message(prompt)

        settings = self._execution_settings or OpenAIChatPromptExecutionSettings(
            ai_model_id=model, temperature=0.0
        )
        result = await self._chat_service.get_chat_message_contents(
            chat_history=chat_history,
            settings=settings,
        )

        if result and len(result) > 0:
            content = result[0].content
            return str(content).strip() if content else ""
        return ""

    def _get_retry_delay(self, attempt: int) -> float:
        delay = self._retry_config.base_delay * (
            self._retry_config.exponential_base**attempt
        )
        return min(delay, self._retry_config.max_delay)

    async def complete(
        self, prompt: str, model: str, system_prompt: str | None = None
    ) -> str:
        """Run a completion with retries.

        Args:
            prompt: User prompt.
            model: Model name.
            system_prompt: Optional system instructions.

        Returns:
            Completion text (may be empty).

        Raises:
            CompletionError: If every attempt fails.
        """
        max_retries = max(1, self._retry_config.max_retries)
        for attempt in range(max_retries):
            try:
                return await self._call_llm(prompt, model, system_prompt)
            except Exception as e:
                if attempt == max_retries - 1:
                    raise CompletionError(
                        f"{model} completion failed after {max_retries} attempts: {e}"
                    ) from e

                delay = self._get_retry_delay(attempt)
                logger.debug(
                    f"Retry attempt {attempt + 1}/{max_retries} "
                    f"after {delay:.2f}s delay: {e}"
                )
                await asyncio.sleep(delay)

        raise CompletionError(f"{model} completion was not attempted")
