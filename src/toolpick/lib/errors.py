"""Custom exception hierarchy for toolpick configuration and operations."""


class ToolPickError(Exception):
    """Base exception for all toolpick errors.

    All toolpick-specific exceptions inherit from this class, enabling
    centralized exception handling by callers that embed the selector.
    """

    pass


class ConfigError(ToolPickError):
    """Exception raised for configuration errors.

    Raised when configuration loading, parsing or strategy wiring fails.

    Attributes:
        field: The configuration field that caused the error
        message: Human-readable error message describing the issue
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize ConfigError with field and message.

        Args:
            field: Configuration field name where error occurred
            message: Descriptive error message
        """
        self.field = field
        self.message = message
        super().__init__(f"Configuration error in '{field}': {message}")


class SelectorError(ToolPickError):
    """Exception raised when a selection strategy cannot produce a result.

    Attributes:
        strategy: Name of the strategy that failed
        message: Human-readable error message
    """

    def __init__(self, strategy: str, message: str) -> None:
        """Create a selector error with strategy context."""
        self.strategy = strategy
        self.message = message
        super().__init__(f"Selector '{strategy}' failed: {message}")


class EmbeddingError(SelectorError):
    """Exception raised when the embedding service fails."""

    def __init__(self, message: str) -> None:
        """Create an embedding error."""
        super().__init__("semantic", message)


class CompletionError(SelectorError):
    """Exception raised when the text-completion service fails."""

    def __init__(self, message: str) -> None:
        """Create a completion error."""
        super().__init__("llm_filter", message)


class SelectionTimeoutError(SelectorError):
    """Exception raised when a selection exceeds its configured timeout."""

    def __init__(self, strategy: str, timeout: float) -> None:
        """Create a timeout error for a strategy."""
        self.timeout = timeout
        super().__init__(strategy, f"selection timed out after {timeout}s")


class PersistenceError(ToolPickError):
    """Exception raised when a cache or quality store cannot be saved.

    In-memory state is never modified when this error is raised.

    Attributes:
        store: Name of the store being persisted (embeddings, quality)
        path: File path that failed
        message: Human-readable error message
    """

    def __init__(self, store: str, path: str, message: str) -> None:
        """Create a persistence error with store and path context."""
        self.store = store
        self.path = path
        self.message = message
        super().__init__(f"Failed to persist {store} to {path}: {message}")


class ToolNotFoundError(ToolPickError):
    """Exception raised when invoking a tool that is not registered."""

    def __init__(self, name: str) -> None:
        """Create a not-found error for a tool name."""
        self.name = name
        super().__init__(f"Tool '{name}' is not registered")
