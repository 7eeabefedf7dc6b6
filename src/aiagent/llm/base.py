from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, CompletionResponse


class CompletionService(ABC):
    """Abstract base class for completion services.

    This module hides the design decision of which hosted model vendor
    answers the conversation. Implementations must handle vendor-specific
    details like:
    - API client setup and bearer authentication
    - Request/response format conversion
    - Mapping every failure onto CompletionError

    Supports async context manager protocol for proper resource cleanup:
        async with service:
            response = await service.chat_completion(messages)
        # Automatically cleaned up
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Get the default model name."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        **kwargs: Any
    ) -> CompletionResponse:
        """Generate a chat completion.

        Args:
            messages: Full outbound message list (system prompt + history)
            model: Model to use (None uses the service's default)
            **kwargs: Vendor-specific parameters

        Returns:
            CompletionResponse holding the first choice's message, if any

        Raises:
            CompletionError: On network failure, non-success status or a
                response missing the expected shape
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "CompletionService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
