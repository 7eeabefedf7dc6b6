"""Anthropic Claude completion service.

Uses the official Anthropic Python SDK for async chat completions.
Reference: https://github.com/anthropics/anthropic-sdk-python
"""

from typing import Any

from anthropic import APIError, APIStatusError, AsyncAnthropic
from pydantic import ValidationError

from ..base import CompletionService
from ..errors import CompletionError
from ..models import ChatMessage, CompletionResponse, Role


class AnthropicService(CompletionService):
    """Anthropic Claude completion service.

    Hidden design decisions:
    - Anthropic API client initialization
    - Message format conversion (system message handling)
    - Collapsing SDK and shape errors into CompletionError
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        base_url: str | None = None,
        max_tokens: int = 1024,
        max_retries: int = 0,
        **client_kwargs: Any
    ):
        """Initialize Anthropic service.

        Args:
            api_key: Anthropic API key
            model: Default model to use
            base_url: Optional custom API base URL
            max_tokens: Completion length cap (required by the Messages API)
            max_retries: SDK retry count, 0 so each call is one request
            **client_kwargs: Additional kwargs for AsyncAnthropic client
        """
        self._model = model
        self._max_tokens = max_tokens
        self._client: AsyncAnthropic | None = None
        if api_key:
            self._client = AsyncAnthropic(
                api_key=api_key,
                base_url=base_url,
                max_retries=max_retries,
                **client_kwargs
            )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        **kwargs: Any
    ) -> CompletionResponse:
        """Generate a chat completion using Anthropic Claude.

        The Messages API takes the system prompt as a separate parameter,
        so system messages are lifted out of the list.
        """
        model_to_use = model or self._model

        # No client is built without a key
        if self._client is None:
            raise CompletionError("No Anthropic API key configured", status_code=401)

        system_parts = []
        anthropic_messages = []
        for msg in messages:
            if msg.role == Role.SYSTEM:
                system_parts.append(msg.content)
            else:
                anthropic_messages.append({
                    "role": msg.role,
                    "content": msg.content
                })

        request_params: dict[str, Any] = {
            "model": model_to_use,
            "messages": anthropic_messages,
            "max_tokens": self._max_tokens,
            **kwargs
        }
        if system_parts:
            request_params["system"] = "\n\n".join(system_parts)

        try:
            response = await self._client.messages.create(**request_params)
        except APIStatusError as e:
            raise CompletionError(
                f"Completion request rejected: {e.message}",
                status_code=e.status_code
            ) from e
        except APIError as e:
            raise CompletionError(f"Completion request failed: {e}") from e
        except ValueError as e:
            raise CompletionError(f"Malformed completion response: {e}") from e

        try:
            content = "".join(
                block.text for block in response.content if hasattr(block, "text")
            )

            usage = None
            if getattr(response, "usage", None):
                usage = {
                    "prompt_tokens": response.usage.input_tokens,
                    "completion_tokens": response.usage.output_tokens,
                    "total_tokens": response.usage.input_tokens + response.usage.output_tokens
                }

            message = ChatMessage(role=Role.ASSISTANT, content=content) if content else None
            return CompletionResponse(
                message=message,
                model=getattr(response, "model", None) or model_to_use,
                usage=usage
            )
        except (ValidationError, AttributeError, TypeError, ValueError) as e:
            raise CompletionError(f"Malformed completion response: {e}") from e

    async def close(self) -> None:
        """Close the Anthropic client."""
        if self._client is not None:
            await self._client.close()
