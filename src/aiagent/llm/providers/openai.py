from typing import Any

import httpx
from openai import APIError, APIStatusError, AsyncOpenAI
from pydantic import ValidationError

from ..base import CompletionService
from ..errors import CompletionError
from ..models import ChatMessage, CompletionResponse, Role

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "llama-3.1-8b-instant"


class OpenAICompatibleService(CompletionService):
    """Completion service for any OpenAI-compatible chat completions endpoint.

    Hidden design decisions:
    - AsyncOpenAI client initialization against a configurable base URL
    - Message format conversion
    - Bearer authentication (the SDK sends ``Authorization: Bearer <key>``)
    - Collapsing SDK and shape errors into CompletionError

    Groq, OpenAI and DeepSeek all speak this protocol; only the base URL,
    the credential and the default model differ.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str | None = GROQ_BASE_URL,
        max_retries: int = 0,
        http_client: httpx.AsyncClient | None = None,
        **client_kwargs: Any
    ):
        """Initialize the service.

        Args:
            api_key: Bearer credential; an empty string is accepted and
                makes every request fail with CompletionError
            model: Default model identifier
            base_url: API base URL (None uses the SDK default, api.openai.com)
            max_retries: SDK retry count, 0 so each call is one request
            http_client: Optional pre-built httpx client
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._base_url = base_url
        # Recent SDK releases refuse to build a client without a key, so the
        # client only exists once there is a credential
        self._client: AsyncOpenAI | None = None
        if api_key:
            self._client = AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                max_retries=max_retries,
                http_client=http_client,
                **client_kwargs
            )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    @property
    def base_url(self) -> str:
        """Get the endpoint base URL requests go to."""
        if self._client is not None:
            return str(self._client.base_url)
        return self._base_url or OPENAI_BASE_URL

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        **kwargs: Any
    ) -> CompletionResponse:
        """Generate a chat completion.

        Args:
            messages: Outbound message list
            model: Model to use (overrides default)
            **kwargs: Additional request parameters (temperature, max_tokens...)

        Returns:
            CompletionResponse with the first choice's message

        Raises:
            CompletionError: On a missing credential or any transport,
                status or shape failure
        """
        if self._client is None:
            raise CompletionError("No API key configured", status_code=401)

        model_to_use = model or self._model

        openai_messages = [
            {"role": msg.role, "content": msg.content}
            for msg in messages
        ]

        try:
            completion = await self._client.chat.completions.create(
                model=model_to_use,
                messages=openai_messages,
                **kwargs
            )
        except APIStatusError as e:
            raise CompletionError(
                f"Completion request rejected: {e.message}",
                status_code=e.status_code
            ) from e
        except APIError as e:
            raise CompletionError(f"Completion request failed: {e}") from e
        except ValueError as e:
            # Undecodable JSON body
            raise CompletionError(f"Malformed completion response: {e}") from e

        # The SDK builds response models without validation, so a body that
        # lacks "choices" arrives as None (or as plain text for non-JSON bodies)
        choices = getattr(completion, "choices", None)
        if not isinstance(choices, list):
            raise CompletionError("Malformed completion response: missing 'choices'")

        try:
            first = choices[0].message if choices else None
            content = first.content if first is not None else None

            message = None
            if isinstance(content, str) and content:
                message = ChatMessage(role=Role.ASSISTANT, content=content)

            usage = None
            raw_usage = getattr(completion, "usage", None)
            if raw_usage is not None:
                usage = {
                    "prompt_tokens": getattr(raw_usage, "prompt_tokens", 0) or 0,
                    "completion_tokens": getattr(raw_usage, "completion_tokens", 0) or 0,
                    "total_tokens": getattr(raw_usage, "total_tokens", 0) or 0,
                }

            return CompletionResponse(
                message=message,
                model=getattr(completion, "model", None) or model_to_use,
                usage=usage
            )
        except (ValidationError, AttributeError, TypeError, KeyError, ValueError) as e:
            raise CompletionError(f"Malformed completion response: {e}") from e

    async def close(self) -> None:
        """Close the OpenAI client.

        Note: Uses the OpenAI SDK's async context manager for proper cleanup.
        See: https://github.com/openai/openai-python#async-usage
        """
        if self._client is not None:
            await self._client.close()
