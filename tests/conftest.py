"""Pytest configuration and shared fixtures."""
import asyncio
import os
from collections.abc import Callable
from typing import Any

import pytest

from aiagent.conversation import ConversationController
from aiagent.llm import (
    ChatMessage,
    CompletionError,
    CompletionResponse,
    CompletionService,
    Role,
)
from aiagent.store import InMemoryStore

TEST_SYSTEM_PROMPT = "You are a test assistant."


class FakeCompletionService(CompletionService):
    """Completion service double that records calls and replays a canned outcome."""

    def __init__(
        self,
        reply: str | None = None,
        error: Exception | None = None,
        model: str = "fake-model",
    ):
        self._model = model
        self.reply = reply
        self.error = error
        self.calls: list[tuple[list[ChatMessage], str | None]] = []
        self.on_call: Callable[[], Any] | None = None
        self.closed = False

    @property
    def model(self) -> str:
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        **kwargs: Any
    ) -> CompletionResponse:
        self.calls.append((list(messages), model))
        if self.on_call is not None:
            self.on_call()
        # Yield once so the call is a real suspension point
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        message = None
        if self.reply:
            message = ChatMessage(role=Role.ASSISTANT, content=self.reply)
        return CompletionResponse(message=message, model=model or self._model)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "groq": os.getenv("GROQ_API_KEY"),
        "openai": os.getenv("OPENAI_API_KEY"),
    }


@pytest.fixture
def store():
    """Empty in-memory store."""
    return InMemoryStore()


@pytest.fixture
def service():
    """Fake service answering 'hi there'."""
    return FakeCompletionService(reply="hi there")


@pytest.fixture
def failing_service():
    """Fake service whose every call fails like a dropped connection."""
    return FakeCompletionService(error=CompletionError("Connection error."))


@pytest.fixture
def make_controller(store):
    """Factory building an initialized controller over the shared store."""
    def _make(service: CompletionService, **kwargs: Any) -> ConversationController:
        kwargs.setdefault("system_prompt", TEST_SYSTEM_PROMPT)
        controller = ConversationController(service=service, store=store, **kwargs)
        controller.initialize()
        return controller
    return _make


@pytest.fixture
def controller(make_controller, service):
    """Controller over the 'hi there' service and an empty store."""
    return make_controller(service)


@pytest.fixture
def fake_service_cls():
    """The FakeCompletionService class, for tests that need custom instances."""
    return FakeCompletionService
