"""Provider factory functions for CLI.

Centralizes creation of the store, the completion service and the
conversation controller from environment variables.
Hides configuration details from command implementations.
"""

import os
from typing import Any

from rich.console import Console

from ..conversation import ConversationController
from ..diagnostics import DebugCallback
from ..llm import CompletionService, create_completion_service
from ..store import KeyValueStore, create_store

_console = Console()

# Environment variable holding each provider's bearer credential
API_KEY_ENV = {
    "groq": "GROQ_API_KEY",
    "openai": "OPENAI_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "claude": "ANTHROPIC_API_KEY",
}


def get_provider_name() -> str:
    """Selected provider (LLM_PROVIDER, default: groq)."""
    return os.getenv("LLM_PROVIDER", "groq").lower()


def get_api_key(provider: str) -> str | None:
    """Credential for ``provider`` from its environment variable."""
    env_var = API_KEY_ENV.get(provider)
    return os.getenv(env_var) if env_var else None


def get_store() -> KeyValueStore:
    """Create the history store from environment variables.

    Returns:
        Key-value store instance

    Environment variables:
        CHAT_STORE: Store backend (file or memory; default: file)
        CHAT_STORE_PATH: Directory for the file store (default: ~/.aiagent)
    """
    backend = os.getenv("CHAT_STORE", "file").lower()
    config: dict[str, Any] = {}
    store_path = os.getenv("CHAT_STORE_PATH")
    if backend == "file" and store_path:
        config["path"] = store_path
    return create_store(backend, **config)


def get_service(console: Console | None = None) -> CompletionService:
    """Create the completion service from environment variables.

    A missing credential is not fatal: the service is built with an empty
    key and every request fails, which the conversation reports inline.

    Args:
        console: Optional Rich console for output

    Returns:
        Completion service instance

    Raises:
        ValueError: If LLM_PROVIDER names an unknown provider

    Environment variables:
        LLM_PROVIDER: groq, openai, deepseek or anthropic (default: groq)
        GROQ_API_KEY / OPENAI_API_KEY / DEEPSEEK_API_KEY / ANTHROPIC_API_KEY
        LLM_MODEL: Model identifier (default: provider preset)
        LLM_BASE_URL: Endpoint override (default: provider preset)
    """
    con = console or _console
    provider = get_provider_name()

    api_key = get_api_key(provider)
    if not api_key and provider in API_KEY_ENV:
        con.print(
            f"[yellow]Warning: {API_KEY_ENV[provider]} not set, "
            f"requests will fail[/yellow]"
        )

    return create_completion_service(
        provider,
        api_key=api_key or "",
        model=os.getenv("LLM_MODEL") or None,
        base_url=os.getenv("LLM_BASE_URL") or None,
    )


def get_controller(
    console: Console | None = None,
    debug_callback: DebugCallback | None = None,
) -> ConversationController:
    """Build an initialized conversation controller from the environment.

    Args:
        console: Optional Rich console for output
        debug_callback: Optional diagnostic sink

    Returns:
        Controller with history loaded from the store
    """
    controller = ConversationController(
        service=get_service(console),
        store=get_store(),
    )
    controller.set_debug_callback(debug_callback)
    controller.initialize()
    return controller
