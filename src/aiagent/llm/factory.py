from typing import Any

from .base import CompletionService
from .providers import AnthropicService, OpenAICompatibleService
from .providers.openai import DEFAULT_MODEL, GROQ_BASE_URL

# OpenAI-compatible endpoints: provider -> (base_url, default model)
OPENAI_COMPATIBLE_PRESETS: dict[str, tuple[str | None, str]] = {
    "groq": (GROQ_BASE_URL, DEFAULT_MODEL),
    "openai": (None, "gpt-4o-mini"),
    "deepseek": ("https://api.deepseek.com", "deepseek-chat"),
}

SUPPORTED_PROVIDERS = (*OPENAI_COMPATIBLE_PRESETS, "anthropic")


def create_completion_service(provider: str, **config: Any) -> CompletionService:
    """Create a completion service instance.

    This factory function hides the instantiation logic for different vendors.

    Args:
        provider: Provider type ('groq', 'openai', 'deepseek', 'anthropic')
        **config: Service configuration
            - api_key: str (required, may be empty)
            - model: str | None (None uses the preset's default)
            - base_url: str | None (None uses the preset's endpoint)
            Any other keys are passed through to the service.

    Returns:
        Initialized completion service

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> service = create_completion_service("groq", api_key="gsk_...")
        >>> service.model
        'llama-3.1-8b-instant'
    """
    provider_lower = provider.lower()

    if "api_key" not in config:
        raise TypeError(f"{provider} provider requires 'api_key' in config")

    model = config.pop("model", None)
    base_url = config.pop("base_url", None)

    if provider_lower in OPENAI_COMPATIBLE_PRESETS:
        preset_url, preset_model = OPENAI_COMPATIBLE_PRESETS[provider_lower]
        return OpenAICompatibleService(
            model=model or preset_model,
            base_url=base_url or preset_url,
            **config
        )

    if provider_lower in ("anthropic", "claude"):
        if model:
            config["model"] = model
        return AnthropicService(base_url=base_url, **config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: {', '.join(repr(p) for p in SUPPORTED_PROVIDERS)}"
    )
