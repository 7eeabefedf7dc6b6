from .anthropic import AnthropicService
from .openai import OpenAICompatibleService

__all__ = ["AnthropicService", "OpenAICompatibleService"]
