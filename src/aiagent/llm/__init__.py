from .base import CompletionService
from .errors import CompletionError
from .factory import SUPPORTED_PROVIDERS, create_completion_service
from .models import ChatMessage, CompletionResponse, Role
from .providers import AnthropicService, OpenAICompatibleService

__all__ = [
    "CompletionService",
    "CompletionError",
    "create_completion_service",
    "SUPPORTED_PROVIDERS",
    "ChatMessage",
    "CompletionResponse",
    "Role",
    "AnthropicService",
    "OpenAICompatibleService",
]
