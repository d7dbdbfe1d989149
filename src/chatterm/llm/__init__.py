from .base import LLMProvider
from .client import CompletionClient, to_wire_messages
from .errors import (
    CompletionError,
    EmptyResponseError,
    ErrorKind,
    MalformedResponseError,
    ServiceError,
    TransportError,
)
from .factory import create_llm_provider, create_llm_provider_from_settings
from .models import ChatMessage, CompletionResult, LLMResponse
from .providers import HTTPChatProvider, OpenAIProvider

__all__ = [
    "ChatMessage",
    "CompletionClient",
    "CompletionError",
    "CompletionResult",
    "EmptyResponseError",
    "ErrorKind",
    "HTTPChatProvider",
    "LLMProvider",
    "LLMResponse",
    "MalformedResponseError",
    "OpenAIProvider",
    "ServiceError",
    "TransportError",
    "create_llm_provider",
    "create_llm_provider_from_settings",
    "to_wire_messages",
]
