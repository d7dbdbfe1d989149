from .http import HTTPChatProvider
from .openai import OpenAIProvider

__all__ = ["HTTPChatProvider", "OpenAIProvider"]
