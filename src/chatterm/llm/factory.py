from typing import Any

from .base import LLMProvider
from .providers import HTTPChatProvider, OpenAIProvider


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider instance.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type ('openai', 'http' or 'openai-compatible')
        **config: Provider configuration
            - api_key: str (required, may be empty for local services)
            - model: str (default: 'gpt-3.5-turbo')
            - endpoint: str (full chat completions URL)

    Returns:
        Initialized LLM provider instance

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> provider = create_llm_provider(
        ...     "http",
        ...     api_key="",
        ...     model="llama3",
        ...     endpoint="http://localhost:11434/v1/chat/completions"
        ... )
    """
    provider_lower = provider.lower()

    if "api_key" not in config:
        raise TypeError(f"{provider} provider requires 'api_key' in config")

    if provider_lower == "openai":
        return OpenAIProvider(**config)

    if provider_lower in ("http", "openai-compatible"):
        return HTTPChatProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'openai', 'http'"
    )


def create_llm_provider_from_settings(settings: Any) -> LLMProvider:
    """Create the provider described by an LLMSettings record."""
    return create_llm_provider(
        settings.provider,
        api_key=settings.api_key,
        model=settings.model,
        endpoint=settings.endpoint,
    )
