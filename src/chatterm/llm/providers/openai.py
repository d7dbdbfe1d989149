from typing import Any

import openai
from openai import AsyncOpenAI

from ...config.models import DEFAULT_ENDPOINT
from ..base import LLMProvider
from ..errors import (
    EmptyResponseError,
    MalformedResponseError,
    ServiceError,
    TransportError,
)
from ..models import ChatMessage, LLMResponse, usage_dict

CHAT_COMPLETIONS_PATH = "/chat/completions"


def base_url_from_endpoint(endpoint: str | None) -> str | None:
    """Derive the SDK base URL from a full chat completions endpoint.

    "https://host/v1/chat/completions" -> "https://host/v1"
    """
    if not endpoint:
        return None
    trimmed = endpoint.rstrip("/")
    if trimmed.endswith(CHAT_COMPLETIONS_PATH):
        return trimmed[: -len(CHAT_COMPLETIONS_PATH)]
    return trimmed


def _service_error(e: openai.APIStatusError) -> ServiceError:
    body = e.body
    if isinstance(body, dict) and body.get("message") is not None:
        code = body.get("code")
        return ServiceError(
            e.status_code,
            message=str(body["message"]),
            error_type=body.get("type"),
            code=None if code is None else str(code),
        )
    return ServiceError(e.status_code, body=e.response.text)


class OpenAIProvider(LLMProvider):
    """OpenAI LLM provider implementation.

    Hidden design decisions:
    - OpenAI API client initialization
    - Message format conversion
    - Mapping SDK exceptions onto the CompletionError taxonomy
    - Authentication mechanism
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        endpoint: str | None = DEFAULT_ENDPOINT,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Default model to use
            endpoint: Full chat completions URL; the SDK base URL is derived from it
            organization: Optional organization ID
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        # The SDK retries by default; a completion here is one attempt
        client_kwargs.setdefault("max_retries", 0)
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url_from_endpoint(endpoint),
            organization=organization,
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
    ) -> LLMResponse:
        """Generate a chat completion using OpenAI.

        Args:
            messages: Conversation history
            model: Model to use (overrides default)
            **kwargs: Additional OpenAI-specific parameters

        Returns:
            LLMResponse with generated content
        """
        openai_messages = [
            {"role": msg.role, "content": msg.content}
            for msg in messages
        ]

        try:
            completion = await self._client.chat.completions.create(
                model=model or self._model,
                messages=openai_messages,
                stream=False,
                **kwargs
            )
        except openai.APIConnectionError as e:
            raise TransportError(f"error sending request: {e}") from e
        except openai.APIStatusError as e:
            raise _service_error(e) from e
        except openai.APIError as e:
            raise MalformedResponseError(f"error parsing response: {e}") from e

        if not completion.choices:
            raise EmptyResponseError()

        return LLMResponse(
            content=completion.choices[0].message.content or "",
            model=completion.model,
            usage=usage_dict(completion.usage),
        )

    async def close(self) -> None:
        """Close the OpenAI client."""
        await self._client.close()
