"""Plain HTTP transport for OpenAI-compatible chat completion endpoints.

Posts the request body to the configured URL as-is, so any service that
speaks the chat completions format (local servers, gateways) can be used.
"""

from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from ...config.models import DEFAULT_ENDPOINT
from ..base import LLMProvider
from ..errors import (
    EmptyResponseError,
    MalformedResponseError,
    ServiceError,
    TransportError,
)
from ..models import ChatMessage, LLMResponse


class _ErrorDetail(BaseModel):
    message: str
    type: str | None = None
    code: str | int | None = None


class _ErrorEnvelope(BaseModel):
    error: _ErrorDetail


class _ChoiceMessage(BaseModel):
    role: str | None = None
    content: str | None = None


class _Choice(BaseModel):
    index: int = 0
    message: _ChoiceMessage


class _Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class _CompletionPayload(BaseModel):
    id: str | None = None
    model: str | None = None
    choices: list[_Choice]
    usage: _Usage | None = None


def parse_error_response(status_code: int, body: str) -> ServiceError:
    """Build a ServiceError from a non-success response body."""
    try:
        envelope = _ErrorEnvelope.model_validate_json(body)
    except ValidationError:
        return ServiceError(status_code, body=body)

    detail = envelope.error
    return ServiceError(
        status_code,
        message=detail.message,
        error_type=detail.type,
        code=None if detail.code is None else str(detail.code),
    )


class HTTPChatProvider(LLMProvider):
    """Chat completions over a single JSON POST.

    Hidden design decisions:
    - Request body shape: {model, messages, stream: false}
    - Bearer authentication header
    - Error envelope parsing with raw status/body fallback
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        endpoint: str = DEFAULT_ENDPOINT,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the HTTP provider.

        Args:
            api_key: Bearer token sent with every request
            model: Default model name
            endpoint: Full URL of the chat completions endpoint
            client: Optional preconfigured httpx client (owned by the caller)
        """
        self._api_key = api_key
        self._model = model
        self._endpoint = endpoint
        self._owns_client = client is None
        # No timeout: a completion may take as long as the service needs
        self._client = client or httpx.AsyncClient(timeout=None)

    @property
    def model(self) -> str:
        return self._model

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Send the conversation and return the first choice.

        Raises:
            TransportError: Request could not be sent or response not read
            ServiceError: Non-2xx status
            MalformedResponseError: Body is not a completion payload
            EmptyResponseError: Payload has no choices
        """
        payload = {
            "model": model or self._model,
            "messages": [msg.model_dump() for msg in messages],
            "stream": False,
            **kwargs,
        }

        try:
            response = await self._client.post(
                self._endpoint,
                json=payload,
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            raise TransportError(f"error sending request: {e}") from e

        if not response.is_success:
            raise parse_error_response(response.status_code, response.text)

        try:
            completion = _CompletionPayload.model_validate_json(response.content)
        except ValidationError as e:
            raise MalformedResponseError(f"error parsing response: {e}") from e

        if not completion.choices:
            raise EmptyResponseError()

        usage = completion.usage.model_dump() if completion.usage else None
        return LLMResponse(
            content=completion.choices[0].message.content or "",
            model=completion.model or payload["model"],
            usage=usage,
        )

    async def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()
