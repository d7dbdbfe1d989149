"""Completion client.

Adapter between the conversation model and an LLM provider: one call sends
the whole history and returns a result value. Failures are never raised.
"""

from collections.abc import Sequence

from ..chat import Message
from .base import LLMProvider
from .errors import CompletionError
from .models import ChatMessage, CompletionResult


def to_wire_messages(history: Sequence[Message]) -> list[ChatMessage]:
    """Map conversation messages to wire messages, dropping timestamps."""
    return [ChatMessage(role=msg.role.value, content=msg.content) for msg in history]


class CompletionClient:
    """Sends a conversation history to the completion service.

    The client holds no conversation state. Every call sends the full
    history it is given; nothing is truncated or summarized. There are no
    retries and no timeout handling here.
    """

    def __init__(self, provider: LLMProvider, model: str | None = None) -> None:
        self._provider = provider
        self._model = model

    @property
    def model(self) -> str:
        return self._model or self._provider.model

    async def send(self, history: Sequence[Message]) -> CompletionResult:
        """Run one completion round trip.

        Args:
            history: Full conversation, oldest first

        Returns:
            CompletionResult with the reply text or an error description
        """
        try:
            response = await self._provider.chat_completion(
                to_wire_messages(history),
                model=self._model,
            )
        except CompletionError as e:
            return CompletionResult.failure(e)
        return CompletionResult.success(response.content)

    async def close(self) -> None:
        await self._provider.close()
