from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import CompletionError, ErrorKind


class ChatMessage(BaseModel):
    """Represents a chat message on the wire."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Role of the message sender: 'user', 'assistant', or 'system'")
    content: str = Field(description="Content of the message")


class LLMResponse(BaseModel):
    """Response from an LLM provider."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated text content")
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )


class CompletionResult(BaseModel):
    """Outcome of one completion round trip.

    Exactly one of ``content`` or ``error`` is set. Results are plain values
    so they can be handed from a background worker back to the event loop.
    """

    model_config = ConfigDict(frozen=True)

    content: str | None = Field(default=None, description="Reply text on success")
    error: str | None = Field(default=None, description="Human-readable failure description")
    kind: ErrorKind | None = Field(default=None, description="Failure category")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, content: str) -> "CompletionResult":
        return cls(content=content)

    @classmethod
    def failure(cls, error: CompletionError | Exception) -> "CompletionResult":
        kind = error.kind if isinstance(error, CompletionError) else ErrorKind.UNEXPECTED
        return cls(error=str(error) or type(error).__name__, kind=kind)

    def describe(self) -> str:
        """Text to show in the transcript for this result."""
        if self.ok:
            return self.content or ""
        return f"Error: {self.error}"


def usage_dict(usage: Any) -> dict[str, int] | None:
    """Normalize a usage object from a completion payload."""
    if usage is None:
        return None
    return {
        "prompt_tokens": getattr(usage, "prompt_tokens", 0) or 0,
        "completion_tokens": getattr(usage, "completion_tokens", 0) or 0,
        "total_tokens": getattr(usage, "total_tokens", 0) or 0,
    }
