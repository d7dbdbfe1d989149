"""Pytest configuration and shared fixtures."""
from typing import Any

import pytest

from chatterm.chat import Message
from chatterm.config import Settings
from chatterm.llm import ChatMessage, CompletionError, LLMProvider, LLMResponse
from chatterm.session import (
    WELCOME_MESSAGE,
    PlainRenderer,
    SessionController,
    Transcript,
    TranscriptStyle,
)


class FakeProvider(LLMProvider):
    """Provider that records calls and replies from a script."""

    def __init__(self, reply: str = "hi there", error: CompletionError | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[list[ChatMessage]] = []
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.reply, model=model or self.model)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_provider():
    """Return a provider that answers 'hi there'."""
    return FakeProvider()


@pytest.fixture
def plain_style():
    """Style wide enough that short messages never wrap."""
    return TranscriptStyle(width=40, show_timestamp=False)


@pytest.fixture
def make_transcript(plain_style):
    """Build a transcript of short assistant messages rendered as plain text."""
    def _make(count: int = 0, height: int = 10) -> Transcript:
        messages = [Message.assistant(f"message {i}") for i in range(count)]
        return Transcript(
            messages,
            renderer=PlainRenderer(),
            style=plain_style,
            height=height,
        )
    return _make


@pytest.fixture
def controller(plain_style):
    """Controller with the welcome message and a plain-text transcript."""
    transcript = Transcript(
        [Message.assistant(WELCOME_MESSAGE)],
        renderer=PlainRenderer(),
        style=plain_style,
    )
    return SessionController(transcript=transcript, input_char_limit=4096)


@pytest.fixture
def settings():
    """Default settings without touching the filesystem."""
    return Settings()


@pytest.fixture
def make_provider():
    """Return the FakeProvider class for tests that script replies or errors."""
    return FakeProvider
