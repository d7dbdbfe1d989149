"""Events and effects exchanged by the session components.

Everything here is an immutable value so it can cross from a background
worker back to the event loop without sharing live state.
"""

from dataclasses import dataclass
from enum import Enum

from ..chat import Message


class Mode(str, Enum):
    """Input-routing state of the session."""

    NORMAL = "normal"    # Typing and transcript scrolling
    FOCUSED = "focused"  # Keyboard moves the message highlight
    FINDER = "finder"    # History finder owns the keyboard


@dataclass(frozen=True)
class KeyPress:
    """A terminal key event, independent of the UI toolkit."""

    key: str
    character: str | None = None
    printable: bool = False

    @classmethod
    def char(cls, character: str) -> "KeyPress":
        """Build the key press for a printable character."""
        key = "space" if character == " " else character
        return cls(key=key, character=character, printable=True)


@dataclass(frozen=True)
class UserSubmitted:
    """The input buffer accepted a message."""

    text: str


@dataclass(frozen=True)
class CompletionRequest:
    """History snapshot to send in one completion call."""

    history: tuple[Message, ...]


@dataclass(frozen=True)
class DispatchCompletion:
    """Effect: run a completion request in the background."""

    request: CompletionRequest


@dataclass(frozen=True)
class QuitSession:
    """Effect: stop the event loop and release the terminal."""


Effect = DispatchCompletion | QuitSession
