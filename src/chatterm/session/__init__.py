"""Session state machine.

Module structure (each module hides a design decision):
- events.py: Values exchanged between components (keys, requests, effects)
- keys.py: Key bindings per mode
- input_buffer.py: Text entry and cursor handling
- transcript.py: Message layout, scrolling and focus
- rendering.py: Markdown rendering and styles
- finder.py: History finder skeleton
- scheduler.py: Overlapping request policy
- controller.py: Mode ownership and event routing
"""

from .controller import WELCOME_MESSAGE, SessionController
from .events import (
    CompletionRequest,
    DispatchCompletion,
    Effect,
    KeyPress,
    Mode,
    QuitSession,
    UserSubmitted,
)
from .finder import PLACEHOLDER_ENTRIES, HistoryFinder
from .input_buffer import InputBuffer
from .keys import DEFAULT_KEYMAP, KeyBinding, KeyMap
from .rendering import (
    MarkdownRenderer,
    Palette,
    PlainRenderer,
    TextRenderer,
    TranscriptStyle,
    get_palette,
)
from .scheduler import RequestScheduler
from .transcript import Transcript

__all__ = [
    "DEFAULT_KEYMAP",
    "PLACEHOLDER_ENTRIES",
    "WELCOME_MESSAGE",
    "CompletionRequest",
    "DispatchCompletion",
    "Effect",
    "HistoryFinder",
    "InputBuffer",
    "KeyBinding",
    "KeyMap",
    "KeyPress",
    "MarkdownRenderer",
    "Mode",
    "Palette",
    "PlainRenderer",
    "QuitSession",
    "RequestScheduler",
    "SessionController",
    "TextRenderer",
    "Transcript",
    "TranscriptStyle",
    "UserSubmitted",
    "get_palette",
]
