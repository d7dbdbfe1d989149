"""Session controller.

The single authority for the session mode and event routing. Handlers are
synchronous: they mutate the owned components and return effects for the
UI layer to execute (background completions, quitting).
"""

from ..chat import Message
from ..config import Settings
from ..llm import CompletionResult
from .events import (
    CompletionRequest,
    DispatchCompletion,
    Effect,
    KeyPress,
    Mode,
    QuitSession,
)
from .finder import HistoryFinder
from .input_buffer import InputBuffer
from .keys import DEFAULT_KEYMAP, KeyMap
from .rendering import TextRenderer, TranscriptStyle, get_palette
from .scheduler import RequestScheduler
from .transcript import MOUSE_SCROLL_LINES, Transcript

WELCOME_MESSAGE = "Welcome to chatterm! Type your message below and press Enter to send."

INPUT_HEIGHT = 1
MIN_TRANSCRIPT_HEIGHT = 5


class SessionController:
    """Routes terminal events to the transcript, input buffer and finder."""

    def __init__(
        self,
        transcript: Transcript | None = None,
        input_buffer: InputBuffer | None = None,
        finder: HistoryFinder | None = None,
        scheduler: RequestScheduler | None = None,
        keys: KeyMap | None = None,
        input_char_limit: int | None = None,
        focus_on_reply: bool = False,
    ) -> None:
        self._keys = keys or DEFAULT_KEYMAP
        self._transcript = transcript or Transcript(
            [Message.assistant(WELCOME_MESSAGE)],
            scroll_keys=self._keys.scroll,
            focus_keys=self._keys.focus,
        )
        self._input = input_buffer or InputBuffer(keys=self._keys.edit)
        self._finder = finder or HistoryFinder(keys=self._keys.finder)
        self._scheduler = scheduler or RequestScheduler()
        self._input_char_limit = input_char_limit
        self._focus_on_reply = focus_on_reply
        self._mode = Mode.NORMAL

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        renderer: TextRenderer | None = None,
    ) -> "SessionController":
        """Build a controller configured from application settings."""
        style = TranscriptStyle(
            palette=get_palette(settings.ui.theme),
            max_width=settings.ui.max_width,
            show_timestamp=settings.ui.show_timestamp,
        )
        transcript = Transcript(
            [Message.assistant(WELCOME_MESSAGE)],
            renderer=renderer,
            style=style,
        )
        return cls(
            transcript=transcript,
            scheduler=RequestScheduler(settings.llm.request_policy),
            input_char_limit=settings.ui.input_char_limit,
            focus_on_reply=settings.ui.focus_on_reply,
        )

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def transcript(self) -> Transcript:
        return self._transcript

    @property
    def input_buffer(self) -> InputBuffer:
        return self._input

    @property
    def finder(self) -> HistoryFinder:
        return self._finder

    @property
    def scheduler(self) -> RequestScheduler:
        return self._scheduler

    def on_resize(self, width: int, height: int) -> list[Effect]:
        """Lay out the transcript above a one-row input line."""
        transcript_height = max(height - INPUT_HEIGHT, MIN_TRANSCRIPT_HEIGHT)
        self._transcript.resize(width, transcript_height)
        self._input.resize(width)
        self._finder.resize(width, height)
        return []

    def on_key(self, key: KeyPress) -> list[Effect]:
        """Route a key press: global keys first, then by mode."""
        global_keys = self._keys.global_keys

        if global_keys.quit.matches(key.key):
            return [QuitSession()]
        if global_keys.toggle_finder.matches(key.key):
            self._toggle_finder()
            return []

        if self._mode is Mode.FINDER:
            self._finder.handle_key(key)
            return []

        if self._mode is Mode.FOCUSED:
            if not self._transcript.handle_focus_key(key):
                self._mode = Mode.NORMAL
            return []

        if global_keys.focus.matches(key.key):
            self.enter_focus()
            return []

        # Normal mode: both components see the same key
        self._transcript.handle_scroll_key(key)
        if key.printable and not self._has_room(1):
            return []
        submitted = self._input.handle_key(key)
        if submitted is not None:
            return self.on_user_submitted(submitted.text)
        return []

    def on_paste(self, text: str) -> list[Effect]:
        """Insert pasted text into the input line, newlines folded to spaces."""
        if self._mode is not Mode.NORMAL:
            return []
        clean_text = " ".join(text.split())
        if self._input_char_limit is not None:
            clean_text = clean_text[: max(self._input_char_limit - len(self._input.text), 0)]
        self._input.insert(clean_text)
        return []

    def on_scroll(self, delta: int) -> list[Effect]:
        """Mouse wheel scrolling; delta is in wheel steps."""
        if self._mode is Mode.NORMAL:
            self._transcript.scroll_by(delta * MOUSE_SCROLL_LINES)
        return []

    def on_user_submitted(self, text: str) -> list[Effect]:
        """Append the user's message and schedule a completion for it."""
        self._transcript.append(Message.user(text))
        request = CompletionRequest(history=self._transcript.snapshot())
        return self._dispatch(self._scheduler.submit(request))

    def on_completion_result(self, result: CompletionResult) -> list[Effect]:
        """Append the reply, or the error description, as an assistant message."""
        self._transcript.append(Message.assistant(result.describe()))
        if result.ok and self._focus_on_reply and self._mode is Mode.NORMAL:
            self.enter_focus()
        return self._dispatch(self._scheduler.complete())

    def enter_focus(self) -> None:
        if self._mode is Mode.NORMAL and self._transcript.enter_focus():
            self._mode = Mode.FOCUSED

    def _toggle_finder(self) -> None:
        if self._mode is Mode.FINDER:
            self._mode = Mode.NORMAL
            return
        self._transcript.exit_focus()
        self._mode = Mode.FINDER
        self._finder.open()

    def _has_room(self, length: int) -> bool:
        if self._input_char_limit is None:
            return True
        return len(self._input.text) + length <= self._input_char_limit

    @staticmethod
    def _dispatch(request: CompletionRequest | None) -> list[Effect]:
        if request is None:
            return []
        return [DispatchCompletion(request)]
