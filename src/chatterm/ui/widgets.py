"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Translating terminal events into session key presses
- Drawing the transcript window and the input line cursor
- Finder list rendering
- Log rendering and level filtering

Widgets only read session state; all changes go through the controller.
"""

from datetime import datetime

from rich.text import Text
from textual import events
from textual.containers import Vertical
from textual.message import Message
from textual.widget import Widget
from textual.widgets import RichLog

from ..session import HistoryFinder, InputBuffer, KeyPress, Transcript
from .config import INPUT_PLACEHOLDER, LOG_MAX_MESSAGE_LENGTH, LOG_TIMESTAMP_FORMAT, LogLevel


class TranscriptView(Widget):
    """Window onto the transcript's rendered lines at its scroll offset."""

    class Scrolled(Message):
        """Message sent when the mouse wheel turns over the transcript."""

        def __init__(self, delta: int) -> None:
            super().__init__()
            self.delta = delta

    def __init__(self, transcript: Transcript, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._transcript = transcript

    def render(self) -> Text:
        return Text("\n").join(self._transcript.visible_lines())

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        event.stop()
        self.post_message(self.Scrolled(-1))

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        event.stop()
        self.post_message(self.Scrolled(1))


class InputLine(Widget):
    """One-row view of the input buffer with a block cursor."""

    def __init__(self, buffer: InputBuffer, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._buffer = buffer

    def render(self) -> Text:
        active = not self.has_class("-inactive")
        if not self._buffer.text:
            line = Text(" ", style="reverse" if active else "")
            line.append(INPUT_PLACEHOLDER, style="dim")
            return line

        visible, column = self._buffer.visible_window()
        line = Text(visible)
        if active:
            if column >= len(visible):
                line.append(" ", style="reverse")
            else:
                line.stylize("reverse", column, column + 1)
        return line


class FinderPanel(Widget):
    """History finder list with a cursor marker."""

    BORDER_TITLE = "History"

    def __init__(self, finder: HistoryFinder, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._finder = finder

    def render(self) -> Text:
        text = Text("Search: ", style="bold")
        text.append(self._finder.query)
        text.append("\n\n")
        for index, entry in enumerate(self._finder.entries):
            if index == self._finder.cursor:
                text.append(f"> {entry}\n", style="bold")
            else:
                text.append(f"  {entry}\n")
        return text


class SessionPane(Vertical):
    """Focus holder for the session: forwards keys, pastes and size changes.

    Keys are stopped here so screen-level bindings (tab focus cycling)
    never see them; the controller decides what every key means.
    """

    can_focus = True

    class KeyPressed(Message):
        """Message sent for every key that reaches the session."""

        def __init__(self, key: KeyPress) -> None:
            super().__init__()
            self.key = key

    class Pasted(Message):
        """Message sent when text is pasted into the terminal."""

        def __init__(self, text: str) -> None:
            super().__init__()
            self.text = text

    class Resized(Message):
        """Message sent when the pane gets a new size."""

        def __init__(self, width: int, height: int) -> None:
            super().__init__()
            self.width = width
            self.height = height

    def __init__(
        self,
        transcript: Transcript,
        buffer: InputBuffer,
        finder: HistoryFinder,
        *args,
        **kwargs
    ) -> None:
        super().__init__(*args, **kwargs)
        self._transcript = transcript
        self._buffer = buffer
        self._finder = finder

    def compose(self):
        yield TranscriptView(self._transcript, id="transcript")
        yield InputLine(self._buffer, id="input-line")
        yield FinderPanel(self._finder, id="finder")

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.post_message(
            self.KeyPressed(
                KeyPress(key=event.key, character=event.character, printable=event.is_printable)
            )
        )

    def on_paste(self, event: events.Paste) -> None:
        event.stop()
        if event.text:
            self.post_message(self.Pasted(event.text))

    def on_resize(self, event: events.Resize) -> None:
        self.post_message(self.Resized(event.size.width, event.size.height))

    def refresh_views(self) -> None:
        for widget in self.query("TranscriptView, InputLine, FinderPanel"):
            widget.refresh()


class DebugPanel(RichLog):
    """Log panel for real-time session tracing with level filtering.

    Shows timestamped log messages from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+L.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "SESSION": "green",
        "LLM": "magenta",
    }

    def __init__(
        self,
        *args,
        log_level: int = LogLevel.DEBUG,
        start_visible: bool = False,
        **kwargs
    ) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level
        self._start_visible = start_visible

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hidden unless requested at startup."""
        self.display = self._start_visible
        self._update_subtitle()

    def add_entry(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, SESSION, LLM)
            message: Log message, truncated to LOG_MAX_MESSAGE_LENGTH
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        line = Text.assemble(
            (f"{timestamp} ", "dim"),
            (f"{LogLevel.name(level):<5} ", self.LEVEL_COLORS.get(level, "white")),
            (f"[{component}] ", self.COMPONENT_COLORS.get(component, "white")),
            message,
        )
        self.write(line)

    def debug(self, component: str, message: str) -> None:
        """Log a DEBUG level message."""
        self.add_entry(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        """Log an INFO level message."""
        self.add_entry(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        """Log a WARNING level message."""
        self.add_entry(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        """Log an ERROR level message."""
        self.add_entry(component, message, LogLevel.ERROR)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
