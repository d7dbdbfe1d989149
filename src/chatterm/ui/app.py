"""Main Textual TUI application.

Connects terminal events to the session controller and runs completion
requests as background workers. All session state is mutated on the app's
event loop; workers only hand back result values.
"""

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Footer, Header

from ..config import Settings
from ..llm import CompletionClient, CompletionResult, create_llm_provider_from_settings
from ..session import (
    CompletionRequest,
    DispatchCompletion,
    Effect,
    KeyPress,
    Mode,
    QuitSession,
    SessionController,
)
from .config import LOG_PREVIEW_LENGTH, LogLevel
from .styles import APP_CSS
from .themes import THEMES, resolve_theme_name
from .widgets import DebugPanel, InputLine, SessionPane, TranscriptView


class ChatApp(App, inherit_bindings=False):
    """Textual TUI for a chat session."""

    CSS = APP_CSS
    TITLE = "chatterm"
    ENABLE_COMMAND_PALETTE = False

    # Global session keys are priority bindings so they are checked before
    # any mode routing; they are still interpreted by the controller.
    BINDINGS = [
        Binding("ctrl+c", "session_key('ctrl+c')", "Quit", priority=True),
        Binding("ctrl+f", "session_key('ctrl+f')", "History", priority=True),
        Binding("ctrl+l", "toggle_log", "Log", priority=True),
    ]

    class CompletionFinished(Message):
        """Posted by a completion worker when its round trip is over."""

        def __init__(self, result: CompletionResult) -> None:
            super().__init__()
            self.result = result

    def __init__(
        self,
        settings: Settings,
        client: CompletionClient,
        controller: SessionController | None = None,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings
        self._client = client
        self._controller = controller or SessionController.from_settings(settings)
        self._log_level = log_level
        self._last_mode = self._controller.mode

    @property
    def controller(self) -> SessionController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield SessionPane(
            self._controller.transcript,
            self._controller.input_buffer,
            self._controller.finder,
            id="session",
        )
        yield DebugPanel(
            id="debug-panel",
            log_level=LogLevel.from_string(self._log_level or "debug"),
            start_visible=self._log_level is not None,
        )
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        for theme in THEMES.values():
            self.register_theme(theme)
        self.theme = resolve_theme_name(self._settings.ui.theme)

        self.query_one("#session", SessionPane).focus()
        if self._log_level is not None:
            self._log_info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")
        self._log_info(
            "LLM",
            f"Provider {self._settings.llm.provider}, model {self._client.model}, "
            f"policy {self._controller.scheduler.policy.value}",
        )
        self._sync_view()

    def on_session_pane_key_pressed(self, event: SessionPane.KeyPressed) -> None:
        self._apply(self._controller.on_key(event.key))

    def on_session_pane_pasted(self, event: SessionPane.Pasted) -> None:
        self._apply(self._controller.on_paste(event.text))

    def on_session_pane_resized(self, event: SessionPane.Resized) -> None:
        self._log_debug("TUI", f"Resize {event.width}x{event.height}")
        self._apply(self._controller.on_resize(event.width, event.height))

    def on_transcript_view_scrolled(self, event: TranscriptView.Scrolled) -> None:
        self._apply(self._controller.on_scroll(event.delta))

    def on_chat_app_completion_finished(self, event: CompletionFinished) -> None:
        result = event.result
        if result.ok:
            self._log_info("LLM", f"Reply received ({len(result.content or '')} chars)")
        else:
            self._log_error("LLM", f"Request failed [{result.kind.value}]: {result.error}")
        self._apply(self._controller.on_completion_result(result))

    def action_session_key(self, key: str) -> None:
        """Feed a global key binding to the controller."""
        self._apply(self._controller.on_key(KeyPress(key)))

    def action_toggle_log(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def _apply(self, effects: list[Effect]) -> None:
        """Execute controller effects, then redraw."""
        for effect in effects:
            if isinstance(effect, DispatchCompletion):
                self._dispatch(effect.request)
            elif isinstance(effect, QuitSession):
                self._log_info("TUI", "Quit requested")
                self.exit()
                return
        self._sync_view()

    def _dispatch(self, request: CompletionRequest) -> None:
        latest = request.history[-1].content if request.history else ""
        self._log_info(
            "LLM",
            f"Dispatching {len(request.history)} message(s): '{latest[:LOG_PREVIEW_LENGTH]}'",
        )
        self._run_completion(request)

    @work(group="completion")
    async def _run_completion(self, request: CompletionRequest) -> None:
        """Run one completion round trip as a background async worker."""
        try:
            result = await self._client.send(request.history)
        except Exception as e:
            result = CompletionResult.failure(e)
        self.post_message(self.CompletionFinished(result))

    def _sync_view(self) -> None:
        """Match widget visibility and status line to the controller state."""
        mode = self._controller.mode
        if mode is not self._last_mode:
            self._log_debug("SESSION", f"Mode {self._last_mode.value} -> {mode.value}")
            self._last_mode = mode

        pane = self.query_one("#session", SessionPane)
        pane.set_class(mode is Mode.FINDER, "-finder")
        self.query_one("#input-line", InputLine).set_class(mode is not Mode.NORMAL, "-inactive")
        pane.refresh_views()

        pending = self._controller.scheduler.pending
        status = [self._client.model, mode.value]
        if pending:
            status.append(f"{pending} pending")
        self.sub_title = " | ".join(status)

    def _log_debug(self, component: str, message: str) -> None:
        self.query_one("#debug-panel", DebugPanel).debug(component, message)

    def _log_info(self, component: str, message: str) -> None:
        self.query_one("#debug-panel", DebugPanel).info(component, message)

    def _log_error(self, component: str, message: str) -> None:
        self.query_one("#debug-panel", DebugPanel).error(component, message)


async def run_chat_app(settings: Settings, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        settings: Loaded application settings
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    provider = create_llm_provider_from_settings(settings.llm)
    client = CompletionClient(provider)
    app = ChatApp(settings=settings, client=client, log_level=log_level)
    async with provider:
        await app.run_async()
