"""Terminal UI module for chatterm.

Provides a Textual-based TUI around the session controller.

Module structure (Parnas principle - each module hides a design decision):
- widgets.py: Custom widgets (event forwarding, transcript window, input line, log)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- config.py: UI constants and log levels
- app.py: Application orchestration (effects, background completions)
"""

from .app import ChatApp, run_chat_app
from .config import LogLevel
from .widgets import DebugPanel, FinderPanel, InputLine, SessionPane, TranscriptView

__all__ = [
    "ChatApp",
    "DebugPanel",
    "FinderPanel",
    "InputLine",
    "LogLevel",
    "SessionPane",
    "TranscriptView",
    "run_chat_app",
]
