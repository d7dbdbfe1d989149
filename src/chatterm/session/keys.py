"""Key bindings for the session.

Hides which terminal keys trigger which session actions.
Key names follow Textual's naming ("pageup", "ctrl+u", "shift+tab").
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class KeyBinding:
    """One action bound to one or more keys."""

    keys: tuple[str, ...]
    help: str = ""

    def matches(self, key: str) -> bool:
        return key in self.keys


@dataclass(frozen=True)
class GlobalKeyMap:
    """Keys checked before any mode-specific routing."""

    quit: KeyBinding = field(default_factory=lambda: KeyBinding(("ctrl+c",), "quit"))
    toggle_finder: KeyBinding = field(
        default_factory=lambda: KeyBinding(("ctrl+f",), "toggle history finder")
    )
    focus: KeyBinding = field(
        default_factory=lambda: KeyBinding(("escape",), "focus messages")
    )


@dataclass(frozen=True)
class ScrollKeyMap:
    """Transcript scrolling in normal mode."""

    page_up: KeyBinding = field(default_factory=lambda: KeyBinding(("pageup",), "page up"))
    page_down: KeyBinding = field(default_factory=lambda: KeyBinding(("pagedown",), "page down"))
    half_up: KeyBinding = field(default_factory=lambda: KeyBinding(("ctrl+u",), "half page up"))
    half_down: KeyBinding = field(
        default_factory=lambda: KeyBinding(("ctrl+d",), "half page down")
    )
    up: KeyBinding = field(default_factory=lambda: KeyBinding(("up",), "scroll up"))
    down: KeyBinding = field(default_factory=lambda: KeyBinding(("down",), "scroll down"))
    top: KeyBinding = field(default_factory=lambda: KeyBinding(("home",), "scroll to top"))
    bottom: KeyBinding = field(default_factory=lambda: KeyBinding(("end",), "scroll to bottom"))


@dataclass(frozen=True)
class FocusKeyMap:
    """Message navigation in focused mode."""

    next: KeyBinding = field(
        default_factory=lambda: KeyBinding(("j", "tab", "down"), "next message")
    )
    prev: KeyBinding = field(
        default_factory=lambda: KeyBinding(("k", "shift+tab", "up"), "previous message")
    )
    exit: KeyBinding = field(default_factory=lambda: KeyBinding(("escape",), "stop focusing"))


@dataclass(frozen=True)
class EditKeyMap:
    """Input buffer editing in normal mode."""

    submit: KeyBinding = field(default_factory=lambda: KeyBinding(("enter",), "send"))
    backspace: KeyBinding = field(
        default_factory=lambda: KeyBinding(("backspace", "ctrl+h"), "delete")
    )
    left: KeyBinding = field(default_factory=lambda: KeyBinding(("left",), "cursor left"))
    right: KeyBinding = field(default_factory=lambda: KeyBinding(("right",), "cursor right"))


@dataclass(frozen=True)
class FinderKeyMap:
    """History finder navigation."""

    up: KeyBinding = field(default_factory=lambda: KeyBinding(("up", "ctrl+p"), "previous"))
    down: KeyBinding = field(default_factory=lambda: KeyBinding(("down", "ctrl+n"), "next"))
    select: KeyBinding = field(default_factory=lambda: KeyBinding(("enter",), "open chat"))


@dataclass(frozen=True)
class KeyMap:
    """All session key bindings."""

    global_keys: GlobalKeyMap = field(default_factory=GlobalKeyMap)
    scroll: ScrollKeyMap = field(default_factory=ScrollKeyMap)
    focus: FocusKeyMap = field(default_factory=FocusKeyMap)
    edit: EditKeyMap = field(default_factory=EditKeyMap)
    finder: FinderKeyMap = field(default_factory=FinderKeyMap)


DEFAULT_KEYMAP = KeyMap()
