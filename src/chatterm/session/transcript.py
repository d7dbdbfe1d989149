"""Scrollable, focusable message transcript.

Hides the layout of the conversation view:
- Rendering each message into a styled block of terminal lines
- Block heights and offsets within the joined content
- Scroll offset policy (pin to bottom, or reveal the focused message)
"""

from collections.abc import Iterable

from rich.text import Text

from ..chat import Message, Role
from .events import KeyPress
from .keys import DEFAULT_KEYMAP, FocusKeyMap, ScrollKeyMap
from .rendering import BlockKind, MarkdownRenderer, TextRenderer, TranscriptStyle

ROLE_HEADERS = {
    Role.USER: ("You", ">"),
    Role.ASSISTANT: ("Assistant", "<"),
    Role.SYSTEM: ("System", "!"),
}

MOUSE_SCROLL_LINES = 3


def _trim_blank_lines(lines: list[Text]) -> list[Text]:
    start, end = 0, len(lines)
    while start < end and not lines[start].plain.strip():
        start += 1
    while end > start and not lines[end - 1].plain.strip():
        end -= 1
    return lines[start:end] or [Text("")]


class Transcript:
    """Append-only message log with a viewport.

    Invariants:
        0 <= scroll_offset <= max(0, total_height - viewport height)
        focus is None or 0 <= focus < len(messages)

    Blocks are joined with one blank separator line, and block offsets
    include those separators.
    """

    def __init__(
        self,
        messages: Iterable[Message] = (),
        renderer: TextRenderer | None = None,
        style: TranscriptStyle | None = None,
        height: int = 10,
        scroll_keys: ScrollKeyMap | None = None,
        focus_keys: FocusKeyMap | None = None,
    ) -> None:
        self._messages: list[Message] = list(messages)
        self._renderer = renderer or MarkdownRenderer()
        self._style = style or TranscriptStyle()
        self._height = max(height, 1)
        self._scroll_keys = scroll_keys or DEFAULT_KEYMAP.scroll
        self._focus_keys = focus_keys or DEFAULT_KEYMAP.focus

        self._scroll_offset = 0
        self._focus: int | None = None

        self._lines: list[Text] = []
        self._heights: list[int] = []
        self._tops: list[int] = []
        # Rendered message bodies keyed by (index, wrap width)
        self._body_cache: dict[tuple[int, int], list[Text]] = {}

        self.render()

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def scroll_offset(self) -> int:
        return self._scroll_offset

    @property
    def viewport(self) -> tuple[int, int]:
        return self._style.width, self._height

    @property
    def style(self) -> TranscriptStyle:
        return self._style

    @property
    def focus(self) -> int | None:
        return self._focus

    @property
    def is_focused(self) -> bool:
        return self._focus is not None

    @property
    def lines(self) -> tuple[Text, ...]:
        """All rendered lines of the joined content."""
        return tuple(self._lines)

    @property
    def heights(self) -> tuple[int, ...]:
        return tuple(self._heights)

    @property
    def tops(self) -> tuple[int, ...]:
        return tuple(self._tops)

    @property
    def total_height(self) -> int:
        return len(self._lines)

    @property
    def max_scroll_offset(self) -> int:
        return max(0, self.total_height - self._height)

    def snapshot(self) -> tuple[Message, ...]:
        """Messages at this instant, safe to hand to a background task."""
        return tuple(self._messages)

    def content(self) -> Text:
        """The joined viewport content."""
        return Text("\n").join(self._lines)

    def visible_lines(self) -> list[Text]:
        return self._lines[self._scroll_offset : self._scroll_offset + self._height]

    def append(self, message: Message) -> None:
        """Add a message; while focused, the focus follows new arrivals."""
        self._messages.append(message)
        if self._focus is not None:
            self._focus = len(self._messages) - 1
        self.render()

    def resize(self, width: int, height: int, style: TranscriptStyle | None = None) -> None:
        """Set the viewport size and re-render at the new wrap width."""
        new_style = (style or self._style).with_width(width)
        if new_style.wrap_width != self._style.wrap_width:
            self._body_cache.clear()
        self._style = new_style
        self._height = max(height, 1)
        self.render()

    def render(self) -> Text:
        """Re-render every block, adjust the scroll offset, return the content."""
        self._layout()
        self._adjust_scroll()
        return self.content()

    def enter_focus(self) -> bool:
        """Focus the newest message. Returns False when there is nothing to focus."""
        if not self._messages:
            return False
        self._focus = len(self._messages) - 1
        self.render()
        return True

    def focus_next(self) -> None:
        if self._focus is None or not self._messages:
            return
        self._focus = (self._focus + 1) % len(self._messages)
        self.render()

    def focus_prev(self) -> None:
        if self._focus is None or not self._messages:
            return
        self._focus = (self._focus - 1) % len(self._messages)
        self.render()

    def exit_focus(self) -> None:
        """Drop the focus highlight, leaving the scroll offset where it is."""
        if self._focus is None:
            return
        self._focus = None
        self._layout()
        self._clamp_scroll()

    def handle_focus_key(self, key: KeyPress) -> bool:
        """Apply a focus-navigation key. Returns whether focus is still active."""
        if self._focus_keys.exit.matches(key.key):
            self.exit_focus()
        elif self._focus_keys.next.matches(key.key):
            self.focus_next()
        elif self._focus_keys.prev.matches(key.key):
            self.focus_prev()
        return self.is_focused

    def scroll_by(self, delta: int) -> None:
        self._scroll_offset += delta
        self._clamp_scroll()

    def scroll_to_top(self) -> None:
        self._scroll_offset = 0

    def scroll_to_bottom(self) -> None:
        self._scroll_offset = self.max_scroll_offset

    def handle_scroll_key(self, key: KeyPress) -> bool:
        """Apply a scroll key. Returns True when the key was a scroll key."""
        keys = self._scroll_keys
        page = self._height
        half = max(self._height // 2, 1)

        if keys.page_up.matches(key.key):
            self.scroll_by(-page)
        elif keys.page_down.matches(key.key):
            self.scroll_by(page)
        elif keys.half_up.matches(key.key):
            self.scroll_by(-half)
        elif keys.half_down.matches(key.key):
            self.scroll_by(half)
        elif keys.up.matches(key.key):
            self.scroll_by(-1)
        elif keys.down.matches(key.key):
            self.scroll_by(1)
        elif keys.top.matches(key.key):
            self.scroll_to_top()
        elif keys.bottom.matches(key.key):
            self.scroll_to_bottom()
        else:
            return False
        return True

    def _block_kind(self, index: int, message: Message) -> BlockKind:
        if self._focus is not None and index == self._focus:
            return BlockKind.FOCUSED
        if message.role == Role.USER:
            return BlockKind.USER
        return BlockKind.ASSISTANT

    def _header_label(self, message: Message) -> str:
        name, icon = ROLE_HEADERS[message.role]
        label = f"{icon} {name}"
        if self._style.show_timestamp:
            label += f" [{message.timestamp.strftime('%H:%M:%S')}]"
        return label

    def _body(self, index: int, message: Message) -> list[Text]:
        key = (index, self._style.wrap_width)
        if key not in self._body_cache:
            rendered = self._renderer.render(message.content, self._style.wrap_width)
            self._body_cache[key] = _trim_blank_lines(rendered)
        return self._body_cache[key]

    def _render_block(self, index: int, message: Message) -> list[Text]:
        kind = self._block_kind(index, message)
        return [
            self._style.header(self._header_label(message), kind),
            *self._body(index, message),
            self._style.separator(kind),
        ]

    def _layout(self) -> None:
        lines: list[Text] = []
        heights: list[int] = []
        tops: list[int] = []

        for index, message in enumerate(self._messages):
            if index > 0:
                lines.append(Text(""))
            block = self._render_block(index, message)
            tops.append(len(lines))
            heights.append(len(block))
            lines.extend(block)

        self._lines = lines
        self._heights = heights
        self._tops = tops

    def _adjust_scroll(self) -> None:
        if self._focus is None:
            # Follow the tail
            self._scroll_offset = self.max_scroll_offset
            return

        top = self._tops[self._focus]
        bottom = top + self._heights[self._focus]
        if bottom > self._scroll_offset + self._height:
            self._scroll_offset = bottom - self._height
        elif top < self._scroll_offset:
            self._scroll_offset = top
        self._clamp_scroll()

    def _clamp_scroll(self) -> None:
        self._scroll_offset = max(0, min(self._scroll_offset, self.max_scroll_offset))
