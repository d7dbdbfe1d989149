"""Message rendering and per-viewport style configuration.

Hides how message text becomes terminal lines:
- Markdown rendering through Rich at a given wrap width
- Plain-text wrapping used as the fallback
- Colors for user, assistant and focused messages
"""

import io
import textwrap
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import Enum

from rich.console import Console
from rich.markdown import Markdown
from rich.text import Text


class TextRenderer(ABC):
    """Turns message text into wrapped terminal lines."""

    @abstractmethod
    def render(self, text: str, width: int) -> list[Text]:
        """Render text wrapped to width, one Text per terminal line."""


class PlainRenderer(TextRenderer):
    """Wraps raw text on whitespace, preserving explicit line breaks."""

    def render(self, text: str, width: int) -> list[Text]:
        lines: list[Text] = []
        for paragraph in text.splitlines() or [""]:
            wrapped = textwrap.wrap(paragraph, width=max(width, 1)) or [""]
            lines.extend(Text(line) for line in wrapped)
        return lines


class MarkdownRenderer(TextRenderer):
    """Renders Markdown with Rich; falls back to plain text on any failure."""

    def __init__(self, code_theme: str = "monokai", fallback: TextRenderer | None = None) -> None:
        self._code_theme = code_theme
        self._fallback = fallback or PlainRenderer()

    def render(self, text: str, width: int) -> list[Text]:
        console = Console(
            width=max(width, 1),
            file=io.StringIO(),
            force_terminal=True,
            color_system="truecolor",
        )
        try:
            rendered = console.render_lines(
                Markdown(text, code_theme=self._code_theme),
                console.options,
                pad=False,
            )
        except Exception:
            # Markdown failures are never surfaced; show the raw text instead
            return self._fallback.render(text, width)

        lines = []
        for segments in rendered:
            line = Text()
            for segment in segments:
                if not segment.control:
                    line.append(segment.text, segment.style)
            lines.append(line)
        return lines


class BlockKind(str, Enum):
    """Visual style of a rendered message block."""

    USER = "user"
    ASSISTANT = "assistant"
    FOCUSED = "focused"


@dataclass(frozen=True)
class Palette:
    """Colors for message blocks."""

    name: str
    user: str
    assistant: str
    focused: str
    header: str


# Catppuccin Mocha: pink user, blue assistant, mauve focus
MOCHA_PALETTE = Palette(
    name="catppuccin-mocha",
    user="#f5c2e7",
    assistant="#89b4fa",
    focused="#cba6f7",
    header="#6c7086",
)

# Catppuccin Latte (light)
LATTE_PALETTE = Palette(
    name="catppuccin-latte",
    user="#ea76cb",
    assistant="#1e66f5",
    focused="#8839ef",
    header="#8c8fa1",
)

PALETTES = {palette.name: palette for palette in (MOCHA_PALETTE, LATTE_PALETTE)}


def get_palette(name: str) -> Palette:
    """Look up a palette by theme name, defaulting to Catppuccin Mocha."""
    return PALETTES.get(name, MOCHA_PALETTE)


@dataclass(frozen=True)
class TranscriptStyle:
    """Immutable style configuration for one viewport width.

    Computed when the viewport is resized and passed into rendering.
    """

    width: int = 80
    palette: Palette = MOCHA_PALETTE
    max_width: int = 0
    show_timestamp: bool = True

    @property
    def block_width(self) -> int:
        """Width of a message block, capped by max_width when set."""
        if self.max_width > 0:
            return max(1, min(self.width, self.max_width))
        return max(1, self.width)

    @property
    def wrap_width(self) -> int:
        """Wrap width handed to the text renderer."""
        return max(1, self.block_width - 2)

    def with_width(self, width: int) -> "TranscriptStyle":
        return replace(self, width=max(width, 1))

    def color(self, kind: BlockKind) -> str:
        if kind is BlockKind.FOCUSED:
            return self.palette.focused
        if kind is BlockKind.USER:
            return self.palette.user
        return self.palette.assistant

    def header(self, label: str, kind: BlockKind) -> Text:
        if kind is BlockKind.FOCUSED:
            return Text(label, style=f"bold {self.palette.focused}")
        return Text(label, style=self.palette.header)

    def separator(self, kind: BlockKind) -> Text:
        """Bottom border line of a message block."""
        return Text("─" * self.block_width, style=self.color(kind))
