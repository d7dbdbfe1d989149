"""Cursor-addressed single-line text editor.

Hides the text/cursor representation and the horizontal window that keeps
the cursor visible in a fixed-width input row.
"""

from .events import KeyPress, UserSubmitted
from .keys import DEFAULT_KEYMAP, EditKeyMap


class InputBuffer:
    """Editable input line.

    Invariant: 0 <= cursor <= len(text). The buffer is cleared only by a
    successful submit, in the same call that produces the event.
    """

    def __init__(self, width: int = 40, keys: EditKeyMap | None = None) -> None:
        self._text = ""
        self._cursor = 0
        self._width = max(width, 1)
        self._view_start = 0
        self._keys = keys or DEFAULT_KEYMAP.edit

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def width(self) -> int:
        return self._width

    def insert(self, text: str) -> None:
        """Splice text at the cursor and move the cursor past it."""
        if not text:
            return
        self._text = self._text[: self._cursor] + text + self._text[self._cursor :]
        self._cursor += len(text)
        self._scroll_to_cursor()

    def delete_before_cursor(self) -> None:
        """Remove the character before the cursor (backspace)."""
        if self._cursor == 0:
            return
        self._text = self._text[: self._cursor - 1] + self._text[self._cursor :]
        self._cursor -= 1
        self._scroll_to_cursor()

    def move_left(self) -> None:
        self._cursor = max(0, self._cursor - 1)
        self._scroll_to_cursor()

    def move_right(self) -> None:
        self._cursor = min(len(self._text), self._cursor + 1)
        self._scroll_to_cursor()

    def submit(self) -> UserSubmitted | None:
        """Accept the current text.

        Whitespace-only text is ignored and leaves the buffer untouched.
        Otherwise the buffer is cleared and the trimmed text returned.
        """
        value = self._text.strip()
        if not value:
            return None
        self._text = ""
        self._cursor = 0
        self._view_start = 0
        return UserSubmitted(value)

    def resize(self, width: int) -> None:
        self._width = max(width, 1)
        self._scroll_to_cursor()

    def visible_window(self) -> tuple[str, int]:
        """Return the visible slice of text and the cursor column within it."""
        end = self._view_start + self._width
        return self._text[self._view_start : end], self._cursor - self._view_start

    def handle_key(self, key: KeyPress) -> UserSubmitted | None:
        """Apply an editing key. Keys that are not edits are ignored."""
        if self._keys.submit.matches(key.key):
            return self.submit()
        if self._keys.backspace.matches(key.key):
            self.delete_before_cursor()
        elif self._keys.left.matches(key.key):
            self.move_left()
        elif self._keys.right.matches(key.key):
            self.move_right()
        elif key.printable and key.character:
            self.insert(key.character)
        return None

    def _scroll_to_cursor(self) -> None:
        # One cell is reserved for the cursor past the last character
        if self._cursor < self._view_start:
            self._view_start = self._cursor
        elif self._cursor >= self._view_start + self._width:
            self._view_start = self._cursor - self._width + 1
        self._view_start = max(0, min(self._view_start, len(self._text) + 1 - self._width))
