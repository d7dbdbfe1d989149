"""History finder skeleton.

A navigable list with a cursor. Searching saved chats is not implemented;
the entries are a fixed placeholder set.
"""

from .events import KeyPress
from .keys import DEFAULT_KEYMAP, FinderKeyMap

PLACEHOLDER_ENTRIES = ("Chat 1", "Chat 2", "Chat 3")


class HistoryFinder:
    """List of past chats with a clamped cursor."""

    def __init__(self, keys: FinderKeyMap | None = None) -> None:
        self._query = ""
        self._entries: list[str] = []
        self._cursor = 0
        self._size = (0, 0)
        self._keys = keys or DEFAULT_KEYMAP.finder

    @property
    def query(self) -> str:
        return self._query

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def open(self) -> None:
        """Load the entry list and reset the cursor."""
        self._entries = list(PLACEHOLDER_ENTRIES)
        self._cursor = 0

    def move_cursor(self, delta: int) -> None:
        """Move the cursor, clamped to the list bounds (no wraparound)."""
        last = max(len(self._entries) - 1, 0)
        self._cursor = max(0, min(self._cursor + delta, last))

    def select(self) -> None:
        """Open the highlighted chat.

        Loading a saved chat has no backing store yet, so nothing happens.
        """
        return None

    def resize(self, width: int, height: int) -> None:
        self._size = (width, height)

    def handle_key(self, key: KeyPress) -> None:
        if self._keys.up.matches(key.key):
            self.move_cursor(-1)
        elif self._keys.down.matches(key.key):
            self.move_cursor(1)
        elif self._keys.select.matches(key.key):
            self.select()
