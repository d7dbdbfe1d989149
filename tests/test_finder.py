"""Unit tests for the history finder."""
from chatterm.session import PLACEHOLDER_ENTRIES, HistoryFinder, KeyPress


class TestHistoryFinder:
    """Tests for HistoryFinder navigation."""

    def test_closed_finder_is_empty(self):
        finder = HistoryFinder()
        assert finder.entries == ()
        assert finder.query == ""
        assert finder.cursor == 0

    def test_open_loads_entries(self):
        finder = HistoryFinder()
        finder.open()
        assert finder.entries == PLACEHOLDER_ENTRIES
        assert finder.cursor == 0

    def test_cursor_is_clamped_without_wraparound(self):
        """Test that moving past either end stays on the boundary entry."""
        finder = HistoryFinder()
        finder.open()

        finder.move_cursor(-1)
        assert finder.cursor == 0

        finder.move_cursor(10)
        assert finder.cursor == len(PLACEHOLDER_ENTRIES) - 1

    def test_open_resets_cursor(self):
        finder = HistoryFinder()
        finder.open()
        finder.move_cursor(2)
        finder.open()
        assert finder.cursor == 0

    def test_key_navigation(self):
        finder = HistoryFinder()
        finder.open()

        finder.handle_key(KeyPress("down"))
        finder.handle_key(KeyPress("ctrl+n"))
        assert finder.cursor == 2

        finder.handle_key(KeyPress("ctrl+p"))
        assert finder.cursor == 1

    def test_select_does_nothing(self):
        finder = HistoryFinder()
        finder.open()
        finder.move_cursor(1)

        assert finder.select() is None
        finder.handle_key(KeyPress("enter"))
        assert finder.cursor == 1
        assert finder.entries == PLACEHOLDER_ENTRIES

    def test_resize_records_size(self):
        finder = HistoryFinder()
        finder.resize(80, 24)
        assert finder.size == (80, 24)
