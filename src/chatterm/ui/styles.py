"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
The transcript and input line sizes are computed by the session
controller from the session pane size, so the pane itself carries no
borders or padding.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* Session pane: transcript above a one-row input line */
#session {
    height: 1fr;
    background: $surface;
}

#transcript {
    height: 1fr;
    background: $surface;
}

#input-line {
    height: 1;
    background: $panel;
    color: $secondary;

    &.-inactive {
        color: $text-muted;
    }
}

/* History finder replaces the transcript while open */
#finder {
    display: none;
    height: 1fr;
    border: round $secondary;
    border-title-color: $secondary;
    border-title-style: bold;
    padding: 1;
}

#session.-finder #transcript,
#session.-finder #input-line {
    display: none;
}

#session.-finder #finder {
    display: block;
}

/* Trace log, hidden unless --log-level is passed or toggled */
#debug-panel {
    dock: right;
    width: 40%;
    background: $panel;
    border: round $border;
    border-title-color: $text-muted;
    border-subtitle-color: $text-muted;
    scrollbar-gutter: stable;
}
"""
