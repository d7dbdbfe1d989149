"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, footer)
- Dark/light mode configuration

Transcript block colors live in the session palettes; each Textual theme
here shares its name with one of them.
"""

from textual.theme import Theme

from ..session.rendering import LATTE_PALETTE, MOCHA_PALETTE

CATPPUCCIN_MOCHA = Theme(
    name=MOCHA_PALETTE.name,
    primary=MOCHA_PALETTE.assistant,
    secondary=MOCHA_PALETTE.focused,
    accent="#f9e2af",
    foreground="#cdd6f4",
    background="#11111b",
    success="#a6e3a1",
    warning="#fab387",
    error="#f38ba8",
    surface="#1e1e2e",
    panel="#181825",
    dark=True,
    variables={
        "input-cursor-background": "#cdd6f4",
        "input-cursor-foreground": "#11111b",
        "border": "#45475a",
        "border-blurred": "#313244",
        "scrollbar": "#313244",
        "scrollbar-background": "#181825",
        "footer-foreground": "#bac2de",
        "footer-background": "#11111b",
        "footer-key-foreground": "#f9e2af",
        "footer-key-background": "#313244",
        "footer-description-foreground": "#a6adc8",
        "text-muted": MOCHA_PALETTE.header,
    },
)

CATPPUCCIN_LATTE = Theme(
    name=LATTE_PALETTE.name,
    primary=LATTE_PALETTE.assistant,
    secondary=LATTE_PALETTE.focused,
    accent="#df8e1d",
    foreground="#4c4f69",
    background="#dce0e8",
    success="#40a02b",
    warning="#fe640b",
    error="#d20f39",
    surface="#eff1f5",
    panel="#e6e9ef",
    dark=False,
    variables={
        "input-cursor-background": "#4c4f69",
        "input-cursor-foreground": "#eff1f5",
        "border": "#bcc0cc",
        "border-blurred": "#ccd0da",
        "scrollbar": "#ccd0da",
        "scrollbar-background": "#e6e9ef",
        "footer-foreground": "#5c5f77",
        "footer-background": "#dce0e8",
        "footer-key-foreground": "#df8e1d",
        "footer-key-background": "#ccd0da",
        "footer-description-foreground": "#6c6f85",
        "text-muted": LATTE_PALETTE.header,
    },
)

THEMES = {theme.name: theme for theme in (CATPPUCCIN_MOCHA, CATPPUCCIN_LATTE)}


def resolve_theme_name(name: str) -> str:
    """Return a registered theme name, falling back to Catppuccin Mocha."""
    return name if name in THEMES else CATPPUCCIN_MOCHA.name
