"""Theme configuration — Fluent Design theme and accent color."""

from __future__ import annotations

from qfluentwidgets import setTheme, setThemeColor, Theme

_THEMES = {"light": Theme.LIGHT, "dark": Theme.DARK, "auto": Theme.AUTO}


def apply_theme(theme: str = "auto", accent_color: str = "#2D7D9A") -> None:
    """Apply the application theme ("light", "dark" or "auto")."""
    setTheme(_THEMES.get(theme, Theme.AUTO))
    setThemeColor(accent_color)
