"""Theme registry shared by the renderer and the context validators."""

from __future__ import annotations

from pathlib import Path

CSS_THEMES_DIR = Path(__file__).parent / "css_themes"

AVAILABLE_THEMES = ("modern", "classic")
DEFAULT_THEME = "modern"


def theme_css(theme: str) -> str:
    """Stylesheet text for ``theme``; empty when the file is missing."""
    css_path = CSS_THEMES_DIR / f"{theme}.css"
    return css_path.read_text(encoding="utf-8") if css_path.exists() else ""
