"""HTML and PDF export of assembled application data."""
from cv_tailor.export.pdf_renderer import (
    DOCUMENTS,
    render_html,
    render_pdf,
    write_pdf,
)
from cv_tailor.export.themes import AVAILABLE_THEMES, DEFAULT_THEME

__all__ = ["render_pdf", "render_html", "write_pdf", "DOCUMENTS", "AVAILABLE_THEMES", "DEFAULT_THEME"]
