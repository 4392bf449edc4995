from __future__ import annotations

import logging
from pathlib import Path

import markdown
from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from cv_tailor.export.themes import AVAILABLE_THEMES, DEFAULT_THEME, theme_css
from cv_tailor.models import ApplicationData

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

DOCUMENTS = ("resume", "cover-letter")
_TEMPLATE_FOR = {"resume": "resume.html", "cover-letter": "cover_letter.html"}


def _markdown_filter(text: str | None) -> Markup:
    if not text:
        return Markup("")
    return Markup(markdown.markdown(text, extensions=["nl2br"]))


def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=True,
    )
    env.filters["markdown"] = _markdown_filter
    return env


def render_html(
    application: ApplicationData,
    document: str = "resume",
    theme: str = DEFAULT_THEME,
) -> str:
    """Render one document of ``application`` to themed HTML."""
    if document not in DOCUMENTS:
        raise ValueError(f"Unknown document '{document}'. Choose from: {', '.join(DOCUMENTS)}")
    if theme not in AVAILABLE_THEMES:
        logger.warning("Unknown theme %r, using %s", theme, DEFAULT_THEME)
        theme = DEFAULT_THEME

    if document == "resume" and application.resume is None:
        raise ValueError("Resume data not available")
    if document == "cover-letter" and application.cover_letter is None:
        raise ValueError("Cover letter data not available")

    template = _environment().get_template(_TEMPLATE_FOR[document])
    return template.render(
        css=Markup(theme_css(theme)),
        metadata=application.metadata,
        resume=application.resume,
        cover_letter=application.cover_letter,
        job=application.job_analysis,
    )


def render_pdf(
    application: ApplicationData,
    document: str = "resume",
    theme: str = DEFAULT_THEME,
) -> bytes:
    """Render one document of ``application`` to PDF bytes."""
    return _html_to_pdf(render_html(application, document, theme))


def write_pdf(
    application: ApplicationData,
    company: str,
    output_dir: str | Path,
    document: str = "resume",
    theme: str = DEFAULT_THEME,
) -> Path:
    """Write ``<output_dir>/<company>-<document>.pdf`` and return its path."""
    output = Path(output_dir) / f"{company}-{document}.pdf"
    pdf = render_pdf(application, document, theme)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(pdf)
    logger.info("Wrote %s (%d bytes)", output, len(pdf))
    return output


def _html_to_pdf(html: str) -> bytes:
    """Convert HTML string to PDF bytes using WeasyPrint, with fpdf2 fallback."""
    try:
        from weasyprint import HTML
        return HTML(string=html).write_pdf()
    except (ImportError, OSError):
        logger.warning("WeasyPrint not available, using fpdf2 fallback")
        from cv_tailor.export.pdf_fallback import html_to_pdf_fpdf2
        return html_to_pdf_fpdf2(html)
