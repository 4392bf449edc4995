"""Fallback PDF renderer using fpdf2 (pure Python, no system deps).

Understands only the block tags the bundled templates emit: ``h1``-``h3``,
``p``, ``li`` and ``ul``. Everything else is flattened to text.
"""

from __future__ import annotations

import html
import logging
import re
from io import BytesIO
from pathlib import Path

from fpdf import FPDF
from fpdf.enums import XPos, YPos

logger = logging.getLogger(__name__)

# Unicode TrueType fonts, so accented names survive (Linux, macOS, Windows)
_UNICODE_FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "C:/Windows/Fonts/arial.ttf",
]

_BLOCK_TAG = r"h[1-3]|p|li|ul|ol|br\s*/?"

# (font size, line height, space before, space after)
_HEADING_STYLE = {
    "h1": (18, 10, 0, 2),
    "h2": (13, 8, 4, 1),
    "h3": (11, 7, 2, 0),
}


def _find_unicode_font() -> str | None:
    for path in _UNICODE_FONT_PATHS:
        if Path(path).exists():
            return path
    return None


def html_to_pdf_fpdf2(html_content: str) -> bytes:
    """Fallback PDF generation using fpdf2 when WeasyPrint is unavailable."""
    body_match = re.search(r"<body>(.*?)</body>", html_content, re.DOTALL)
    body = body_match.group(1) if body_match else html_content

    pdf = FPDF(format="A4")
    pdf.set_auto_page_break(auto=True, margin=18)
    pdf.add_page()

    font_name = "Helvetica"
    font_path = _find_unicode_font()
    if font_path:
        try:
            pdf.add_font("DocumentFont", "", font_path)
            font_name = "DocumentFont"
        except (OSError, RuntimeError):
            logger.debug("Failed to load font %s", font_path)

    pdf.set_font(font_name, size=10)

    for line_type, text in parse_html_to_lines(body):
        safe_text = _safe_text(text, pdf)
        if line_type in _HEADING_STYLE:
            size, height, before, after = _HEADING_STYLE[line_type]
            pdf.ln(before)
            pdf.set_font_size(size)
            _line(pdf, height, safe_text)
            if line_type == "h1":
                pdf.line(pdf.l_margin, pdf.get_y(), pdf.w - pdf.r_margin, pdf.get_y())
            pdf.ln(after)
            pdf.set_font_size(10)
        elif line_type == "bullet":
            _line(pdf, 5, f"  - {safe_text}")
        elif line_type == "text":
            _line(pdf, 5, safe_text)
            pdf.ln(1)
        elif line_type == "break":
            pdf.ln(2)

    buf = BytesIO()
    pdf.output(buf)
    return buf.getvalue()


def _line(pdf: FPDF, height: float, text: str) -> None:
    pdf.multi_cell(0, height, text, new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def _safe_text(text: str, pdf: FPDF) -> str:
    if pdf.is_ttf_font:
        return text
    # Core fonts only cover latin-1
    return text.encode("latin-1", errors="replace").decode("latin-1")


def parse_html_to_lines(body_html: str) -> list[tuple[str, str]]:
    """Parse simple HTML into (type, text) pairs."""
    lines: list[tuple[str, str]] = []
    current = "text"
    for part in re.split(rf"(</?(?:{_BLOCK_TAG})>)", body_html):
        part = part.strip()
        if not part:
            continue
        tag_match = re.fullmatch(rf"<(/?)({_BLOCK_TAG})>", part)
        if not tag_match:
            text = _strip_html(part)
            if text:
                lines.append((current, text))
            continue

        closing = tag_match.group(1) == "/"
        tag = tag_match.group(2).rstrip("/").strip()
        if tag == "br":
            lines.append(("break", ""))
        elif closing:
            if tag in ("ul", "ol"):
                lines.append(("break", ""))
            current = "text"
        elif tag in _HEADING_STYLE:
            current = tag
        elif tag == "li":
            current = "bullet"
        else:
            current = "text"
    return lines


def _strip_html(text: str) -> str:
    text = re.sub(r"<[^>]+>", " ", text)
    return re.sub(r"\s+", " ", html.unescape(text)).strip()
