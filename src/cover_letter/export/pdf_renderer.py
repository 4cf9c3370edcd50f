"""PDF rendering of laid-out documents using fpdf2 (pure Python, no system deps)."""

from __future__ import annotations

import logging

from fpdf import FPDF

from cover_letter.export.layout import Document, Measure, PageGeometry, layout

logger = logging.getLogger(__name__)

# Core PDF fonts only cover latin-1; map the typography LLMs like to emit.
_TYPOGRAPHY = str.maketrans(
    {
        "\u2018": "'",
        "\u2019": "'",
        "\u201c": '"',
        "\u201d": '"',
        "\u2013": "-",
        "\u2014": "-",
        "\u2022": "-",
        "\u00a0": " ",
        "\u2026": "...",
    }
)


def core_font_text(text: str) -> str:
    """Reduce text to what a built-in (latin-1) font can encode."""
    text = text.translate(_TYPOGRAPHY)
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _new_pdf(geometry: PageGeometry) -> FPDF:
    pdf = FPDF(
        orientation="P",
        unit="mm",
        format=(geometry.page_width, geometry.page_height),
    )
    pdf.set_auto_page_break(auto=False)
    pdf.set_margins(geometry.margin_left, geometry.margin_top, geometry.margin_right)
    pdf.set_font(geometry.font_family, size=geometry.font_size)
    return pdf


def fpdf_measure(geometry: PageGeometry) -> Measure:
    """Width function (mm) backed by fpdf2's metrics for the geometry's font."""
    pdf = _new_pdf(geometry)

    def measure(text: str) -> float:
        return pdf.get_string_width(core_font_text(text))

    return measure


def render_pdf(document: Document) -> bytes:
    """Draw every laid-out line at its position, one PDF page per layout page."""
    pdf = _new_pdf(document.geometry)
    for page in document.pages:
        pdf.add_page()
        for line in page.lines:
            if line.text:
                pdf.text(line.x, line.y, core_font_text(line.text))
    logger.debug(
        "Rendered %d page(s), %d line(s)",
        document.page_count,
        sum(document.line_counts()),
    )
    return bytes(pdf.output())


def render_cover_letter_pdf(
    text: str, geometry: PageGeometry | None = None
) -> tuple[Document, bytes]:
    """Lay out letter text with fpdf2 metrics and render it."""
    geometry = geometry or PageGeometry()
    document = layout(text, geometry, fpdf_measure(geometry))
    return document, render_pdf(document)
