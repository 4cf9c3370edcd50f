"""Layout and PDF export for cover letters."""
from cover_letter.export.layout import (
    Document,
    LayoutLine,
    LayoutPage,
    PageGeometry,
    layout,
)
from cover_letter.export.pdf_renderer import (
    fpdf_measure,
    render_cover_letter_pdf,
    render_pdf,
)

__all__ = [
    "Document",
    "LayoutLine",
    "LayoutPage",
    "PageGeometry",
    "fpdf_measure",
    "layout",
    "render_cover_letter_pdf",
    "render_pdf",
]
