"""Paginated layout of cover-letter prose onto fixed-size pages.

The layout is a pure function of its inputs: the text, a ``PageGeometry``
and a ``measure`` callable returning the rendered width (in mm) of a string
at the geometry's font size. The renderer only draws what is produced here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable

from cover_letter.errors import LayoutInputError

MM_PER_POINT = 25.4 / 72

Measure = Callable[[str], float]

# NUL and C0 controls other than tab/newline/carriage return
_BINARY_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")
_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n")


@dataclass(frozen=True)
class PageGeometry:
    """Page size, margins and type settings, in millimetres and points.

    Defaults are US Letter with 1-inch margins and 12pt Times. ``line_height``
    and ``paragraph_spacing`` drive page-break decisions; ``line_spacing_factor``
    only controls where lines are drawn inside a paragraph block.
    """

    page_width: float = 215.9
    page_height: float = 279.4
    margin_left: float = 25.4
    margin_right: float = 25.4
    margin_top: float = 25.4
    margin_bottom: float = 25.4
    font_family: str = "Times"
    font_size: float = 12.0
    line_height: float = 7.0
    paragraph_spacing: float = 5.0
    line_spacing_factor: float = 1.5

    def __post_init__(self) -> None:
        if self.font_size <= 0:
            raise LayoutInputError(f"font_size must be positive, got {self.font_size}")
        if self.line_height <= 0:
            raise LayoutInputError(f"line_height must be positive, got {self.line_height}")
        if self.paragraph_spacing < 0:
            raise LayoutInputError(
                f"paragraph_spacing must not be negative, got {self.paragraph_spacing}"
            )
        if self.content_width <= 0:
            raise LayoutInputError("margin_left + margin_right leave no content width")
        if self.lines_per_page < 1:
            raise LayoutInputError("margin_top + margin_bottom leave no room for a line")

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def bottom_boundary(self) -> float:
        return self.page_height - self.margin_bottom

    @property
    def render_line_spacing(self) -> float:
        return self.font_size * MM_PER_POINT * self.line_spacing_factor

    @property
    def lines_per_page(self) -> int:
        return int((self.bottom_boundary - self.margin_top) // self.line_height)


@dataclass(frozen=True)
class LayoutLine:
    text: str
    x: float
    y: float


@dataclass
class LayoutPage:
    lines: list[LayoutLine] = field(default_factory=list)
    cursor: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass
class Document:
    """Ordered pages ready for rendering. Never empty."""

    pages: list[LayoutPage]
    geometry: PageGeometry

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def line_counts(self) -> list[int]:
        return [len(page.lines) for page in self.pages]

    def text(self) -> str:
        return "\n".join(line.text for page in self.pages for line in page.lines)


def split_paragraphs(text: str) -> list[str]:
    """Split on blank lines, dropping paragraphs that are empty once trimmed."""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return [p.strip() for p in _PARAGRAPH_BREAK.split(normalized) if p.strip()]


def wrap_paragraph(paragraph: str, width: float, measure: Measure) -> list[str]:
    """Greedy word wrap. Single newlines inside a paragraph are hard breaks."""
    lines: list[str] = []
    for source_line in paragraph.split("\n"):
        words = source_line.split()
        if not words:
            lines.append("")
            continue
        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if measure(candidate) <= width:
                current = candidate
                continue
            if current:
                lines.append(current)
            if measure(word) <= width:
                current = word
            else:
                *pieces, current = _split_long_word(word, width, measure)
                lines.extend(pieces)
        lines.append(current)
    return lines


def _split_long_word(word: str, width: float, measure: Measure) -> list[str]:
    pieces: list[str] = []
    current = ""
    for char in word:
        if current and measure(current + char) > width:
            pieces.append(current)
            current = char
        else:
            current += char
    pieces.append(current)
    return pieces


def layout(text: str, geometry: PageGeometry, measure: Measure) -> Document:
    """Lay out prose into pages of positioned, wrapped lines."""
    if not isinstance(text, str):
        raise LayoutInputError(f"Expected text, got {type(text).__name__}")
    if _BINARY_CHARS.search(text):
        raise LayoutInputError("Text contains binary control characters")

    top = geometry.margin_top
    pages = [LayoutPage(cursor=top)]

    for paragraph in split_paragraphs(text):
        lines = wrap_paragraph(paragraph, geometry.content_width, measure)
        for chunk in _page_chunks(lines, geometry):
            page = pages[-1]
            block_height = len(chunk) * geometry.line_height
            if page.cursor + block_height > geometry.bottom_boundary and not page.is_empty:
                page = LayoutPage(cursor=top)
                pages.append(page)
            _place_block(page, chunk, geometry)

    return Document(pages=pages, geometry=geometry)


def _page_chunks(lines: list[str], geometry: PageGeometry) -> list[list[str]]:
    """Keep a paragraph whole unless it is taller than a full page."""
    capacity = geometry.lines_per_page
    if len(lines) <= capacity:
        return [lines]
    return [lines[i : i + capacity] for i in range(0, len(lines), capacity)]


def _place_block(page: LayoutPage, lines: list[str], geometry: PageGeometry) -> None:
    spacing = geometry.render_line_spacing
    for i, line in enumerate(lines):
        page.lines.append(
            LayoutLine(text=line, x=geometry.margin_left, y=page.cursor + i * spacing)
        )
    page.cursor += len(lines) * geometry.line_height + geometry.paragraph_spacing
