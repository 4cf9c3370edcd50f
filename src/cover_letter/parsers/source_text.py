"""Plain-text extraction from job postings and resumes on disk."""

from __future__ import annotations

import re
from pathlib import Path

from cover_letter.utils.text import normalize_pdf_text


def load_source_text(file_path: str | Path) -> str:
    """Read a PDF, DOCX, TXT or MD file and return clean plain text."""
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        text = _parse_pdf(path)
        if not text:
            raise ValueError(
                f"Could not extract text from {path.name}. "
                "The file may be image-based or encrypted."
            )
        return text
    elif suffix == ".docx":
        return _parse_docx(path)
    elif suffix in (".txt", ".md"):
        return clean_plain_text(path.read_text(encoding="utf-8"))
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}")


def clean_plain_text(text: str) -> str:
    """Strip BOM/zero-width artifacts, trailing spaces and blank-line runs."""
    text = text.lstrip("\ufeff")
    text = re.sub(r"[\u200b\u200c\u200d\u2060]", "", text)
    text = "\n".join(line.rstrip() for line in text.splitlines())
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _parse_pdf(path: Path) -> str:
    import fitz  # pymupdf

    doc = fitz.open(str(path))
    try:
        pages = [page.get_text() for page in doc]
    finally:
        doc.close()
    return normalize_pdf_text("\n\n".join(pages))


def _parse_docx(path: Path) -> str:
    from docx import Document

    doc = Document(str(path))
    return "\n".join(p.text for p in doc.paragraphs if p.text.strip())
