"""Text clean-up helpers: filename tokens and extracted-document whitespace."""

from __future__ import annotations

import re
from datetime import date

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")
_NON_NAME_CHARS = re.compile(r"[^A-Za-z0-9\s]")
_WHITESPACE_RUN = re.compile(r"\s+")


def sanitize_token(value: object, fallback: str) -> str:
    """Replace every character outside ``[A-Za-z0-9]`` with ``_``.

    ``None``, non-strings and blank strings yield ``fallback``.
    """
    if not isinstance(value, str) or not value.strip():
        return fallback
    return _NON_ALNUM.sub("_", value.strip())


def sanitize_name(name: str) -> str:
    """Drop punctuation from a person's name and join the words with ``_``."""
    return _WHITESPACE_RUN.sub("_", _NON_NAME_CHARS.sub("", name))


def build_output_filename(name: str, company: str, role: str, today: date | None = None) -> str:
    """``CoverLetter_<name>_<company>_<role>_<YYYYMMDD>.pdf``"""
    stamp = (today or date.today()).strftime("%Y%m%d")
    return f"CoverLetter_{sanitize_name(name)}_{company}_{role}_{stamp}.pdf"


def normalize_pdf_text(text: str) -> str:
    """Collapse whitespace runs and blank-line runs in PDF-extracted text."""
    text = re.sub(r"[ \t\f\v\u00a0]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{2,}", "\n\n", text)
    return text.strip()
