"""Source-text extraction for job postings and resumes."""

from cover_letter.parsers.source_text import clean_plain_text, load_source_text

__all__ = ["clean_plain_text", "load_source_text"]
