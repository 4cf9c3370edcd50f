"""Utility to extract JSON from LLM responses."""

from __future__ import annotations

import json
import re

_FENCE = re.compile(r"```(?:json|JSON)?[ \t]*\n?")


def strip_code_fences(text: str) -> str:
    """Remove every Markdown code-fence marker (```json, ```) from text."""
    return _FENCE.sub("", text).strip()


def extract_json(text: str) -> dict | list:
    """Extract JSON from LLM response, handling ```json blocks.

    Tries in order:
    1. Direct json.loads on the full text
    2. Strip fenced code block markers and parse
    3. Find first '{' to last '}' and parse
    4. Find first '[' to last ']' and parse (JSON array)
    """
    text = (text or "").strip()

    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        pass

    stripped = strip_code_fences(text)
    if stripped != text:
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            pass

    for opener, closer in (("{", "}"), ("[", "]")):
        result = _extract_between(stripped, opener, closer)
        if result is not None:
            return result

    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")


def _extract_between(text: str, opener: str, closer: str) -> dict | list | None:
    start = text.find(opener)
    end = text.rfind(closer)
    if start != -1 and end > start:
        try:
            return json.loads(text[start : end + 1])
        except json.JSONDecodeError:
            pass
    return None
