"""Guess a provider from the shape of an API key.

Rules are evaluated top to bottom and the first match wins. Several keys
match more than one rule (``sk-ant-...`` also starts with ``sk-``), so the
order is part of the contract: longer, vendor-specific prefixes come first.

Known ambiguity: OpenAI and DeepSeek both issue ``sk-`` keys. Such keys
resolve to OpenAI; DeepSeek users must select the provider explicitly.
"""

from __future__ import annotations

import re
from typing import Callable, NamedTuple

from cover_letter.providers.registry import ProviderRegistry

FALLBACK_PROVIDER = "openai"

_GEMINI_BARE_KEY = re.compile(r"[A-Za-z0-9]{39}")


class Rule(NamedTuple):
    name: str
    matches: Callable[[str], bool]
    provider_id: str


RULES: tuple[Rule, ...] = (
    Rule("too-short", lambda key: len(key) < 5, FALLBACK_PROVIDER),
    Rule("anthropic-prefix", lambda key: key.startswith("sk-ant-"), "anthropic"),
    Rule("openrouter-prefix", lambda key: key.startswith("sk-or-"), "openrouter"),
    Rule("groq-prefix", lambda key: key.startswith("gsk_"), "groq"),
    Rule("xai-prefix", lambda key: key.startswith("xai-"), "xai"),
    Rule("google-prefix", lambda key: key.startswith("AIzaSy"), "gemini"),
    Rule(
        "google-bare-key",
        lambda key: _GEMINI_BARE_KEY.fullmatch(key) is not None,
        "gemini",
    ),
    Rule("generic-sk-prefix", lambda key: key.startswith("sk-"), "openai"),
    Rule(
        "long-unhyphenated",
        lambda key: len(key) > 40 and "-" not in key,
        "together",
    ),
)


def classify(credential: str | None) -> str:
    """Return a provider id for ``credential``. Never raises."""
    key = credential or ""
    for rule in RULES:
        if rule.matches(key):
            return rule.provider_id
    return FALLBACK_PROVIDER


def provider_name_for_key(credential: str | None, registry: ProviderRegistry) -> str:
    descriptor = registry.get(classify(credential))
    return descriptor.display_name if descriptor else "Unknown"
