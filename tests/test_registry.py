"""Tests for the provider registry."""

import pytest

from cover_letter.errors import UnknownProviderError
from cover_letter.providers.registry import (
    PROVIDERS,
    AuthStyle,
    ProviderDescriptor,
    ProviderRegistry,
    WireFormat,
    build_default_registry,
    matches_key_format,
)


class TestProviderRegistry:
    def test_default_registry_declaration_order(self):
        ids = [s.id for s in build_default_registry().list()]
        assert ids == [
            "openai",
            "openrouter",
            "groq",
            "anthropic",
            "gemini",
            "deepseek",
            "together",
            "xai",
        ]

    def test_list_exposes_name_and_default_model(self):
        summaries = {s.id: s for s in build_default_registry().list()}
        assert summaries["anthropic"].display_name == "Anthropic (Claude)"
        assert summaries["gemini"].default_model == "gemini-1.5-flash"

    def test_get_unknown_returns_none(self):
        assert build_default_registry().get("nope") is None

    def test_require_unknown_raises(self):
        with pytest.raises(UnknownProviderError, match="nope"):
            build_default_registry().require("nope")

    def test_contains_and_len(self):
        registry = build_default_registry()
        assert "groq" in registry
        assert "nope" not in registry
        assert len(registry) == len(PROVIDERS)

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            ProviderRegistry([PROVIDERS[0], PROVIDERS[0]])

    def test_wire_formats(self):
        registry = build_default_registry()
        assert registry.require("openai").wire_format is WireFormat.CHAT
        assert registry.require("anthropic").wire_format is WireFormat.TURN
        assert registry.require("gemini").wire_format is WireFormat.CONTENT
        assert registry.require("gemini").auth_style is AuthStyle.QUERY_PARAMETER
        assert "{model}" in registry.require("gemini").endpoint_template

    def test_descriptor_is_immutable(self):
        descriptor = build_default_registry().require("openrouter")
        with pytest.raises(AttributeError):
            descriptor.id = "changed"
        with pytest.raises(TypeError):
            descriptor.extra_headers["X-Title"] = "changed"

    def test_extra_headers_default_empty(self):
        descriptor = ProviderDescriptor(
            id="local",
            display_name="Local",
            endpoint_template="http://localhost/v1/chat/completions",
            default_model="m",
            credential_prefix="",
            auth_style=AuthStyle.BEARER,
            wire_format=WireFormat.CHAT,
        )
        assert dict(descriptor.extra_headers) == {}


class TestMatchesKeyFormat:
    def test_prefix_match(self):
        registry = build_default_registry()
        assert matches_key_format(registry.require("groq"), "gsk_abcdef")
        assert not matches_key_format(registry.require("groq"), "sk-abcdef")

    def test_empty_prefix_requires_length(self):
        together = build_default_registry().require("together")
        assert matches_key_format(together, "a" * 11)
        assert not matches_key_format(together, "a" * 10)
