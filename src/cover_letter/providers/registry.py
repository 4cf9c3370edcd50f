"""Static table of supported chat-completion providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from cover_letter.errors import UnknownProviderError


class AuthStyle(str, Enum):
    BEARER = "bearer"
    API_KEY_HEADER = "api-key-header"
    QUERY_PARAMETER = "query-parameter"


class WireFormat(str, Enum):
    CHAT = "chat"  # OpenAI-compatible chat/completions
    TURN = "turn"  # Anthropic messages
    CONTENT = "content"  # Gemini generateContent


@dataclass(frozen=True)
class ProviderDescriptor:
    id: str
    display_name: str
    endpoint_template: str
    default_model: str
    credential_prefix: str
    auth_style: AuthStyle
    wire_format: WireFormat
    extra_headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "extra_headers", MappingProxyType(dict(self.extra_headers))
        )


@dataclass(frozen=True)
class ProviderSummary:
    id: str
    display_name: str
    default_model: str


class ProviderRegistry:
    """Read-only lookup of provider descriptors, keyed by id.

    Iteration follows declaration order. The registry is never mutated after
    construction, so one instance can be shared between concurrent requests.
    """

    def __init__(self, descriptors: Iterable[ProviderDescriptor]):
        table: dict[str, ProviderDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.id in table:
                raise ValueError(f"Duplicate provider id: {descriptor.id}")
            table[descriptor.id] = descriptor
        self._table: Mapping[str, ProviderDescriptor] = MappingProxyType(table)

    def get(self, provider_id: str) -> ProviderDescriptor | None:
        return self._table.get(provider_id)

    def require(self, provider_id: str) -> ProviderDescriptor:
        """Return the descriptor or raise; there is no fallback provider here."""
        descriptor = self._table.get(provider_id)
        if descriptor is None:
            raise UnknownProviderError(provider_id)
        return descriptor

    def list(self) -> list[ProviderSummary]:
        return [
            ProviderSummary(d.id, d.display_name, d.default_model)
            for d in self._table.values()
        ]

    def __iter__(self) -> Iterator[ProviderDescriptor]:
        return iter(self._table.values())

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._table

    def __len__(self) -> int:
        return len(self._table)


def matches_key_format(descriptor: ProviderDescriptor, credential: str) -> bool:
    """Loose sanity check of a key against the provider's known prefix."""
    if not descriptor.credential_prefix:
        return len(credential) > 10
    return credential.startswith(descriptor.credential_prefix)


PROVIDERS: tuple[ProviderDescriptor, ...] = (
    ProviderDescriptor(
        id="openai",
        display_name="OpenAI",
        endpoint_template="https://api.openai.com/v1/chat/completions",
        default_model="gpt-4o-mini",
        credential_prefix="sk-",
        auth_style=AuthStyle.BEARER,
        wire_format=WireFormat.CHAT,
    ),
    ProviderDescriptor(
        id="openrouter",
        display_name="OpenRouter",
        endpoint_template="https://openrouter.ai/api/v1/chat/completions",
        default_model="openai/gpt-4o-mini",
        credential_prefix="sk-or-",
        auth_style=AuthStyle.BEARER,
        wire_format=WireFormat.CHAT,
        extra_headers={
            "HTTP-Referer": "https://github.com/cover-letter-generator",
            "X-Title": "Cover Letter Generator",
        },
    ),
    ProviderDescriptor(
        id="groq",
        display_name="Groq",
        endpoint_template="https://api.groq.com/openai/v1/chat/completions",
        default_model="llama-3.1-70b-versatile",
        credential_prefix="gsk_",
        auth_style=AuthStyle.BEARER,
        wire_format=WireFormat.CHAT,
    ),
    ProviderDescriptor(
        id="anthropic",
        display_name="Anthropic (Claude)",
        endpoint_template="https://api.anthropic.com/v1/messages",
        default_model="claude-3-haiku-20240307",
        credential_prefix="sk-ant-",
        auth_style=AuthStyle.API_KEY_HEADER,
        wire_format=WireFormat.TURN,
    ),
    ProviderDescriptor(
        id="gemini",
        display_name="Google Gemini",
        endpoint_template=(
            "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
        ),
        default_model="gemini-1.5-flash",
        credential_prefix="AI",
        auth_style=AuthStyle.QUERY_PARAMETER,
        wire_format=WireFormat.CONTENT,
    ),
    ProviderDescriptor(
        id="deepseek",
        display_name="DeepSeek",
        endpoint_template="https://api.deepseek.com/chat/completions",
        default_model="deepseek-chat",
        credential_prefix="sk-",
        auth_style=AuthStyle.BEARER,
        wire_format=WireFormat.CHAT,
    ),
    ProviderDescriptor(
        id="together",
        display_name="Together.ai",
        endpoint_template="https://api.together.xyz/v1/chat/completions",
        default_model="meta-llama/Llama-3-70b-chat-hf",
        credential_prefix="",
        auth_style=AuthStyle.BEARER,
        wire_format=WireFormat.CHAT,
    ),
    ProviderDescriptor(
        id="xai",
        display_name="xAI (Grok)",
        endpoint_template="https://api.x.ai/v1/chat/completions",
        default_model="grok-beta",
        credential_prefix="xai-",
        auth_style=AuthStyle.BEARER,
        wire_format=WireFormat.CHAT,
    ),
)


def build_default_registry() -> ProviderRegistry:
    return ProviderRegistry(PROVIDERS)
