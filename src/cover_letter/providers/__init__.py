"""Provider registry and API-key classification."""

from cover_letter.providers.classifier import FALLBACK_PROVIDER, classify
from cover_letter.providers.registry import (
    AuthStyle,
    ProviderDescriptor,
    ProviderRegistry,
    WireFormat,
    build_default_registry,
)

__all__ = [
    "AuthStyle",
    "FALLBACK_PROVIDER",
    "ProviderDescriptor",
    "ProviderRegistry",
    "WireFormat",
    "build_default_registry",
    "classify",
]
