"""Exception hierarchy shared across the generator."""

from __future__ import annotations


class CoverLetterError(Exception):
    """Base class for every error raised by cover_letter."""


class ConfigurationError(CoverLetterError, ValueError):
    """Missing credential, incomplete profile, or invalid config value."""


class ProviderError(CoverLetterError):
    """Failure attributed to a specific language-model provider."""

    def __init__(self, provider_name: str, message: str):
        super().__init__(f"{provider_name}: {message}")
        self.provider_name = provider_name


class UnknownProviderError(ProviderError):
    def __init__(self, provider_id: str):
        super().__init__(provider_id, f"Unknown provider: {provider_id}")
        self.provider_id = provider_id


class ProviderHTTPError(ProviderError):
    """Provider answered with a non-2xx status."""

    def __init__(self, provider_name: str, status_code: int, body: str):
        CoverLetterError.__init__(
            self, f"{provider_name} API error ({status_code}): {body}"
        )
        self.provider_name = provider_name
        self.status_code = status_code
        self.body = body


class ProviderRequestError(ProviderError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""


class MalformedResponseError(ProviderError):
    """Response body present but not in the expected shape."""


class CoverLetterGenerationError(CoverLetterError):
    pass


class ResumeParseError(CoverLetterError):
    pass


class LayoutInputError(CoverLetterError, ValueError):
    """Text or page geometry that cannot be laid out."""
