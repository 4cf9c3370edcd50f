"""Async chat-completion client for every provider in the registry.

Requests are encoded and responses decoded per the provider's wire format;
the provider is either named explicitly (``call``) or inferred from the key
(``call_auto_detected``). One POST per call, no retries.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Sequence
from urllib.parse import urlencode

import httpx

from cover_letter.errors import (
    MalformedResponseError,
    ProviderHTTPError,
    ProviderRequestError,
)
from cover_letter.models.message import Message
from cover_letter.providers.classifier import classify
from cover_letter.providers.registry import (
    AuthStyle,
    ProviderDescriptor,
    ProviderRegistry,
    WireFormat,
    build_default_registry,
)

logger = logging.getLogger(__name__)

MAX_OUTPUT_TOKENS = 2048
ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True)
class PreparedRequest:
    url: str
    headers: dict[str, str]
    body: dict[str, Any]


def build_request(
    provider: ProviderDescriptor,
    credential: str,
    messages: Sequence[Message],
    temperature: float,
    model: str | None = None,
    max_output_tokens: int = MAX_OUTPUT_TOKENS,
) -> PreparedRequest:
    """Encode URL, headers and JSON body for one provider call."""
    selected_model = model or provider.default_model
    url = provider.endpoint_template
    headers = {"Content-Type": "application/json"}

    if provider.auth_style is AuthStyle.BEARER:
        headers["Authorization"] = f"Bearer {credential}"
    elif provider.auth_style is AuthStyle.API_KEY_HEADER:
        headers["x-api-key"] = credential
        headers["anthropic-version"] = ANTHROPIC_VERSION
    elif provider.auth_style is AuthStyle.QUERY_PARAMETER:
        url = url.replace("{model}", selected_model)
        url = f"{url}?{urlencode({'key': credential})}"

    headers.update(provider.extra_headers)

    if provider.wire_format is WireFormat.CHAT:
        body = _chat_body(messages, selected_model, temperature)
    elif provider.wire_format is WireFormat.TURN:
        body = _turn_body(messages, selected_model, temperature, max_output_tokens)
    else:
        body = _content_body(messages, temperature, max_output_tokens)

    return PreparedRequest(url=url, headers=headers, body=body)


def _chat_body(messages: Sequence[Message], model: str, temperature: float) -> dict:
    return {
        "model": model,
        "messages": [m.model_dump() for m in messages],
        "temperature": temperature,
    }


def _turn_body(
    messages: Sequence[Message], model: str, temperature: float, max_tokens: int
) -> dict:
    system = next((m.content for m in messages if m.role == "system"), None)
    body: dict[str, Any] = {
        "model": model,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "messages": [
            {
                "role": "assistant" if m.role == "assistant" else "user",
                "content": m.content,
            }
            for m in messages
            if m.role != "system"
        ],
    }
    if system is not None:
        body["system"] = system
    return body


def _content_body(
    messages: Sequence[Message], temperature: float, max_tokens: int
) -> dict:
    return {
        "contents": [
            {
                "role": "model" if m.role == "assistant" else "user",
                "parts": [{"text": m.content}],
            }
            for m in messages
        ],
        "generationConfig": {
            "temperature": temperature,
            "maxOutputTokens": max_tokens,
        },
    }


def decode_response(provider: ProviderDescriptor, payload: Any) -> str:
    """Pull the generated text out of a decoded response body.

    A missing path (e.g. safety-filtered output) yields ``""``.
    """
    if provider.wire_format is WireFormat.CHAT:
        path: tuple[str | int, ...] = ("choices", 0, "message", "content")
    elif provider.wire_format is WireFormat.TURN:
        path = ("content", 0, "text")
    else:
        path = ("candidates", 0, "content", "parts", 0, "text")

    node = payload
    for step in path:
        if isinstance(step, int):
            if not isinstance(node, list) or len(node) <= step:
                return ""
        elif not isinstance(node, dict) or step not in node:
            return ""
        node = node[step]
    return node if isinstance(node, str) else ""


class LLMClient:
    """Async multi-provider chat client."""

    def __init__(
        self,
        registry: ProviderRegistry | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.registry = registry or build_default_registry()
        self.timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
        self._transport = transport

    async def call(
        self,
        provider_id: str,
        credential: str,
        messages: Sequence[Message],
        temperature: float = 0.5,
        model: str | None = None,
    ) -> str:
        """Send ``messages`` to an explicitly chosen provider and return its text."""
        provider = self.registry.require(provider_id)
        if not 0.0 <= temperature <= 1.0:
            raise ValueError(f"temperature must be within 0..1, got {temperature}")

        request = build_request(provider, credential, messages, temperature, model)
        logger.debug(
            "LLM call: provider=%s model=%s messages=%d",
            provider.id,
            model or provider.default_model,
            len(messages),
        )
        payload = await self._post(provider, request)
        text = decode_response(provider, payload)
        if not text:
            logger.warning("%s returned no text content", provider.display_name)
        return text

    async def call_auto_detected(
        self,
        credential: str,
        messages: Sequence[Message],
        temperature: float = 0.5,
        model: str | None = None,
    ) -> str:
        """Like ``call`` with the provider inferred from the key's shape."""
        provider_id = classify(credential)
        logger.debug("Detected provider %s from API key", provider_id)
        return await self.call(provider_id, credential, messages, temperature, model)

    async def _post(self, provider: ProviderDescriptor, request: PreparedRequest) -> Any:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    request.url,
                    headers=request.headers,
                    content=json.dumps(request.body).encode("utf-8"),
                )
        except httpx.HTTPError as e:
            logger.error("%s request failed", provider.display_name, exc_info=True)
            raise ProviderRequestError(provider.display_name, str(e) or type(e).__name__) from e
        except UnicodeEncodeError as e:
            # Header values must be ASCII; pasted keys sometimes carry invisible characters
            raise ProviderRequestError(
                provider.display_name, "API key contains non-ASCII characters"
            ) from e

        if not response.is_success:
            logger.error(
                "%s API error: status=%d", provider.display_name, response.status_code
            )
            raise ProviderHTTPError(provider.display_name, response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                provider.display_name, f"Response body is not JSON: {response.text[:200]}"
            ) from e
