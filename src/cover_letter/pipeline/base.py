"""Shared plumbing for single-prompt pipeline stages."""

from __future__ import annotations

from cover_letter.clients.llm_client import LLMClient
from cover_letter.models.message import Message


class PromptStage:
    """Sends one user prompt through the client.

    With ``provider=None`` the provider is inferred from the API key;
    otherwise the named provider is used as-is.
    """

    temperature: float = 0.5

    def __init__(
        self,
        llm: LLMClient,
        *,
        provider: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
    ):
        self.llm = llm
        self.provider = provider
        self.model = model
        if temperature is not None:
            self.temperature = temperature

    async def _complete(self, prompt: str, credential: str) -> str:
        messages = [Message.user(prompt)]
        if self.provider is None:
            return await self.llm.call_auto_detected(
                credential, messages, self.temperature, self.model
            )
        return await self.llm.call(
            self.provider, credential, messages, self.temperature, self.model
        )
