"""HTTP clients for language-model providers."""

from cover_letter.clients.llm_client import LLMClient, build_request, decode_response

__all__ = ["LLMClient", "build_request", "decode_response"]
