"""Anthropic Messages API translation provider."""

from typing import Any

from locale_translate.providers.base import BaseHttpProvider, HttpRequest


_API_URL = "https://api.anthropic.com/v1/messages"
_API_VERSION = "2023-06-01"
_MAX_TOKENS = 4096


class AnthropicProvider(BaseHttpProvider):
    """Translation backend for the Anthropic Messages API."""

    name = "anthropic"
    display_name = "Anthropic"
    default_model = "claude-3-5-haiku-latest"

    def build_request(self, system_instruction: str, prompt: str) -> HttpRequest:
        """Build the messages request body."""
        return HttpRequest(
            url=_API_URL,
            headers={
                "x-api-key": self.options.api_key,
                "anthropic-version": _API_VERSION,
                "Content-Type": "application/json",
            },
            body={
                "model": self.model,
                "max_tokens": _MAX_TOKENS,
                "system": system_instruction,
                "messages": [{"role": "user", "content": prompt}],
            },
        )

    def extract_text(self, payload: dict[str, Any]) -> str | None:
        """Concatenate the text blocks of ``content``."""
        blocks = payload.get("content") or []
        texts = [
            block.get("text", "")
            for block in blocks
            if isinstance(block, dict) and block.get("type", "text") == "text"
        ]
        joined = "".join(texts)
        return joined or None
