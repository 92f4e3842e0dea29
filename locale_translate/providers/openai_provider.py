"""OpenAI chat-completions translation provider."""

from typing import Any

from locale_translate.providers.base import BaseHttpProvider, HttpRequest


_API_URL = "https://api.openai.com/v1/chat/completions"


class OpenAIProvider(BaseHttpProvider):
    """Translation backend for the OpenAI chat completions API."""

    name = "openai"
    display_name = "ChatGPT"
    default_model = "gpt-4o-mini"

    def build_request(self, system_instruction: str, prompt: str) -> HttpRequest:
        """Build the chat completions request body."""
        return HttpRequest(
            url=_API_URL,
            headers={
                "Authorization": f"Bearer {self.options.api_key}",
                "Content-Type": "application/json",
            },
            body={
                "model": self.model,
                "messages": [
                    {"role": "system", "content": system_instruction},
                    {"role": "user", "content": prompt},
                ],
                "temperature": 0.3,
            },
        )

    def extract_text(self, payload: dict[str, Any]) -> str | None:
        """Read ``choices[0].message.content``."""
        choices = payload.get("choices") or []
        if not choices:
            return None
        content = choices[0].get("message", {}).get("content")
        return content if isinstance(content, str) else None
