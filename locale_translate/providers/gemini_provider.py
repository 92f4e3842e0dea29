"""Google Gemini translation provider using API key authentication."""

from typing import Any

from locale_translate.providers.base import BaseHttpProvider, HttpRequest


_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiProvider(BaseHttpProvider):
    """Translation backend for the Gemini ``generateContent`` endpoint.

    Authenticates with an ``x-goog-api-key`` header so the key never
    appears in request URLs or logs.
    """

    name = "gemini"
    display_name = "Gemini"
    default_model = "gemini-2.5-flash"

    def build_request(self, system_instruction: str, prompt: str) -> HttpRequest:
        """Build the generateContent request body."""
        return HttpRequest(
            url=f"{_BASE_URL}/{self.model}:generateContent",
            headers={
                "x-goog-api-key": self.options.api_key,
                "Content-Type": "application/json",
            },
            body={
                "contents": [{"role": "user", "parts": [{"text": prompt}]}],
                "systemInstruction": {"parts": [{"text": system_instruction}]},
            },
        )

    def extract_text(self, payload: dict[str, Any]) -> str | None:
        """Read ``candidates[0].content.parts[0].text``."""
        candidates = payload.get("candidates") or []
        if not candidates:
            return None
        parts = candidates[0].get("content", {}).get("parts") or []
        if not parts:
            return None
        text = parts[0].get("text")
        return text if isinstance(text, str) else None
